from fintrack_ai.cache.store import InMemoryCache

from fakes import FakeClock


def test_entries_expire_after_ttl(clock: FakeClock) -> None:
    cache = InMemoryCache(clock=clock)
    cache.put("key", "value", 10)

    assert cache.get("key") == "value"
    assert cache.has("key")

    clock.now += 10
    assert cache.get("key", "missing") == "missing"
    assert not cache.has("key")
    assert len(cache) == 0


def test_non_positive_ttl_forgets_key() -> None:
    cache = InMemoryCache()
    cache.put("key", "value", 60)
    cache.put("key", "other", 0)
    assert not cache.has("key")


def test_forget_and_clear() -> None:
    cache = InMemoryCache()
    cache.put("a", 1, 60)
    cache.put("b", 2, 60)
    cache.forget("a")
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0
