import pytest

from fintrack_ai.cache.store import InMemoryCache
from fintrack_ai.llm.client import AllModelsFailedError, MultiModelClient
from fintrack_ai.llm.rate_limit import RateLimitTracker

from fakes import FakeClock, FakeProvider

MODELS = ("primary", "secondary", "tertiary")


@pytest.fixture
def tracker(clock: FakeClock) -> RateLimitTracker:
    return RateLimitTracker(InMemoryCache(clock=clock), default_cooldown=2)


def test_first_model_answers(tracker: RateLimitTracker) -> None:
    provider = FakeProvider({"primary": "Makanan", "secondary": "Belanja"})
    client = MultiModelClient(provider, MODELS, tracker)

    response = client.generate("system", "nasi goreng", temperature=0.2, max_tokens=50)

    assert response.text == "Makanan"
    assert response.model == "primary"
    assert provider.models_called == ["primary"]
    assert provider.calls[0]["temperature"] == 0.2
    assert provider.calls[0]["max_tokens"] == 50


def test_falls_back_and_limits_rate_limited_model(tracker: RateLimitTracker, clock: FakeClock) -> None:
    provider = FakeProvider({"primary": Exception("Rate limit reached"), "secondary": "Belanja"})
    client = MultiModelClient(provider, MODELS, tracker)

    assert client.generate("system", "sepatu").model == "secondary"
    assert tracker.is_limited("primary")

    # Limited model is skipped without a request until the cooldown passes
    client.generate("system", "sepatu")
    assert provider.models_called == ["primary", "secondary", "secondary"]

    clock.now += 2
    client.generate("system", "sepatu")
    assert provider.models_called[-2:] == ["primary", "secondary"]


def test_other_errors_do_not_limit(tracker: RateLimitTracker) -> None:
    provider = FakeProvider({"primary": Exception("bad gateway"), "secondary": "Belanja"})
    client = MultiModelClient(provider, MODELS, tracker)

    assert client.generate("system", "sepatu").text == "Belanja"
    assert not tracker.is_limited("primary")


def test_empty_answer_moves_to_next_model(tracker: RateLimitTracker) -> None:
    provider = FakeProvider({"primary": "   ", "secondary": "Belanja"})
    client = MultiModelClient(provider, MODELS, tracker)

    assert client.generate("system", "sepatu").model == "secondary"


def test_all_models_failed(tracker: RateLimitTracker) -> None:
    provider = FakeProvider({})
    client = MultiModelClient(provider, MODELS, tracker)

    with pytest.raises(AllModelsFailedError) as excinfo:
        client.generate("system", "sepatu")

    assert excinfo.value.models == MODELS
    assert "tertiary" in str(excinfo.value.last_error)


def test_all_models_limited_makes_no_requests(tracker: RateLimitTracker) -> None:
    for model in MODELS:
        tracker.mark_limited(model, 60)
    provider = FakeProvider({"primary": "Makanan"})
    client = MultiModelClient(provider, MODELS, tracker)

    with pytest.raises(AllModelsFailedError):
        client.generate("system", "sepatu")
    assert provider.calls == []


def test_low_quota_headers_skip_model_next_time(tracker: RateLimitTracker) -> None:
    provider = FakeProvider(
        {"primary": "Makanan", "secondary": "Belanja"},
        headers={"x-ratelimit-limit-requests": "100", "x-ratelimit-remaining-requests": "1"},
    )
    client = MultiModelClient(provider, MODELS, tracker)

    assert client.generate("system", "a").model == "primary"
    assert client.generate("system", "b").model == "secondary"


def test_requires_models(tracker: RateLimitTracker) -> None:
    with pytest.raises(ValueError):
        MultiModelClient(FakeProvider({}), (), tracker)
