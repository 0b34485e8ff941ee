from unittest.mock import MagicMock

import pytest

from fintrack_ai.cache.store import InMemoryCache
from fintrack_ai.llm.rate_limit import RateLimitTracker, parse_reset_time

from fakes import FakeClock


@pytest.fixture
def tracker(clock: FakeClock) -> RateLimitTracker:
    return RateLimitTracker(InMemoryCache(clock=clock), default_cooldown=2)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2m59.56s", 180),
        ("7.66s", 8),
        ("1h", 3600),
        ("500ms", 5),
        ("30", 30),
        ("", 60),
        ("soon", 60),
        (None, 60),
    ],
)
def test_parse_reset_time(raw: str | None, expected: int) -> None:
    assert parse_reset_time(raw) == expected


def test_mark_limited_expires(tracker: RateLimitTracker, clock: FakeClock) -> None:
    tracker.mark_limited("model-a", 5)
    assert tracker.is_limited("model-a")
    assert not tracker.is_limited("model-b")

    clock.now += 5
    assert not tracker.is_limited("model-a")


def test_error_classification(tracker: RateLimitTracker) -> None:
    status_error = Exception("boom")
    status_error.status_code = 429  # type: ignore[attr-defined]

    assert tracker.is_rate_limit_error(status_error)
    assert tracker.is_rate_limit_error(Exception("Rate limit reached for model"))
    assert tracker.is_rate_limit_error(Exception("HTTP 429"))
    assert not tracker.is_rate_limit_error(Exception("connection reset"))
    assert not tracker.is_rate_limit_error(Exception("quota exceeded"))


def test_extra_markers() -> None:
    tracker = RateLimitTracker(InMemoryCache(), extra_markers=("quota",))
    assert tracker.is_rate_limit_error(Exception("Quota exceeded"))


def test_mark_from_error_prefers_retry_after_header(tracker: RateLimitTracker, clock: FakeClock) -> None:
    exc = Exception("rate limit")
    exc.response = MagicMock(headers={"retry-after": "12"})  # type: ignore[attr-defined]

    assert tracker.mark_from_error("model-a", exc) is True
    clock.now += 11
    assert tracker.is_limited("model-a")
    clock.now += 1
    assert not tracker.is_limited("model-a")


def test_mark_from_error_reads_retry_after_from_message(tracker: RateLimitTracker, clock: FakeClock) -> None:
    assert tracker.mark_from_error("model-a", Exception("429 Too Many Requests, retry-after: 30"))
    clock.now += 29
    assert tracker.is_limited("model-a")


def test_mark_from_error_uses_default_cooldown(tracker: RateLimitTracker, clock: FakeClock) -> None:
    assert tracker.mark_from_error("model-a", Exception("rate limit exceeded"))
    clock.now += 1
    assert tracker.is_limited("model-a")
    clock.now += 1
    assert not tracker.is_limited("model-a")


def test_mark_from_error_ignores_other_failures(tracker: RateLimitTracker) -> None:
    assert tracker.mark_from_error("model-a", Exception("bad gateway")) is False
    assert not tracker.is_limited("model-a")


def test_low_quota_headers_limit_model_proactively(tracker: RateLimitTracker, clock: FakeClock) -> None:
    tracker.observe_headers(
        "model-a",
        {
            "x-ratelimit-limit-requests": "1000",
            "x-ratelimit-remaining-requests": "40",
            "x-ratelimit-reset-requests": "2m",
        },
    )

    assert tracker.is_limited("model-a")
    clock.now += 119
    assert tracker.is_limited("model-a")
    clock.now += 1
    assert not tracker.is_limited("model-a")


def test_healthy_headers_only_store_snapshot(tracker: RateLimitTracker) -> None:
    tracker.observe_headers(
        "model-a",
        {
            "x-ratelimit-limit-tokens": "6000",
            "x-ratelimit-remaining-tokens": "5000",
            "content-type": "application/json",
        },
    )

    assert not tracker.is_limited("model-a")
    snapshot = tracker.cache.get(tracker.info_key("model-a"))
    assert snapshot["remaining_tokens"] == "5000"
    assert "content-type" not in snapshot
