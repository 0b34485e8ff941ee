import math
import re
import time
from collections.abc import Mapping

from fintrack_ai.cache.store import CacheStore
from fintrack_ai.logger import get_logger

logger = get_logger(__name__)

RATE_LIMIT_MARKERS = ("rate limit", "too many requests", "429")
QUOTA_THRESHOLD = 0.05
DEFAULT_RESET_SECONDS = 60
MIN_COOLDOWN_SECONDS = 5
HEADER_INFO_TTL = 60

RATE_LIMIT_HEADERS = {
    "x-ratelimit-limit-requests": "limit_requests",
    "x-ratelimit-limit-tokens": "limit_tokens",
    "x-ratelimit-remaining-requests": "remaining_requests",
    "x-ratelimit-remaining-tokens": "remaining_tokens",
    "x-ratelimit-reset-requests": "reset_requests",
    "x-ratelimit-reset-tokens": "reset_tokens",
}

_RETRY_AFTER_RE = re.compile(r"retry[- ]after:?\s*(\d+)", re.IGNORECASE)
_RESET_TIME_RE = re.compile(
    r"^(?:(?P<hours>\d+)h)?"
    r"(?:(?P<minutes>\d+)m(?!s))?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)s)?"
    r"(?:(?P<millis>\d+(?:\.\d+)?)ms)?$"
)


def parse_reset_time(value: str | None) -> int:
    """
    Convert a reset duration such as ``2m59.56s`` or ``7.66s`` to whole seconds.

    Fractions round up, unparseable input means 60 seconds and the result is
    never below 5 seconds.
    """
    seconds: float = DEFAULT_RESET_SECONDS
    text = (value or "").strip().lower()
    match = _RESET_TIME_RE.match(text) if text else None
    if match and any(match.groupdict().values()):
        parts = {name: float(raw) if raw else 0.0 for name, raw in match.groupdict().items()}
        seconds = (
            parts["hours"] * 3600
            + parts["minutes"] * 60
            + math.ceil(parts["seconds"] + parts["millis"] / 1000)
        )
    else:
        try:
            seconds = math.ceil(float(text))
        except ValueError:
            pass
    return max(int(seconds), MIN_COOLDOWN_SECONDS)


def _as_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class RateLimitTracker:
    """
    Per-model cooldown flags kept in a cache store.

    A model is limited while its flag exists; flags expire on their own.
    """

    def __init__(
        self,
        cache: CacheStore,
        namespace: str = "llm_rate_limit_",
        default_cooldown: int = 2,
        extra_markers: tuple[str, ...] = (),
    ):
        self.cache = cache
        self.namespace = namespace
        self.default_cooldown = default_cooldown
        self.markers = RATE_LIMIT_MARKERS + tuple(marker.lower() for marker in extra_markers)

    def _flag_key(self, model: str) -> str:
        return f"{self.namespace}{model}"

    def info_key(self, model: str) -> str:
        return f"{self.namespace}info_{model}"

    def is_limited(self, model: str) -> bool:
        return self.cache.has(self._flag_key(model))

    def mark_limited(self, model: str, seconds: int) -> None:
        self.cache.put(self._flag_key(model), True, seconds)
        logger.info("[RATE-LIMIT] Model %s limited for %s seconds.", model, seconds)

    def observe_headers(self, model: str, headers: Mapping[str, str] | None) -> None:
        if not headers:
            return
        snapshot = {name: headers[header] for header, name in RATE_LIMIT_HEADERS.items() if header in headers}
        if not snapshot:
            return
        self.cache.put(
            self.info_key(model),
            {"model": model, "timestamp": int(time.time()), **snapshot},
            HEADER_INFO_TTL,
        )

        for kind in ("requests", "tokens"):
            remaining = _as_float(snapshot.get(f"remaining_{kind}"))
            limit = _as_float(snapshot.get(f"limit_{kind}"))
            if remaining is None or not limit:
                continue
            ratio = remaining / limit
            if ratio <= QUOTA_THRESHOLD:
                wait = parse_reset_time(snapshot.get(f"reset_{kind}"))
                self.mark_limited(model, wait)
                logger.warning(
                    "[RATE-LIMIT] Proactively limiting %s: low %s quota (%.0f/%.0f, ratio %.3f), wait %ss.",
                    model,
                    kind,
                    remaining,
                    limit,
                    ratio,
                    wait,
                )
                return

    def is_rate_limit_error(self, exc: BaseException) -> bool:
        if getattr(exc, "status_code", None) == 429:
            return True
        message = str(exc).lower()
        return any(marker in message for marker in self.markers)

    def extract_retry_after(self, exc: BaseException) -> int | None:
        response = getattr(exc, "response", None)
        headers = getattr(response, "headers", None)
        if headers is not None:
            header_value = _as_float(headers.get("retry-after"))
            if header_value is not None:
                return max(int(math.ceil(header_value)), 1)
        match = _RETRY_AFTER_RE.search(str(exc))
        if match:
            return int(match.group(1))
        return None

    def mark_from_error(self, model: str, exc: BaseException) -> bool:
        """Put ``model`` on cooldown when ``exc`` is a rate-limit signal; report whether it was."""
        if not self.is_rate_limit_error(exc):
            return False
        retry_after = self.extract_retry_after(exc)
        self.mark_limited(model, retry_after if retry_after is not None else self.default_cooldown)
        return True
