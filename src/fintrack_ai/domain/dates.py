import calendar
import re
from datetime import date, datetime

import dateparser

from fintrack_ai.logger import get_logger

logger = get_logger(__name__)

INDONESIAN_MONTHS = {
    "januari": 1, "jan": 1,
    "februari": 2, "feb": 2,
    "maret": 3, "mar": 3,
    "april": 4, "apr": 4,
    "mei": 5,
    "juni": 6, "jun": 6,
    "juli": 7, "jul": 7,
    "agustus": 8, "agu": 8,
    "september": 9, "sep": 9,
    "oktober": 10, "okt": 10,
    "november": 11, "nov": 11,
    "desember": 12, "des": 12,
}

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DAY_MONTH_YEAR_RE = re.compile(r"^(?:tanggal\s+|tgl\.?\s*)?(\d{1,2})(?:\s+(\w+))?(?:\s+(\d{4}))?$")

DATEPARSER_SETTINGS = {
    "DATE_ORDER": "DMY",
    "PREFER_DATES_FROM": "current_period",
}


def _clamped(year: int, month: int, day: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(day, last_day)))


def _parse_day_month_year(text: str, today: date) -> date | None:
    match = _DAY_MONTH_YEAR_RE.match(text)
    if not match:
        return None
    day_raw, month_raw, year_raw = match.groups()
    month = INDONESIAN_MONTHS.get(month_raw, today.month) if month_raw else today.month
    year = int(year_raw) if year_raw else today.year
    return _clamped(year, month, int(day_raw))


def _parse_with_dateparser(text: str, today: date) -> date | None:
    settings = dict(DATEPARSER_SETTINGS)
    settings["RELATIVE_BASE"] = datetime.combine(today, datetime.min.time())
    parsed = dateparser.parse(text, languages=["id", "en"], settings=settings)
    return parsed.date() if parsed else None


def resolve_transaction_date(raw: str | None, today: date | None = None) -> date:
    """
    Resolve a date phrase from chat input to a calendar date.

    Supports ISO dates, ``[tanggal] D [bulan] [YYYY]`` with Indonesian month
    names and anything dateparser understands. Falls back to today.
    """
    today = today or date.today()
    if not raw:
        return today

    text = raw.strip().lower()
    try:
        if _ISO_DATE_RE.match(text):
            return date.fromisoformat(text)
        resolved = _parse_day_month_year(text, today) or _parse_with_dateparser(text, today)
    except ValueError as exc:
        logger.warning("[PARSER] Failed to parse transaction date '%s': %s", raw, exc)
        return today

    if resolved is None:
        logger.warning("[PARSER] Unrecognized transaction date '%s', using today.", raw)
        return today
    return resolved
