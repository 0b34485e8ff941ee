import json
import math
import re
from datetime import date
from typing import Any

from fintrack_ai.domain.dates import resolve_transaction_date
from fintrack_ai.domain.rules import shortcut_category
from fintrack_ai.llm.client import AllModelsFailedError, MultiModelClient
from fintrack_ai.logger import get_logger
from fintrack_ai.models import ParsedTransactionCandidate

from .currencies import CurrencyResolver
from .prompts import build_parser_prompt

logger = get_logger(__name__)

_FENCE_START_RE = re.compile(r"^```(?:json)?\s*")
_FENCE_END_RE = re.compile(r"\s*```$")
_TRANSACTION_TYPES = ("income", "outcome")


def strip_code_fences(text: str) -> str:
    text = _FENCE_START_RE.sub("", text.strip())
    return _FENCE_END_RE.sub("", text)


def _numeric_amount(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        amount = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    # NaN and infinities count as a missing amount.
    return amount if math.isfinite(amount) else None


class TransactionIntentParser:
    """Extracts transaction candidates from a free-form chat message via the model chain."""

    def __init__(self, client: MultiModelClient | None, currencies: CurrencyResolver):
        self.client = client
        self.currencies = currencies

    def parse(
        self,
        message: str,
        context: str,
        user_id: int | None = None,
        today: date | None = None,
    ) -> list[ParsedTransactionCandidate]:
        if self.client is None:
            logger.warning("[PARSER] No model chain configured, cannot parse transactions.")
            return []

        today = today or date.today()
        try:
            response = self.client.generate(build_parser_prompt(today), message)
        except AllModelsFailedError as exc:
            logger.error("[PARSER] Transaction parsing failed for '%s': %s", message[:100], exc)
            return []

        try:
            payload = json.loads(strip_code_fences(response.text))
        except json.JSONDecodeError as exc:
            logger.warning("[PARSER] Failed to decode model output '%s': %s", response.text[:200], exc)
            return []

        if isinstance(payload, dict):
            payload = [payload]
        if not isinstance(payload, list):
            logger.warning("[PARSER] Unexpected payload type %s", type(payload).__name__)
            return []

        candidates = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            candidate = self.build_candidate(item, user_id, today)
            if candidate:
                candidates.append(candidate)
        logger.info("[PARSER] Parsed %s transaction(s) in %s context.", len(candidates), context)
        return candidates

    def build_candidate(
        self, data: dict[str, Any], user_id: int | None, today: date
    ) -> ParsedTransactionCandidate | None:
        description = str(data.get("description") or "").strip()
        if not description:
            return None

        raw_currency = data.get("currency") or None
        currency = None
        if raw_currency:
            raw_currency = str(raw_currency)
            currency = self.currencies.resolve(raw_currency, user_id)

        kind = data.get("type")
        raw_date = data.get("date")
        return ParsedTransactionCandidate(
            description=description,
            amount=_numeric_amount(data.get("amount")),
            currency_id=currency.id if currency else None,
            currency_code=currency.name if currency else None,
            raw_currency=raw_currency,
            date=resolve_transaction_date(str(raw_date) if raw_date else None, today),
            type=kind if kind in _TRANSACTION_TYPES else None,
            category_name=shortcut_category(description),
        )
