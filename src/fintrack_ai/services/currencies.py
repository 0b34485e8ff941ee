from fintrack_ai.logger import get_logger
from fintrack_ai.models import Currency
from fintrack_ai.storage.currencies import DEFAULT_CURRENCY_CODE, CurrencyRepository

logger = get_logger(__name__)

CURRENCY_ALIASES = {
    "RUPIAH": "IDR",
    "RP": "IDR",
    "RP.": "IDR",
    "DOLLAR": "USD",
    "SINGAPORE DOLLAR": "SGD",
}


def canonical_currency_code(raw: str) -> str:
    code = raw.strip().upper()
    return CURRENCY_ALIASES.get(code, code)


class CurrencyResolver:
    def __init__(self, repository: CurrencyRepository):
        self.repository = repository

    def resolve(self, raw: str | None, user_id: int | None) -> Currency | None:
        """
        Look up the user's currency for a raw token such as ``Rp`` or ``sgd``.

        IDR is provisioned on first use; any other unknown code yields None.
        """
        if not raw or not raw.strip():
            return None
        code = canonical_currency_code(raw)
        currency = self.repository.find_by_name(user_id, code)
        if currency:
            return currency
        if code == DEFAULT_CURRENCY_CODE:
            logger.info("[PARSER] Creating default IDR currency for user %s.", user_id)
            return self.repository.create_default_idr(user_id)
        logger.debug("[PARSER] Currency '%s' (%s) not found for user %s.", raw, code, user_id)
        return None

    def symbol_for(self, currency_id: int | None) -> str:
        currency = self.repository.get(currency_id) if currency_id is not None else None
        return currency.symbol if currency and currency.symbol else DEFAULT_CURRENCY_CODE
