from fintrack_ai.models import Currency

from .base import JsonRepository

DEFAULT_CURRENCY_CODE = "IDR"


class CurrencyRepository(JsonRepository[Currency]):
    model = Currency

    def find_by_name(self, user_id: int | None, name: str) -> Currency | None:
        return self.first(lambda currency: currency.user_id == user_id and currency.name == name)

    def create(self, currency: Currency) -> Currency:
        return self.add(currency)

    def create_default_idr(self, user_id: int | None) -> Currency:
        with self._lock:
            existing = self.find_by_name(user_id, DEFAULT_CURRENCY_CODE)
            if existing:
                return existing
            return self.add(Currency(user_id=user_id, name=DEFAULT_CURRENCY_CODE, symbol="Rp", exchange_rate=1.0))
