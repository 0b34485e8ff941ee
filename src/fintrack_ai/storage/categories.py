from collections.abc import Mapping
from typing import Any

from fintrack_ai.models import Category

from .base import JsonRepository


class CategoryRepository(JsonRepository[Category]):
    model = Category

    def find(self, name: str, user_id: int | None = None) -> Category | None:
        return self.first(lambda category: category.name == name and category.user_id == user_id)

    def find_or_create(
        self,
        name: str,
        user_id: int | None = None,
        defaults: Mapping[str, Any] | None = None,
    ) -> Category:
        """Return the category keyed on ``(name, user_id)``, creating it with ``defaults`` if missing."""
        with self._lock:
            existing = self.find(name, user_id)
            if existing:
                return existing
            values = dict(defaults or {})
            values.update(name=name, user_id=user_id)
            return self.add(Category(**values))

    def names(self) -> list[str]:
        return sorted({category.name for category in self.all()})
