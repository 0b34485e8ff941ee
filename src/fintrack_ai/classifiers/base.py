from abc import ABC, abstractmethod

from fintrack_ai.models import CategorizationResult


class Classifier(ABC):
    @abstractmethod
    def classify(
        self, description: str, existing_categories: list[str] | None = None
    ) -> CategorizationResult | None:
        """Attempt to categorize a transaction description."""
        pass

    @abstractmethod
    def learn(self, description: str, category_name: str) -> None:
        """Remember a description-category pair."""
        pass
