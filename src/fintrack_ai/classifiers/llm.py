from fintrack_ai.domain.normalizer import normalize_description
from fintrack_ai.llm.client import AllModelsFailedError, MultiModelClient
from fintrack_ai.logger import get_logger
from fintrack_ai.models import CategorizationResult

from .base import Classifier
from .prompts import build_categorization_prompt

logger = get_logger(__name__)

CATEGORIZATION_TEMPERATURE = 0.2
CATEGORIZATION_MAX_TOKENS = 50


class LLMClassifier(Classifier):
    """
    Asks the model chain for a category name.

    The returned category name is the raw model text; the category resolver
    is responsible for turning it into a canonical name.
    """

    def __init__(
        self,
        client: MultiModelClient,
        temperature: float = CATEGORIZATION_TEMPERATURE,
        max_tokens: int = CATEGORIZATION_MAX_TOKENS,
    ):
        self.client = client
        self.temperature = temperature
        self.max_tokens = max_tokens

    def classify(
        self, description: str, existing_categories: list[str] | None = None
    ) -> CategorizationResult | None:
        normalized = normalize_description(description)
        if not normalized:
            return None
        try:
            response = self.client.generate(
                build_categorization_prompt(existing_categories),
                normalized,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except AllModelsFailedError as exc:
            logger.error("[CATEGORIZE] LLM categorization failed for '%s': %s", description[:50], exc)
            return None

        return CategorizationResult(
            category_name=response.text,
            source="llm",
            confidence=0.9,
            model_version=response.model,
        )

    def learn(self, description: str, category_name: str) -> None:
        # The model is not fine-tuned; the cache remembers results instead.
        pass
