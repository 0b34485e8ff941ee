from fintrack_ai.domain.rules import (
    capitalize_first,
    clean_model_output,
    icon_for_category,
    is_unclear_category,
)
from fintrack_ai.logger import get_logger
from fintrack_ai.models import CATCH_ALL_CATEGORY, Category
from fintrack_ai.storage.categories import CategoryRepository

logger = get_logger(__name__)

AUTO_CATEGORY_DESCRIPTION = "Auto-generated category"


class CategoryResolver:
    """Turns model output or rule results into persisted Category records."""

    def __init__(self, repository: CategoryRepository):
        self.repository = repository

    def resolve(self, raw_text: str, user_id: int | None = None) -> Category | None:
        """Clean raw model text and find or create the matching category; None when nothing usable remains."""
        name = clean_model_output(raw_text)
        if not name:
            return None
        logger.debug("[CATEGORIZE] Cleaned model output '%s' -> '%s'", raw_text[:60], name)
        return self.find_or_create(name, user_id)

    def canonical_name(self, name: str) -> str:
        name = capitalize_first(name.strip())
        if is_unclear_category(name):
            if name != CATCH_ALL_CATEGORY:
                logger.info("[CATEGORIZE] Unclear category '%s' replaced with '%s'.", name, CATCH_ALL_CATEGORY)
            return CATCH_ALL_CATEGORY
        return name

    def find_or_create(self, name: str, user_id: int | None = None) -> Category:
        name = self.canonical_name(name)
        return self.repository.find_or_create(
            name,
            user_id=user_id,
            defaults={"description": AUTO_CATEGORY_DESCRIPTION, "icon": icon_for_category(name)},
        )

    def catch_all(self, user_id: int | None = None) -> Category:
        return self.find_or_create(CATCH_ALL_CATEGORY, user_id)
