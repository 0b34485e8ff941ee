import logging
import time
from collections.abc import Callable, Iterable

from tenacity import Retrying, before_sleep_log, retry_if_result, stop_after_attempt, wait_exponential

from fintrack_ai.cache.store import CacheStore
from fintrack_ai.classifiers.base import Classifier
from fintrack_ai.classifiers.cache import CachedClassifier
from fintrack_ai.classifiers.llm import LLMClassifier
from fintrack_ai.core.settings import AISettings
from fintrack_ai.domain.rules import COMMON_TRANSACTIONS, shortcut_category
from fintrack_ai.llm.client import MultiModelClient
from fintrack_ai.llm.provider import LLMProvider, OpenAICompatibleProvider
from fintrack_ai.llm.rate_limit import RateLimitTracker
from fintrack_ai.logger import get_logger
from fintrack_ai.models import Category, Transaction
from fintrack_ai.services.category_resolver import CategoryResolver

logger = get_logger(__name__)

RATE_LIMIT_NAMESPACE = "llm_rate_limit_"

PendingItem = tuple[str, int | None]


def _unpack(item: Transaction | str, user_id: int | None = None) -> PendingItem:
    if isinstance(item, Transaction):
        return item.description, item.user_id
    return item, user_id


class CategorizerService:
    def __init__(
        self,
        resolver: CategoryResolver,
        cache: CacheStore,
        settings: AISettings | None = None,
        provider: LLMProvider | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or AISettings()
        self.resolver = resolver
        self.sleep = sleep
        self.classifiers: list[Classifier] = []

        # 1. Cache (exact, then fuzzy)
        self.cache = CachedClassifier(
            cache,
            ttl=self.settings.cache_ttl,
            threshold=self.settings.similarity_threshold,
        )
        self.classifiers.append(self.cache)

        # 2. Model chain, only when a provider is available
        self.rate_limits = RateLimitTracker(
            cache,
            namespace=RATE_LIMIT_NAMESPACE,
            default_cooldown=self.settings.retry_delay,
        )
        if provider is None and self.settings.api_key:
            provider = OpenAICompatibleProvider(api_key=self.settings.api_key, base_url=self.settings.base_url)
        if provider is not None:
            client = MultiModelClient(provider, self.settings.models, self.rate_limits, name="CATEGORIZE")
            self.llm: LLMClassifier | None = LLMClassifier(client)
            self.classifiers.append(self.llm)
            logger.info(
                "LLM categorization enabled: models=%s, base_url=%s",
                ", ".join(self.settings.models),
                self.settings.base_url,
            )
        else:
            self.llm = None
            logger.warning("OPENAI_API_KEY not found. LLM categorization disabled.")

    def _categorize(self, description: str, user_id: int | None) -> tuple[Category, str] | None:
        shortcut = shortcut_category(description)
        if shortcut:
            logger.debug("[CATEGORIZE] Keyword rule matched '%s' -> %s", description[:50], shortcut)
            return self.resolver.find_or_create(shortcut, user_id), "shortcut"

        existing = self.resolver.repository.names()
        for classifier in self.classifiers:
            classifier_name = classifier.__class__.__name__
            logger.debug("[CATEGORIZE] Trying %s for: '%s'", classifier_name, description[:50])

            result = classifier.classify(description, existing_categories=existing)
            if result is None:
                logger.debug("[CATEGORIZE] %s returned: None", classifier_name)
                continue

            if classifier is self.cache:
                return self.resolver.find_or_create(result.category_name, user_id), result.source

            category = self.resolver.resolve(result.category_name, user_id)
            if category is None:
                logger.warning("[CATEGORIZE] %s returned unusable text '%s'", classifier_name, result.category_name)
                continue
            self.cache.learn(description, category.name)
            return category, result.source

        return None

    def categorize_detailed(self, description: str, user_id: int | None = None) -> tuple[Category, str]:
        """Category for ``description`` plus the source that decided it."""
        outcome = self._categorize(description, user_id)
        if outcome is None:
            logger.error("[CATEGORIZE] No classifier resolved '%s', using catch-all.", description[:50])
            return self.resolver.catch_all(user_id), "fallback"
        return outcome

    def categorize_transaction(self, transaction: Transaction | str, user_id: int | None = None) -> Category:
        description, owner = _unpack(transaction, user_id)
        return self.categorize_detailed(description, owner)[0]

    def batch_categorize_transactions(
        self, transactions: Iterable[Transaction | str], user_id: int | None = None
    ) -> dict[str, Category]:
        results: dict[str, Category] = {}
        uncategorized: list[PendingItem] = []

        for item in transactions:
            description, owner = _unpack(item, user_id)
            shortcut = shortcut_category(description)
            if shortcut:
                results[description] = self.resolver.find_or_create(shortcut, owner)
                continue
            cached = self.cache.classify(description)
            if cached:
                results[description] = self.resolver.find_or_create(cached.category_name, owner)
                continue
            uncategorized.append((description, owner))

        size = self.settings.batch_size
        for start in range(0, len(uncategorized), size):
            results.update(self._process_batch(uncategorized[start:start + size]))
        return results

    def _process_batch(self, batch: list[PendingItem]) -> dict[str, Category]:
        results: dict[str, Category] = {}
        pending = list(batch)

        def attempt() -> list[PendingItem]:
            nonlocal pending
            still_pending: list[PendingItem] = []
            for description, owner in pending:
                outcome = self._categorize(description, owner)
                if outcome is None:
                    still_pending.append((description, owner))
                else:
                    results[description] = outcome[0]
            pending = still_pending
            return still_pending

        # Retrying cannot help without a model chain.
        attempts = self.settings.max_retries + 1 if self.llm else 1
        retrying = Retrying(
            retry=retry_if_result(bool),
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=self.settings.retry_delay),
            sleep=self.sleep,
            before_sleep=before_sleep_log(logger, logging.INFO),
            retry_error_callback=lambda state: state.outcome.result(),
        )
        leftovers = retrying(attempt)

        if leftovers:
            logger.warning(
                "[CATEGORIZE] Failed to categorize %s transactions after %s retries: %s",
                len(leftovers),
                attempts - 1,
                [description for description, _ in leftovers],
            )
            for description, owner in leftovers:
                results[description] = self.resolver.catch_all(owner)
        return results

    def learn(self, description: str, category_name: str) -> None:
        self.cache.learn(description, category_name)

    def invalidate_cache(self) -> int:
        return self.cache.invalidate()

    def invalidate_category_type_cache(self, category_type: str) -> int:
        return self.cache.invalidate_category_type(category_type)

    def fix_zakat_categorizations(self) -> int:
        return self.invalidate_category_type_cache("zakat")

    def preload_common_categories(self) -> int:
        return self.cache.preload(COMMON_TRANSACTIONS)
