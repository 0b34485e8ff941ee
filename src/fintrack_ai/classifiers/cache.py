import hashlib
from collections.abc import Callable, Mapping
from typing import TypeVar

from fintrack_ai.cache.store import CacheStore
from fintrack_ai.domain.normalizer import normalize_description
from fintrack_ai.domain.similarity import calculate_similarity
from fintrack_ai.logger import get_logger
from fintrack_ai.models import CategorizationResult

from .base import Classifier

logger = get_logger(__name__)

T = TypeVar("T")

CACHE_PREFIX = "ai_categorization_"
KEYS_INDEX = "ai_categorization_keys"
DESCRIPTIONS_INDEX = "ai_categorization_descriptions"

# Cached description rewrites applied by invalidate_category_type.
CATEGORY_TYPE_CORRECTIONS = {
    "zakat": "Zakat",
}


class CachedClassifier(Classifier):
    """
    Classification cache keyed by the md5 of the normalized description.

    A tracked-keys index and a key -> description map live next to the
    entries so fuzzy lookup and bulk invalidation work without listing keys.
    """

    def __init__(self, cache: CacheStore, ttl: int = 24 * 60 * 60, threshold: float = 0.8):
        self.cache = cache
        self.ttl = ttl
        self.threshold = threshold

    @staticmethod
    def key_for(normalized: str) -> str:
        return CACHE_PREFIX + hashlib.md5(normalized.encode("utf-8")).hexdigest()

    def _safely(self, operation: Callable[[], T], default: T) -> T:
        try:
            return operation()
        except Exception as exc:
            logger.warning("[CACHE] Cache store unavailable, treating as miss: %s", exc)
            return default

    def _tracked_keys(self) -> list[str]:
        return list(self.cache.get(KEYS_INDEX) or [])

    def _descriptions(self) -> dict[str, str]:
        return dict(self.cache.get(DESCRIPTIONS_INDEX) or {})

    def exact_lookup(self, normalized: str) -> str | None:
        if not normalized:
            return None
        name = self._safely(lambda: self.cache.get(self.key_for(normalized)), None)
        return name or None

    def fuzzy_lookup(self, normalized: str) -> tuple[str, float] | None:
        """First cached category whose description is similar enough, plus its score."""
        if not normalized:
            return None
        return self._safely(lambda: self._scan_similar(normalized), None)

    def _scan_similar(self, normalized: str) -> tuple[str, float] | None:
        keys = self._tracked_keys()
        descriptions = self._descriptions()
        live_keys: list[str] = []
        match: tuple[str, float] | None = None

        for key in keys:
            name = self.cache.get(key)
            if not name:
                continue
            live_keys.append(key)
            if match is not None:
                continue
            cached_description = descriptions.get(key)
            if not cached_description:
                continue
            similarity = calculate_similarity(normalized, cached_description)
            if similarity >= self.threshold:
                logger.debug(
                    "[CACHE] '%s' is similar to cached '%s' (%.2f) -> %s",
                    normalized,
                    cached_description,
                    similarity,
                    name,
                )
                match = (name, similarity)

        if len(live_keys) != len(keys):
            self.cache.put(KEYS_INDEX, live_keys, self.ttl)
            live = set(live_keys)
            self.cache.put(
                DESCRIPTIONS_INDEX,
                {key: text for key, text in descriptions.items() if key in live},
                self.ttl,
            )
        if match is not None:
            self.remember(normalized, match[0])
        return match

    def classify(
        self, description: str, existing_categories: list[str] | None = None
    ) -> CategorizationResult | None:
        normalized = normalize_description(description)
        name = self.exact_lookup(normalized)
        if name:
            return CategorizationResult(category_name=name, source="cache_exact")
        fuzzy = self.fuzzy_lookup(normalized)
        if fuzzy:
            return CategorizationResult(category_name=fuzzy[0], source="cache_fuzzy", confidence=fuzzy[1])
        return None

    def remember(self, normalized: str, category_name: str) -> str:
        key = self.key_for(normalized)
        self.cache.put(key, category_name, self.ttl)

        keys = self._tracked_keys()
        if key not in keys:
            keys.append(key)
        self.cache.put(KEYS_INDEX, keys, self.ttl)

        descriptions = self._descriptions()
        descriptions[key] = normalized
        self.cache.put(DESCRIPTIONS_INDEX, descriptions, self.ttl)
        return key

    def learn(self, description: str, category_name: str) -> None:
        normalized = normalize_description(description)
        if not normalized or not category_name:
            return
        self._safely(lambda: self.remember(normalized, category_name), None)

    def invalidate(self) -> int:
        keys = self._tracked_keys()
        for key in keys:
            self.cache.forget(key)
        self.cache.forget(KEYS_INDEX)
        self.cache.forget(DESCRIPTIONS_INDEX)
        logger.info("[CACHE] Categorization cache invalidated, %s keys cleared.", len(keys))
        return len(keys)

    def invalidate_category_type(self, category_type: str) -> int:
        """
        Rewrite cached entries whose description mentions ``category_type``.

        Only types with a known correction are rewritten; returns the number
        of entries changed.
        """
        category_type = category_type.lower()
        corrected = CATEGORY_TYPE_CORRECTIONS.get(category_type)
        descriptions = self._descriptions()
        count = 0
        for key in self._tracked_keys():
            description = descriptions.get(key)
            if not description or category_type not in description.lower():
                continue
            current = self.cache.get(key)
            if corrected and current and current != corrected:
                self.cache.put(key, corrected, self.ttl)
                count += 1
        logger.info("[CACHE] Corrected %s cache entries for category type '%s'.", count, category_type)
        return count

    def preload(self, entries: Mapping[str, str]) -> int:
        added = 0
        for description, category_name in entries.items():
            normalized = normalize_description(description)
            if not normalized or self.cache.has(self.key_for(normalized)):
                continue
            self.remember(normalized, category_name)
            added += 1
        logger.info("[CACHE] Preloaded %s of %s common categories.", added, len(entries))
        return added
