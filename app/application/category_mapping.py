"""CategoryMappingCache: read-through cache of violation code <-> category."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from app.application.ports.complaint_source_repo import ComplaintSourceRepository

logger = logging.getLogger(__name__)


class CategoryMapping:
    """Loaded mapping. A category may own several codes; a code has one category."""

    def __init__(self, pairs: Iterable[tuple[str, str]]):
        self._category_by_code: dict[str, str] = {}
        self._codes_by_category: dict[str, set[str]] = {}
        for code, category in pairs:
            if not code or not category:
                continue
            self._category_by_code[code] = category
            self._codes_by_category.setdefault(category, set()).add(code)

    def category_for(self, code: str | None) -> str | None:
        if code is None:
            return None
        return self._category_by_code.get(code)

    def codes_for(self, categories: Iterable[str]) -> frozenset[str]:
        codes: set[str] = set()
        for category in categories:
            codes.update(self._codes_by_category.get(category, ()))
        return frozenset(codes)

    def categories(self) -> list[str]:
        return sorted(self._codes_by_category)

    def __len__(self) -> int:
        return len(self._category_by_code)


class CategoryMappingCache:
    """Loads the mapping on first use and serves it until invalidated.

    There is no TTL. Two concurrent first loads both hit the database and
    store identical results.
    """

    def __init__(self) -> None:
        self._mapping: CategoryMapping | None = None

    async def get(self, source: ComplaintSourceRepository) -> CategoryMapping:
        if self._mapping is None:
            pairs = await source.get_category_mapping()
            self._mapping = CategoryMapping(pairs)
            logger.info("Loaded %d violation code mappings", len(self._mapping))
        return self._mapping

    def invalidate(self) -> None:
        """Drop the loaded mapping; the next lookup reloads it."""
        self._mapping = None

    @property
    def is_loaded(self) -> bool:
        return self._mapping is not None
