"""FilterCatalogUseCase: value lists that feed the statistics filters."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.application.category_mapping import CategoryMappingCache
from app.application.ports.complaint_source_repo import ComplaintSourceRepository
from app.application.ports.inspection_repo import InspectionRepository
from app.application.use_cases.aggregate_statistics import load_column_branches
from app.domain.entities.column_branch import ColumnBranch
from app.domain.policies.column_expansion import columns_by_branch, expand_columns
from app.domain.value_objects.enums import RecordKind
from app.domain.value_objects.filters import ColumnRef

logger = logging.getLogger(__name__)


def _includes(kinds: Sequence[RecordKind], kind: RecordKind) -> bool:
    return not kinds or kind in kinds


class FilterCatalogUseCase:
    def __init__(
        self,
        source_repo: ComplaintSourceRepository,
        inspection_repo: InspectionRepository,
        category_cache: CategoryMappingCache,
        source_tables: Sequence[str],
    ):
        self._sources = source_repo
        self._inspections = inspection_repo
        self._categories = category_cache
        self._default_tables = tuple(source_tables)

    async def column_branches(self) -> list[ColumnBranch]:
        return await load_column_branches(self._sources)

    async def branches(self) -> list[str]:
        links = await load_column_branches(self._sources)
        return sorted({link.branch_name for link in links})

    async def complaint_routes(self, tables: Sequence[str] = ()) -> list[str]:
        routes: set[str] = set()
        for table in tables or self._default_tables:
            try:
                routes.update(await self._sources.list_routes(table))
            except Exception:
                logger.exception("Could not list routes of table %s", table)
        return sorted(routes)

    async def routes(
        self, kinds: Sequence[RecordKind] = (), tables: Sequence[str] = ()
    ) -> list[str]:
        """Routes of complaints and/or inspections, depending on *kinds*."""
        routes: set[str] = set()
        if _includes(kinds, RecordKind.COMPLAINT):
            routes.update(await self.complaint_routes(tables))
        if _includes(kinds, RecordKind.INSPECTION):
            try:
                routes.update(r for r in await self._inspections.list_routes() if r)
            except Exception:
                logger.exception("Could not list inspection routes")
        return sorted(routes)

    async def routes_by_columns(
        self, columns: Sequence[ColumnRef], tables: Sequence[str] = ()
    ) -> list[str]:
        """Routes assigned to the given columns/branches by the latest distribution.

        Without columns, or without any distribution, every complaint route
        is returned. Columns that expand to nothing yield no routes.
        """
        if not columns:
            return await self.complaint_routes(tables)

        links = await load_column_branches(self._sources)
        numbers = expand_columns(columns, columns_by_branch(links))
        if not numbers:
            return []

        try:
            routes = await self._sources.get_distribution_routes(numbers)
        except Exception:
            logger.exception("Could not read route distribution, returning all routes")
            return await self.complaint_routes(tables)

        if routes is None:
            logger.warning("No route distribution found, returning all routes")
            return await self.complaint_routes(tables)
        return sorted(routes)

    async def categories(
        self, kinds: Sequence[RecordKind] = (), tables: Sequence[str] = ()
    ) -> list[str]:
        categories: set[str] = set()
        if _includes(kinds, RecordKind.COMPLAINT):
            for table in tables or self._default_tables:
                try:
                    categories.update(await self._sources.list_categories(table))
                except Exception:
                    logger.exception("Could not list categories of table %s", table)
        if _includes(kinds, RecordKind.INSPECTION):
            try:
                mapping = await self._categories.get(self._sources)
                categories.update(mapping.categories())
            except Exception:
                logger.exception("Could not load violation code mapping")
        return sorted(categories)
