"""AggregateStatisticsUseCase: complaint tables + inspections → StatisticsData / export rows."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import replace

from app.application.category_mapping import CategoryMapping, CategoryMappingCache
from app.application.ports.complaint_source_repo import ComplaintSourceRepository
from app.application.ports.inspection_repo import InspectionRepository
from app.domain.entities.column_branch import FALLBACK_COLUMN_BRANCHES, ColumnBranch
from app.domain.entities.inspection import InspectionCounts, InspectionRow
from app.domain.entities.statistics import DimensionCounts, ExportRow, StatisticsData
from app.domain.policies.column_expansion import columns_by_branch, expand_columns
from app.domain.policies.column_label import extract_column_number
from app.domain.value_objects.enums import RecordKind, RecordType
from app.domain.value_objects.filters import SourceQuery, StatisticsFilters

logger = logging.getLogger(__name__)


async def load_column_branches(source: ComplaintSourceRepository) -> list[ColumnBranch]:
    """Column -> branch links, or the built-in fallback when the table is unreadable."""
    try:
        return await source.get_column_branches()
    except Exception:
        logger.exception("Could not read column/branch mapping, using fallback")
        return list(FALLBACK_COLUMN_BRANCHES)


def build_source_query(filters: StatisticsFilters, links: Sequence[ColumnBranch]) -> SourceQuery:
    """Translate normalized filters into repository predicates.

    A column filter that expands to no known column leaves the dimension
    unrestricted.
    """
    column_numbers = None
    if filters.columns:
        expanded = expand_columns(filters.columns, columns_by_branch(links))
        column_numbers = expanded or None
    return SourceQuery(
        date_from=filters.date_from,
        date_to=filters.date_to,
        column_numbers=column_numbers,
        routes=filters.routes,
        categories=filters.categories,
    )


class AggregateStatisticsUseCase:
    """Aggregates counts across every selected source.

    A failing source is logged and skipped; the remaining sources still
    contribute to the result.
    """

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

    def tables_for(self, filters: StatisticsFilters) -> tuple[str, ...]:
        return filters.tables or self._default_tables

    async def execute(self, filters: StatisticsFilters) -> StatisticsData:
        links = await load_column_branches(self._sources)
        result = StatisticsData.for_links(links)
        query = build_source_query(filters, links)

        if filters.includes(RecordKind.COMPLAINT):
            for table in self.tables_for(filters):
                try:
                    counts = await self._sources.count_dimensions(table, query)
                except Exception:
                    logger.exception("Statistics query failed for table %s, skipping", table)
                    continue
                result.merge(counts)
                logger.debug("Table %s: %d records", table, counts.total)

        if filters.includes(RecordKind.INSPECTION):
            try:
                mapping = await self._categories.get(self._sources)
                raw = await self._inspections.count_dimensions(
                    self._inspection_query(query, mapping)
                )
            except Exception:
                logger.exception("Statistics query failed for inspections, skipping")
            else:
                result.merge(inspection_dimensions(raw, mapping))
                logger.debug("Inspections: %d records", raw.total)

        logger.info(
            "Statistics: total=%d, columns=%d, routes=%d, categories=%d",
            result.total_count, len(result.by_columns),
            len(result.by_routes), len(result.by_categories),
        )
        return result

    async def export(self, filters: StatisticsFilters) -> list[ExportRow]:
        """Flattened, non-aggregated rows under the same filter semantics."""
        links = await load_column_branches(self._sources)
        query = build_source_query(filters, links)
        rows: list[ExportRow] = []

        if filters.includes(RecordKind.COMPLAINT):
            for table in self.tables_for(filters):
                try:
                    rows.extend(await self._sources.export_rows(table, query))
                except Exception:
                    logger.exception("Export query failed for table %s, skipping", table)

        if filters.includes(RecordKind.INSPECTION):
            try:
                mapping = await self._categories.get(self._sources)
                raw_rows = await self._inspections.export_rows(
                    self._inspection_query(query, mapping)
                )
            except Exception:
                logger.exception("Export query failed for inspections, skipping")
            else:
                rows.extend(inspection_export_row(r, mapping) for r in raw_rows)

        logger.info("Export: %d rows", len(rows))
        return rows

    @staticmethod
    def _inspection_query(query: SourceQuery, mapping: CategoryMapping) -> SourceQuery:
        # Requested categories that map to no code leave an empty set: nothing matches.
        if not query.categories:
            return query
        return replace(query, violation_codes=mapping.codes_for(query.categories))


def inspection_dimensions(raw: InspectionCounts, mapping: CategoryMapping) -> DimensionCounts:
    """Parse column labels and map violation codes to categories."""
    by_column: Counter[int] = Counter()
    for label, count in raw.by_column_label.items():
        column_no = extract_column_number(label)
        if column_no is not None:
            by_column[column_no] += count

    by_category: Counter[str] = Counter()
    for code, count in raw.by_code.items():
        category = mapping.category_for(code)
        if category:
            by_category[category] += count

    return DimensionCounts(
        total=raw.total,
        by_column=by_column,
        by_route=Counter(raw.by_route),
        by_category=by_category,
        by_date=Counter(raw.by_date),
    )


def inspection_export_row(row: InspectionRow, mapping: CategoryMapping) -> ExportRow:
    return ExportRow(
        event_date=row.event_date,
        complaint_text=row.analysis_text or "",
        route_num=row.route or "",
        column_no=extract_column_number(row.column_label) or 0,
        category=mapping.category_for(row.violation_code) or "",
        bitrix_num=row.task_num or None,
        type=RecordType.INSPECTION,
    )
