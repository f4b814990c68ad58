"""Statistics endpoints: aggregation, filter catalogues and spreadsheet export."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from app.adapters.export.xlsx_writer import XLSX_MEDIA_TYPE, export_filename, write_xlsx
from app.application.use_cases.aggregate_statistics import AggregateStatisticsUseCase
from app.application.use_cases.filter_catalog import FilterCatalogUseCase
from app.domain.value_objects.filters import StatisticsFilters
from app.infrastructure.api.dependencies import (
    get_aggregate_statistics_uc,
    get_filter_catalog_uc,
)
from app.infrastructure.api.envelope import ok
from app.infrastructure.api.query_params import (
    parse_columns,
    parse_kinds,
    split_list,
    statistics_filters,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("")
async def get_statistics(
    filters: StatisticsFilters = Depends(statistics_filters),
    uc: AggregateStatisticsUseCase = Depends(get_aggregate_statistics_uc),
):
    """Counts by column, branch, route, category and date."""
    data = await uc.execute(filters)
    return ok(data.to_dict(), f"Statistics collected, {data.total_count} records")


@router.get("/column-branches")
async def get_column_branches(uc: FilterCatalogUseCase = Depends(get_filter_catalog_uc)):
    links = await uc.column_branches()
    return ok(
        [{"column_no": link.column_no, "branch_name": link.branch_name} for link in links],
        f"Found {len(links)} column/branch links",
    )


@router.get("/branches")
async def get_branches(uc: FilterCatalogUseCase = Depends(get_filter_catalog_uc)):
    branches = await uc.branches()
    return ok(branches, f"Found {len(branches)} branches")


@router.get("/routes")
async def get_routes(
    tables: str | None = None,
    types: str | None = None,
    uc: FilterCatalogUseCase = Depends(get_filter_catalog_uc),
):
    routes = await uc.routes(parse_kinds(types), split_list(tables))
    return ok(routes, f"Found {len(routes)} routes")


@router.get("/routes-by-columns")
async def get_routes_by_columns(
    columns: str | None = None,
    tables: str | None = None,
    types: str | None = None,
    uc: FilterCatalogUseCase = Depends(get_filter_catalog_uc),
):
    """Routes of the selected columns/branches; with ``types`` the combined route list."""
    if types:
        routes = await uc.routes(parse_kinds(types), split_list(tables))
    else:
        routes = await uc.routes_by_columns(parse_columns(columns), split_list(tables))
    return ok(routes, f"Found {len(routes)} routes")


@router.get("/categories")
async def get_categories(
    tables: str | None = None,
    types: str | None = None,
    uc: FilterCatalogUseCase = Depends(get_filter_catalog_uc),
):
    categories = await uc.categories(parse_kinds(types), split_list(tables))
    return ok(categories, f"Found {len(categories)} categories")


@router.get("/export")
async def export_statistics(
    filters: StatisticsFilters = Depends(statistics_filters),
    uc: AggregateStatisticsUseCase = Depends(get_aggregate_statistics_uc),
):
    """Download the filtered records as an .xlsx workbook."""
    rows = await uc.export(filters)
    content = write_xlsx(rows)
    filename = export_filename()
    logger.info("Exported %d rows to %s", len(rows), filename)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
