"""FastAPI dependency injection: wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_analytics_session, get_session
from app.adapters.persistence.repositories import (
    SqlComplaintSourceRepository,
    SqlInspectionRepository,
    SqlRecordRepository,
    SqlResolutionTemplateRepository,
)
from app.adapters.persistence.sources import SourceRegistry, build_inspection_table
from app.application.category_mapping import CategoryMappingCache
from app.application.use_cases.aggregate_statistics import AggregateStatisticsUseCase
from app.application.use_cases.filter_catalog import FilterCatalogUseCase
from app.application.use_cases.manage_templates import ManageTemplatesUseCase
from app.application.use_cases.triage_record import TriageRecordUseCase
from app.config import settings

# Re-export session dependencies
get_db_session = get_session
get_analytics_db_session = get_analytics_session

# Process-wide singletons
_source_registry = SourceRegistry(settings.source_tables, settings.dated_source_table)
_checks_table = build_inspection_table(settings.inspection_schema)
_category_cache = CategoryMappingCache()


def get_category_cache() -> CategoryMappingCache:
    return _category_cache


def get_source_repo(
    session: AsyncSession = Depends(get_session),
) -> SqlComplaintSourceRepository:
    return SqlComplaintSourceRepository(session, _source_registry)


def get_inspection_repo(
    session: AsyncSession = Depends(get_analytics_session),
) -> SqlInspectionRepository:
    return SqlInspectionRepository(session, _checks_table)


def get_record_repo(session: AsyncSession = Depends(get_session)) -> SqlRecordRepository:
    return SqlRecordRepository(session)


def get_template_repo(
    session: AsyncSession = Depends(get_session),
) -> SqlResolutionTemplateRepository:
    return SqlResolutionTemplateRepository(session)


def get_aggregate_statistics_uc(
    source_repo: SqlComplaintSourceRepository = Depends(get_source_repo),
    inspection_repo: SqlInspectionRepository = Depends(get_inspection_repo),
    category_cache: CategoryMappingCache = Depends(get_category_cache),
) -> AggregateStatisticsUseCase:
    return AggregateStatisticsUseCase(
        source_repo=source_repo,
        inspection_repo=inspection_repo,
        category_cache=category_cache,
        source_tables=_source_registry.names,
    )


def get_filter_catalog_uc(
    source_repo: SqlComplaintSourceRepository = Depends(get_source_repo),
    inspection_repo: SqlInspectionRepository = Depends(get_inspection_repo),
    category_cache: CategoryMappingCache = Depends(get_category_cache),
) -> FilterCatalogUseCase:
    return FilterCatalogUseCase(
        source_repo=source_repo,
        inspection_repo=inspection_repo,
        category_cache=category_cache,
        source_tables=_source_registry.names,
    )


def get_triage_uc(
    record_repo: SqlRecordRepository = Depends(get_record_repo),
) -> TriageRecordUseCase:
    return TriageRecordUseCase(record_repo)


def get_templates_uc(
    template_repo: SqlResolutionTemplateRepository = Depends(get_template_repo),
) -> ManageTemplatesUseCase:
    return ManageTemplatesUseCase(template_repo)
