"""SQLAlchemy repository implementations."""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from enum import Enum

from sqlalchemy import Table, delete, distinct, func, literal, select, union_all, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence import queries
from app.adapters.persistence.models import (
    BranchModel,
    ChecksMappingModel,
    ComplaintRecordModel,
    DistributionSetModel,
    InspectionRecordModel,
    ResolutionTemplateModel,
    RouteAssignmentModel,
)
from app.adapters.persistence.sources import SourceRegistry
from app.application.ports.complaint_source_repo import ComplaintSourceRepository
from app.application.ports.inspection_repo import InspectionRepository
from app.application.ports.record_repo import EDITABLE_FIELDS, RecordRepository
from app.application.ports.template_repo import ResolutionTemplateRepository
from app.domain.entities.column_branch import ColumnBranch
from app.domain.entities.inspection import InspectionCounts, InspectionRow
from app.domain.entities.record import Record, RecordSummary, ResolutionTemplate
from app.domain.entities.statistics import DimensionCounts, ExportRow
from app.domain.policies.event_date import resolve_event_date
from app.domain.policies.multi_value import split_multi_value
from app.domain.value_objects.enums import (
    Priority,
    RecordKind,
    RecordType,
    ReportType,
    SeenStatus,
)
from app.domain.value_objects.filters import RecordFilters, SourceQuery

_RECORD_MODELS = {
    RecordType.COMPLAINT: ComplaintRecordModel,
    RecordType.INSPECTION: InspectionRecordModel,
}

# ─── Mappers ─────────────────────────────────────────────────────────


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value


def _record_to_domain(row, record_type: RecordType) -> Record:
    return Record(
        id=row.id,
        record_type=record_type,
        bitrix_num=str(row.bitrix_num) if row.bitrix_num is not None else None,
        vkh_num=row.vkh_num,
        message_text=row.message_text,
        report_type=ReportType(row.report_type or 0),
        seen=SeenStatus(row.seen or 0),
        status=bool(row.status),
        priority=Priority(row.priority or 0),
        resolution_final=row.resolution_final,
        category=row.category,
        event_date=_as_date(row.event_date),
        fee=float(row.fee) if row.fee is not None else None,
    )


def _template_to_domain(m: ResolutionTemplateModel) -> ResolutionTemplate:
    return ResolutionTemplate(id=m.id, value=m.value)


def _source_export_row(row, dated: bool) -> ExportRow:
    native = row.event_date if dated else None
    return ExportRow(
        event_date=resolve_event_date(native, row.vkh_num),
        complaint_text=row.message_text or "",
        route_num=row.route_num or "",
        column_no=int(row.column_no or 0),
        category=row.category or "",
        bitrix_num=str(row.bitrix_num) if row.bitrix_num else None,
        type=RecordType.COMPLAINT,
    )


def _inspection_row(row) -> InspectionRow:
    return InspectionRow(
        event_date=_as_date(row.date_of_event),
        analysis_text=row.oper_analysis,
        route=row.route,
        column_label=row.column_num,
        violation_code=row.code_of_viol,
        task_num=str(row.task_num_bitrix) if row.task_num_bitrix else None,
    )


async def _counter(session: AsyncSession, stmt) -> Counter:
    result = await session.execute(stmt)
    return Counter({key: count for key, count in result.all() if key is not None})


def _distinct_items(values) -> list[str]:
    items: set[str] = set()
    for value in values:
        items.update(split_multi_value(value))
    return sorted(items)


# ─── Complaint sources (operational database) ────────────────────────


class SqlComplaintSourceRepository(ComplaintSourceRepository):
    def __init__(self, session: AsyncSession, registry: SourceRegistry):
        self._session = session
        self._registry = registry

    async def get_column_branches(self) -> list[ColumnBranch]:
        async with self._session.begin_nested():
            result = await self._session.execute(
                select(BranchModel).order_by(BranchModel.column_no)
            )
            return [
                ColumnBranch(column_no=m.column_no, branch_name=m.branch)
                for m in result.scalars().all()
            ]

    async def get_category_mapping(self) -> list[tuple[str, str]]:
        async with self._session.begin_nested():
            result = await self._session.execute(
                select(ChecksMappingModel.code_of_viol, ChecksMappingModel.category)
            )
            return [(code, category) for code, category in result.all()]

    async def count_dimensions(self, table: str, query: SourceQuery) -> DimensionCounts:
        source = self._registry.get(table)
        async with self._session.begin_nested():
            total = await self._session.scalar(queries.source_total(source, query))
            return DimensionCounts(
                total=total or 0,
                by_column=await _counter(self._session, queries.source_by_column(source, query)),
                by_route=await _counter(
                    self._session, queries.source_by_multi_value(source, query, "route_num")
                ),
                by_category=await _counter(
                    self._session, queries.source_by_multi_value(source, query, "category")
                ),
                by_date=await _counter(self._session, queries.source_by_date(source, query)),
            )

    async def export_rows(self, table: str, query: SourceQuery) -> list[ExportRow]:
        source = self._registry.get(table)
        async with self._session.begin_nested():
            result = await self._session.execute(queries.source_export(source, query))
            return [_source_export_row(row, source.dated) for row in result.all()]

    async def list_routes(self, table: str) -> list[str]:
        return await self._distinct(table, "route_num")

    async def list_categories(self, table: str) -> list[str]:
        return await self._distinct(table, "category")

    async def _distinct(self, table: str, column_name: str) -> list[str]:
        source = self._registry.get(table)
        async with self._session.begin_nested():
            result = await self._session.execute(queries.source_distinct(source, column_name))
            return _distinct_items(result.scalars().all())

    async def get_distribution_routes(self, columns: frozenset[int]) -> list[str] | None:
        async with self._session.begin_nested():
            distribution_id = await self._session.scalar(
                select(DistributionSetModel.id)
                .order_by(DistributionSetModel.effective_from.desc())
                .limit(1)
            )
            if distribution_id is None:
                return None
            result = await self._session.execute(
                select(distinct(RouteAssignmentModel.route))
                .where(
                    RouteAssignmentModel.distribution_id == distribution_id,
                    RouteAssignmentModel.column_number.in_(sorted(columns)),
                )
                .order_by(RouteAssignmentModel.route)
            )
            return list(result.scalars().all())


# ─── Inspections (analytics database) ────────────────────────────────


class SqlInspectionRepository(InspectionRepository):
    def __init__(self, session: AsyncSession, checks: Table):
        self._session = session
        self._checks = checks

    async def count_dimensions(self, query: SourceQuery) -> InspectionCounts:
        checks = self._checks
        total = await self._session.scalar(queries.inspection_total(checks, query))
        return InspectionCounts(
            total=total or 0,
            by_column_label=await _counter(
                self._session, queries.inspection_by_column_label(checks, query)
            ),
            by_route=await _counter(
                self._session, queries.inspection_by_value(checks, query, "route")
            ),
            by_code=await _counter(
                self._session, queries.inspection_by_value(checks, query, "code_of_viol")
            ),
            by_date=await _counter(self._session, queries.inspection_by_date(checks, query)),
        )

    async def export_rows(self, query: SourceQuery) -> list[InspectionRow]:
        result = await self._session.execute(queries.inspection_export(self._checks, query))
        return [_inspection_row(row) for row in result.all()]

    async def list_routes(self) -> list[str]:
        result = await self._session.execute(queries.inspection_distinct(self._checks, "route"))
        return list(result.scalars().all())


# ─── Triage records ──────────────────────────────────────────────────


class SqlRecordRepository(RecordRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_all(self, filters: RecordFilters) -> list[Record]:
        selects = []
        for kind in RecordKind:
            if not filters.includes(kind):
                continue
            model = _RECORD_MODELS[kind.record_type]
            selects.append(
                select(
                    *queries.record_columns(model),
                    literal(kind.record_type.value).label("record_type"),
                ).where(*queries.record_conditions(model, filters))
            )
        if not selects:
            return []

        combined = union_all(*selects).subquery()
        stmt = select(combined).order_by(
            combined.c.event_date.desc().nulls_last(),
            combined.c.bitrix_num.desc().nulls_last(),
            combined.c.id.desc(),
        )
        result = await self._session.execute(stmt)
        return [_record_to_domain(row, RecordType(row.record_type)) for row in result.all()]

    async def get_by_id(self, record_id: int, record_type: RecordType) -> Record | None:
        model = await self._session.get(_RECORD_MODELS[record_type], record_id)
        return _record_to_domain(model, record_type) if model else None

    async def update_field(
        self, record_id: int, record_type: RecordType, field: str, value: object
    ) -> None:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field {field!r} cannot be edited")
        if isinstance(value, Enum):
            value = value.value
        model = _RECORD_MODELS[record_type]
        await self._session.execute(
            update(model).where(model.id == record_id).values({field: value})
        )
        await self._session.flush()

    async def get_summary(self) -> RecordSummary:
        model = ComplaintRecordModel
        stmt = select(
            func.count(),
            func.count().filter(model.seen == int(SeenStatus.ACCEPTED)),
            func.count().filter(model.resolution_final.is_not(None)),
        ).select_from(model)
        row = (await self._session.execute(stmt)).one()
        by_report_type = await _counter(
            self._session,
            select(model.report_type, func.count()).group_by(model.report_type),
        )
        return RecordSummary(
            total=row[0],
            seen=row[1],
            with_resolution=row[2],
            by_report_type={int(k): v for k, v in sorted(by_report_type.items())},
        )

    async def list_categories(self) -> list[str]:
        values: list[str | None] = []
        for model in _RECORD_MODELS.values():
            result = await self._session.execute(
                select(distinct(model.category)).where(model.category.is_not(None))
            )
            values.extend(result.scalars().all())
        return _distinct_items(values)


class SqlResolutionTemplateRepository(ResolutionTemplateRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_all(self) -> list[ResolutionTemplate]:
        result = await self._session.execute(
            select(ResolutionTemplateModel).order_by(ResolutionTemplateModel.id)
        )
        return [_template_to_domain(m) for m in result.scalars().all()]

    async def add(self, value: str) -> ResolutionTemplate:
        next_id = await self._session.scalar(
            select(func.coalesce(func.max(ResolutionTemplateModel.id), 0) + 1)
        )
        model = ResolutionTemplateModel(id=next_id, value=value)
        self._session.add(model)
        await self._session.flush()
        return _template_to_domain(model)

    async def delete(self, template_id: int) -> bool:
        result = await self._session.execute(
            delete(ResolutionTemplateModel).where(ResolutionTemplateModel.id == template_id)
        )
        await self._session.flush()
        return result.rowcount > 0
