"""Pytest configuration, in-memory port fakes and shared fixtures."""

from __future__ import annotations

from datetime import date

import pytest

from app.application.category_mapping import CategoryMappingCache
from app.application.ports.complaint_source_repo import (
    ComplaintSourceRepository,
    UnknownSourceTableError,
)
from app.application.ports.inspection_repo import InspectionRepository
from app.application.ports.record_repo import EDITABLE_FIELDS, RecordRepository
from app.application.ports.template_repo import ResolutionTemplateRepository
from app.domain.entities.column_branch import ColumnBranch
from app.domain.entities.inspection import InspectionCounts
from app.domain.entities.record import Record, RecordSummary, ResolutionTemplate
from app.domain.entities.statistics import DimensionCounts
from app.domain.value_objects.enums import (
    Priority,
    RecordKind,
    RecordType,
    ReportType,
    SeenStatus,
)

TABLES = ("ob", "data_01_30", "data_01_40", "data_01_07")

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeComplaintSource(ComplaintSourceRepository):
    """Serves canned per-table results and records every query it receives."""

    def __init__(self, links=(), mapping=(), tables=TABLES):
        self.links = list(links)
        self.mapping = list(mapping)
        self.tables = set(tables)
        self.counts: dict[str, DimensionCounts] = {}
        self.export: dict[str, list] = {}
        self.routes: dict[str, list[str]] = {}
        self.categories: dict[str, list[str]] = {}
        self.distribution: dict[int, list[str]] | None = None
        self.failing: set[str] = set()
        self.branches_error = False
        self.queries: list = []
        self.mapping_calls = 0

    def _check(self, table):
        if table not in self.tables:
            raise UnknownSourceTableError(table)
        if table in self.failing:
            raise RuntimeError(f"relation {table} is broken")

    async def get_column_branches(self):
        if self.branches_error:
            raise RuntimeError("branch table unavailable")
        return list(self.links)

    async def get_category_mapping(self):
        self.mapping_calls += 1
        return list(self.mapping)

    async def count_dimensions(self, table, query):
        self.queries.append((table, query))
        self._check(table)
        return self.counts.get(table, DimensionCounts())

    async def export_rows(self, table, query):
        self.queries.append((table, query))
        self._check(table)
        return list(self.export.get(table, []))

    async def list_routes(self, table):
        self._check(table)
        return list(self.routes.get(table, []))

    async def list_categories(self, table):
        self._check(table)
        return list(self.categories.get(table, []))

    async def get_distribution_routes(self, columns):
        if self.distribution is None:
            return None
        routes = set()
        for column in columns:
            routes.update(self.distribution.get(column, []))
        return sorted(routes)


class FakeInspections(InspectionRepository):
    def __init__(self):
        self.counts = InspectionCounts()
        self.rows: list = []
        self.routes: list[str] = []
        self.fail = False
        self.queries: list = []

    async def count_dimensions(self, query):
        self.queries.append(query)
        if self.fail:
            raise ConnectionError("analytics database unreachable")
        return self.counts

    async def export_rows(self, query):
        self.queries.append(query)
        if self.fail:
            raise ConnectionError("analytics database unreachable")
        return list(self.rows)

    async def list_routes(self):
        if self.fail:
            raise ConnectionError("analytics database unreachable")
        return list(self.routes)


class FakeRecordRepo(RecordRepository):
    def __init__(self, records=()):
        self.records = {(r.record_type, r.id): r for r in records}
        self.updates: list[tuple] = []

    async def get_all(self, filters):
        result = []
        for record in self.records.values():
            kind = (
                RecordKind.COMPLAINT
                if record.record_type == RecordType.COMPLAINT
                else RecordKind.INSPECTION
            )
            if not filters.includes(kind):
                continue
            if filters.report_types and record.report_type not in filters.report_types:
                continue
            if filters.seen and record.seen not in filters.seen:
                continue
            if filters.damage_only and not record.has_damage():
                continue
            result.append(record)
        return sorted(result, key=lambda r: (r.event_date or date.min, r.id), reverse=True)

    async def get_by_id(self, record_id, record_type):
        record = self.records.get((record_type, record_id))
        if record is None:
            return None
        # Detached copy, like a fresh ORM load
        return Record(**vars(record))

    async def update_field(self, record_id, record_type, field, value):
        assert field in EDITABLE_FIELDS
        self.updates.append((record_id, record_type, field, value))
        setattr(self.records[(record_type, record_id)], field, value)

    async def get_summary(self):
        complaints = [r for r in self.records.values() if r.record_type == RecordType.COMPLAINT]
        by_report_type: dict[int, int] = {}
        for r in complaints:
            by_report_type[int(r.report_type)] = by_report_type.get(int(r.report_type), 0) + 1
        return RecordSummary(
            total=len(complaints),
            seen=sum(1 for r in complaints if r.seen == SeenStatus.ACCEPTED),
            with_resolution=sum(1 for r in complaints if r.resolution_final),
            by_report_type=by_report_type,
        )

    async def list_categories(self):
        values = set()
        for record in self.records.values():
            values.update(record.categories())
        return sorted(values)


class FakeTemplateRepo(ResolutionTemplateRepository):
    def __init__(self, values=()):
        self.templates = {i: ResolutionTemplate(i, v) for i, v in enumerate(values, start=1)}

    async def get_all(self):
        return [self.templates[k] for k in sorted(self.templates)]

    async def add(self, value):
        template = ResolutionTemplate(id=max(self.templates, default=0) + 1, value=value)
        self.templates[template.id] = template
        return template

    async def delete(self, template_id):
        return self.templates.pop(template_id, None) is not None


def make_record(record_id, record_type=RecordType.COMPLAINT, **overrides) -> Record:
    fields = dict(
        id=record_id,
        record_type=record_type,
        bitrix_num=str(1000 + record_id),
        vkh_num=f"ВХ-{record_id} от 01.03.2024",
        message_text="Автобус не пришёл",
        report_type=ReportType.NOT_REQUIRED,
        seen=SeenStatus.NOT_REQUIRED,
        status=False,
        priority=Priority.LOW,
        resolution_final=None,
        category="Опоздание",
        event_date=date(2024, 3, 1),
        fee=None,
    )
    fields.update(overrides)
    return Record(**fields)


# ─── Fixtures ───────────────────────────────────────────────────────


@pytest.fixture
def links():
    return [
        ColumnBranch(1, "Витебский"),
        ColumnBranch(2, "Витебский"),
        ColumnBranch(4, "Горская"),
        ColumnBranch(5, "Горская"),
        ColumnBranch(9, "Зеленогорск"),
    ]


@pytest.fixture
def source(links):
    return FakeComplaintSource(
        links=links,
        mapping=[("V01", "Опоздание"), ("V02", "Опоздание"), ("V10", "Грязь в салоне")],
    )


@pytest.fixture
def inspections():
    return FakeInspections()


@pytest.fixture
def category_cache():
    return CategoryMappingCache()


@pytest.fixture
def record_repo():
    return FakeRecordRepo(
        [
            make_record(1),
            make_record(2, event_date=date(2024, 3, 5), fee=1500.0),
            make_record(3, report_type=ReportType.BITRIX, seen=SeenStatus.ACCEPTED),
            make_record(
                7,
                RecordType.INSPECTION,
                category="Грязь в салоне",
                event_date=date(2024, 2, 20),
            ),
        ]
    )


@pytest.fixture
def template_repo():
    return FakeTemplateRepo(["Проведена беседа с водителем", "Водитель депремирован"])


@pytest.fixture
def record_factory():
    return make_record
