"""Tests for record triage and resolution templates."""

from __future__ import annotations

import pytest

from app.application.use_cases.manage_templates import ManageTemplatesUseCase
from app.application.use_cases.triage_record import RecordNotFoundError, TriageRecordUseCase
from app.domain.value_objects.enums import (
    Priority,
    RecordKind,
    RecordType,
    ReportType,
    SeenStatus,
)
from app.domain.value_objects.filters import RecordFilters

# ─── Listing ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_records_newest_first(record_repo):
    uc = TriageRecordUseCase(record_repo)
    records = await uc.list_records(RecordFilters(report_types=(ReportType.NOT_REQUIRED,)))
    assert [r.id for r in records] == [2, 1, 7]


@pytest.mark.asyncio
async def test_list_records_by_kind(record_repo):
    uc = TriageRecordUseCase(record_repo)
    records = await uc.list_records(RecordFilters(kinds=(RecordKind.INSPECTION,)))
    assert [(r.record_type, r.id) for r in records] == [(RecordType.INSPECTION, 7)]


@pytest.mark.asyncio
async def test_summary(record_repo):
    summary = await TriageRecordUseCase(record_repo).summary()
    assert summary.total == 3
    assert summary.seen == 1
    assert summary.by_report_type == {0: 2, 1: 1}


@pytest.mark.asyncio
async def test_categories(record_repo):
    assert await TriageRecordUseCase(record_repo).categories() == ["Грязь в салоне", "Опоздание"]


# ─── Single-field updates ───────────────────────────────────────────


@pytest.mark.asyncio
async def test_update_seen_touches_one_field(record_repo):
    uc = TriageRecordUseCase(record_repo)
    record = await uc.update_seen(1, RecordType.COMPLAINT, SeenStatus.ACCEPTED)

    assert record.seen == SeenStatus.ACCEPTED
    assert record_repo.updates == [(1, RecordType.COMPLAINT, "seen", SeenStatus.ACCEPTED)]


@pytest.mark.asyncio
async def test_update_targets_record_type(record_repo):
    uc = TriageRecordUseCase(record_repo)
    await uc.update_priority(7, RecordType.INSPECTION, Priority.HIGH)

    assert record_repo.records[(RecordType.INSPECTION, 7)].priority == Priority.HIGH
    with pytest.raises(RecordNotFoundError):
        await uc.update_priority(7, RecordType.COMPLAINT, Priority.HIGH)


@pytest.mark.asyncio
async def test_update_report_type(record_repo):
    uc = TriageRecordUseCase(record_repo)
    record = await uc.update_report_type(2, RecordType.COMPLAINT, ReportType.VERBAL)
    assert record.report_type == ReportType.VERBAL


@pytest.mark.asyncio
async def test_update_resolution_keeps_seen(record_repo):
    uc = TriageRecordUseCase(record_repo)
    record = await uc.update_resolution(1, RecordType.COMPLAINT, "  Проведена беседа  ")

    assert record.resolution_final == "Проведена беседа"
    assert record.seen == SeenStatus.NOT_REQUIRED
    assert len(record_repo.updates) == 1


@pytest.mark.asyncio
async def test_update_resolution_rejects_empty(record_repo):
    uc = TriageRecordUseCase(record_repo)
    with pytest.raises(ValueError):
        await uc.update_resolution(1, RecordType.COMPLAINT, "   ")
    assert record_repo.updates == []


@pytest.mark.asyncio
async def test_update_rejects_invalid_code(record_repo):
    uc = TriageRecordUseCase(record_repo)
    with pytest.raises(ValueError):
        await uc.update_seen(1, RecordType.COMPLAINT, 5)


@pytest.mark.asyncio
async def test_update_unknown_record(record_repo):
    uc = TriageRecordUseCase(record_repo)
    with pytest.raises(RecordNotFoundError):
        await uc.update_seen(404, RecordType.COMPLAINT, SeenStatus.ACCEPTED)


# ─── Templates ──────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_add_template_gets_next_id(template_repo):
    uc = ManageTemplatesUseCase(template_repo)
    template = await uc.add_template("  Маршрут проверен  ")
    assert template.id == 3
    assert template.value == "Маршрут проверен"


@pytest.mark.asyncio
async def test_add_empty_template_rejected(template_repo):
    with pytest.raises(ValueError):
        await ManageTemplatesUseCase(template_repo).add_template(" ")


@pytest.mark.asyncio
async def test_delete_template(template_repo):
    uc = ManageTemplatesUseCase(template_repo)
    assert await uc.delete_template(1) is True
    assert await uc.delete_template(1) is False
    assert [t.id for t in await uc.list_templates()] == [2]
