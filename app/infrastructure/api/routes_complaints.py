"""Complaint triage endpoints: record list, summary, single-field updates."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.triage_record import TriageRecordUseCase
from app.domain.value_objects.enums import Priority, RecordKind, ReportType, SeenStatus
from app.domain.value_objects.filters import RecordFilters
from app.infrastructure.api.dependencies import get_db_session, get_triage_uc
from app.infrastructure.api.envelope import ok
from app.infrastructure.api.query_params import record_filters

router = APIRouter(prefix="/complaints", tags=["complaints"])
categories_router = APIRouter(tags=["complaints"])


# ─── Request bodies ──────────────────────────────────────────────────


class _RecordUpdate(BaseModel):
    type: RecordKind = RecordKind.COMPLAINT

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value):
        if value is None or value == "":
            return RecordKind.COMPLAINT
        if isinstance(value, str):
            return RecordKind.parse(value)
        return value


class SeenUpdate(_RecordUpdate):
    seen: SeenStatus


class ReportTypeUpdate(_RecordUpdate):
    report_type: ReportType


class PriorityUpdate(_RecordUpdate):
    priority: Priority


class ResolutionUpdate(_RecordUpdate):
    resolution_final: str


# ─── Endpoints ───────────────────────────────────────────────────────


@router.get("")
async def list_complaints(
    filters: RecordFilters = Depends(record_filters),
    uc: TriageRecordUseCase = Depends(get_triage_uc),
):
    """List complaints and inspections matching the filters, newest first."""
    records = await uc.list_records(filters)
    return ok([r.to_dict() for r in records], f"Found {len(records)} records")


@router.get("/summary")
async def complaints_summary(uc: TriageRecordUseCase = Depends(get_triage_uc)):
    summary = await uc.summary()
    return ok(
        {
            "total": summary.total,
            "seen": summary.seen,
            "with_resolution": summary.with_resolution,
            "by_report_type": [
                {"report_type": report_type, "count": count}
                for report_type, count in summary.by_report_type.items()
            ],
        },
        "Summary collected",
    )


@router.patch("/{record_id}/seen")
async def update_seen(
    record_id: int,
    body: SeenUpdate,
    uc: TriageRecordUseCase = Depends(get_triage_uc),
    session: AsyncSession = Depends(get_db_session),
):
    record = await uc.update_seen(record_id, body.type.record_type, body.seen)
    await session.commit()
    return ok(record.to_dict(), f'Seen status set to "{body.seen.label}"')


@router.patch("/{record_id}/report-type")
async def update_report_type(
    record_id: int,
    body: ReportTypeUpdate,
    uc: TriageRecordUseCase = Depends(get_triage_uc),
    session: AsyncSession = Depends(get_db_session),
):
    record = await uc.update_report_type(record_id, body.type.record_type, body.report_type)
    await session.commit()
    return ok(record.to_dict(), f'Report type set to "{body.report_type.label}"')


@router.patch("/{record_id}/priority")
async def update_priority(
    record_id: int,
    body: PriorityUpdate,
    uc: TriageRecordUseCase = Depends(get_triage_uc),
    session: AsyncSession = Depends(get_db_session),
):
    record = await uc.update_priority(record_id, body.type.record_type, body.priority)
    await session.commit()
    return ok(record.to_dict(), f'Priority set to "{body.priority.label}"')


@router.patch("/{record_id}/resolution")
async def update_resolution(
    record_id: int,
    body: ResolutionUpdate,
    uc: TriageRecordUseCase = Depends(get_triage_uc),
    session: AsyncSession = Depends(get_db_session),
):
    record = await uc.update_resolution(record_id, body.type.record_type, body.resolution_final)
    await session.commit()
    return ok(record.to_dict(), "Resolution saved")


@categories_router.get("/categories")
async def list_categories(uc: TriageRecordUseCase = Depends(get_triage_uc)):
    """Distinct categories across both record lists."""
    categories = await uc.categories()
    return ok(categories, f"Found {len(categories)} categories")
