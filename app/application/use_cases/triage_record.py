"""TriageRecordUseCase: list records and apply single-field triage updates."""

from __future__ import annotations

import logging

from app.application.ports.record_repo import RecordRepository
from app.domain.entities.record import Record, RecordSummary
from app.domain.value_objects.enums import Priority, RecordType, ReportType, SeenStatus
from app.domain.value_objects.filters import RecordFilters

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    def __init__(self, record_id: int, record_type: RecordType):
        super().__init__(f"{record_type.value} #{record_id} not found")
        self.record_id = record_id
        self.record_type = record_type


class TriageRecordUseCase:
    """Each update touches exactly one column of one record."""

    def __init__(self, record_repo: RecordRepository):
        self._records = record_repo

    async def list_records(self, filters: RecordFilters) -> list[Record]:
        records = await self._records.get_all(filters)
        logger.debug("Listed %d records", len(records))
        return records

    async def summary(self) -> RecordSummary:
        return await self._records.get_summary()

    async def categories(self) -> list[str]:
        return await self._records.list_categories()

    async def update_seen(
        self, record_id: int, record_type: RecordType, seen: SeenStatus
    ) -> Record:
        return await self._update(record_id, record_type, "seen", SeenStatus(seen))

    async def update_report_type(
        self, record_id: int, record_type: RecordType, report_type: ReportType
    ) -> Record:
        return await self._update(record_id, record_type, "report_type", ReportType(report_type))

    async def update_priority(
        self, record_id: int, record_type: RecordType, priority: Priority
    ) -> Record:
        return await self._update(record_id, record_type, "priority", Priority(priority))

    async def update_resolution(
        self, record_id: int, record_type: RecordType, resolution: str
    ) -> Record:
        text = (resolution or "").strip()
        if not text:
            raise ValueError("Resolution text must not be empty")
        return await self._update(record_id, record_type, "resolution_final", text)

    async def _update(
        self, record_id: int, record_type: RecordType, field: str, value
    ) -> Record:
        record = await self._records.get_by_id(record_id, record_type)
        if record is None:
            raise RecordNotFoundError(record_id, record_type)

        old_value = getattr(record, field)
        await self._records.update_field(record_id, record_type, field, value)
        setattr(record, field, value)
        logger.info(
            "%s #%d: %s %r -> %r", record_type.value, record_id, field, old_value, value
        )
        return record
