"""Port interface for triage records (complaints_list / checks_list)."""

from abc import ABC, abstractmethod

from app.domain.entities.record import Record, RecordSummary
from app.domain.value_objects.enums import RecordType
from app.domain.value_objects.filters import RecordFilters

# Columns a triage action may change.
EDITABLE_FIELDS = frozenset({"seen", "report_type", "priority", "resolution_final"})


class RecordRepository(ABC):
    @abstractmethod
    async def get_all(self, filters: RecordFilters) -> list[Record]:
        """Return matching records of the selected types, newest first."""
        ...

    @abstractmethod
    async def get_by_id(self, record_id: int, record_type: RecordType) -> Record | None:
        ...

    @abstractmethod
    async def update_field(
        self, record_id: int, record_type: RecordType, field: str, value: object
    ) -> None:
        """Set a single column listed in EDITABLE_FIELDS."""
        ...

    @abstractmethod
    async def get_summary(self) -> RecordSummary:
        ...

    @abstractmethod
    async def list_categories(self) -> list[str]:
        ...
