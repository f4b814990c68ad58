"""Port interface for the analytics database: inspection records."""

from abc import ABC, abstractmethod

from app.domain.entities.inspection import InspectionCounts, InspectionRow
from app.domain.value_objects.filters import SourceQuery


class InspectionRepository(ABC):
    @abstractmethod
    async def count_dimensions(self, query: SourceQuery) -> InspectionCounts:
        """Aggregate inspections.

        ``query.violation_codes`` replaces category names on this side;
        an empty set must match no rows.
        """
        ...

    @abstractmethod
    async def export_rows(self, query: SourceQuery) -> list[InspectionRow]:
        ...

    @abstractmethod
    async def list_routes(self) -> list[str]:
        ...
