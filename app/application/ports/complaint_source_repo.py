"""Port interface for the operational database: complaint tables and reference data."""

from abc import ABC, abstractmethod

from app.domain.entities.column_branch import ColumnBranch
from app.domain.entities.statistics import DimensionCounts, ExportRow
from app.domain.value_objects.filters import SourceQuery


class ComplaintSourceRepository(ABC):
    @abstractmethod
    async def get_column_branches(self) -> list[ColumnBranch]:
        ...

    @abstractmethod
    async def get_category_mapping(self) -> list[tuple[str, str]]:
        """Return (violation_code, category) pairs."""
        ...

    @abstractmethod
    async def count_dimensions(self, table: str, query: SourceQuery) -> DimensionCounts:
        """Aggregate one complaint table.

        Raises UnknownSourceTableError for a table outside the configured set.
        """
        ...

    @abstractmethod
    async def export_rows(self, table: str, query: SourceQuery) -> list[ExportRow]:
        ...

    @abstractmethod
    async def list_routes(self, table: str) -> list[str]:
        ...

    @abstractmethod
    async def list_categories(self, table: str) -> list[str]:
        ...

    @abstractmethod
    async def get_distribution_routes(self, columns: frozenset[int]) -> list[str] | None:
        """Routes assigned to *columns* by the latest distribution.

        Returns None when no distribution exists.
        """
        ...


class UnknownSourceTableError(LookupError):
    def __init__(self, table: str):
        super().__init__(f"Unknown complaint source table: {table}")
        self.table = table
