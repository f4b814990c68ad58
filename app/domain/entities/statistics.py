"""Statistics entities: per-source dimension counts, the merged result, export rows."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date

from app.domain.entities.column_branch import ColumnBranch
from app.domain.value_objects.enums import RecordType


@dataclass
class DimensionCounts:
    """Counts produced by one source (one complaint table or the inspection table)."""

    total: int = 0
    by_column: Counter[int] = field(default_factory=Counter)
    by_route: Counter[str] = field(default_factory=Counter)
    by_category: Counter[str] = field(default_factory=Counter)
    by_date: Counter[date] = field(default_factory=Counter)


@dataclass
class StatisticsData:
    """Running totals across sources. Counts for the same key are summed.

    Branch counts are derived from column counts at read time, so a branch
    always equals the sum of exactly the columns mapped to it.
    """

    column_branches: dict[int, str] = field(default_factory=dict)
    total_count: int = 0
    by_columns: Counter[int] = field(default_factory=Counter)
    by_routes: Counter[str] = field(default_factory=Counter)
    by_categories: Counter[str] = field(default_factory=Counter)
    by_dates: Counter[date] = field(default_factory=Counter)

    @classmethod
    def for_links(cls, links: Iterable[ColumnBranch]) -> StatisticsData:
        return cls(column_branches={link.column_no: link.branch_name for link in links})

    def merge(self, counts: DimensionCounts) -> None:
        self.total_count += counts.total
        self.by_columns.update(counts.by_column)
        self.by_routes.update(counts.by_route)
        self.by_categories.update(counts.by_category)
        self.by_dates.update(counts.by_date)

    def by_branches(self) -> Counter[str]:
        branches: Counter[str] = Counter()
        for column_no, count in self.by_columns.items():
            branch = self.column_branches.get(column_no)
            if branch:
                branches[branch] += count
        return branches

    def to_dict(self) -> dict:
        """Sorted payload: columns and dates ascending, the rest by count descending."""
        return {
            "byColumns": [
                {
                    "column_no": column_no,
                    "count": count,
                    "branch_name": self.column_branches.get(column_no),
                }
                for column_no, count in sorted(self.by_columns.items())
            ],
            "byBranches": [
                {"branch_name": name, "count": count}
                for name, count in _by_count_desc(self.by_branches())
            ],
            "byRoutes": [
                {"route_num": route, "count": count}
                for route, count in _by_count_desc(self.by_routes)
            ],
            "byCategories": [
                {"category": category, "count": count}
                for category, count in _by_count_desc(self.by_categories)
            ],
            "byDates": [
                {"date": day.isoformat(), "count": count}
                for day, count in sorted(self.by_dates.items())
            ],
            "totalCount": self.total_count,
        }


def _by_count_desc(counts: Mapping[str, int]) -> list[tuple[str, int]]:
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


@dataclass(frozen=True)
class ExportRow:
    """One flattened record of the spreadsheet export."""

    event_date: date | None
    complaint_text: str
    route_num: str
    column_no: int
    category: str
    bitrix_num: str | None
    type: RecordType
