"""Filter value objects: statistics filters and record-list filters."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import TypeVar, Union

from app.domain.value_objects.enums import Priority, RecordKind, ReportType, SeenStatus

T = TypeVar("T")


@dataclass(frozen=True)
class ColumnId:
    """A physical column referenced by its number."""

    number: int


@dataclass(frozen=True)
class BranchName:
    """A depot referenced by name; stands for all of its columns."""

    name: str


ColumnRef = Union[ColumnId, BranchName]


def parse_column_ref(raw: str) -> ColumnRef | None:
    """Turn one item of the ``columns`` list into a tagged reference.

    Numeric items are column ids, anything else is a branch name.
    Blank items yield None.
    """
    value = raw.strip()
    if not value:
        return None
    try:
        return ColumnId(int(value))
    except ValueError:
        return BranchName(value)


def dedupe(items: Iterable[T]) -> tuple[T, ...]:
    """Drop duplicates, keeping the first occurrence order."""
    return tuple(dict.fromkeys(items))


def _clean_strings(items: Iterable[str]) -> tuple[str, ...]:
    return dedupe(s.strip() for s in items if s and s.strip())


@dataclass(frozen=True)
class StatisticsFilters:
    """Normalized statistics filter set.

    Every empty dimension means "no restriction".
    """

    date_from: date | None = None
    date_to: date | None = None
    columns: tuple[ColumnRef, ...] = ()
    routes: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    tables: tuple[str, ...] = ()
    kinds: tuple[RecordKind, ...] = ()

    @classmethod
    def normalize(
        cls,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        columns: Iterable[ColumnRef] = (),
        routes: Iterable[str] = (),
        categories: Iterable[str] = (),
        tables: Iterable[str] = (),
        kinds: Iterable[RecordKind] = (),
    ) -> StatisticsFilters:
        if date_from and date_to and date_from > date_to:
            raise ValueError("date_from must not be after date_to")
        return cls(
            date_from=date_from,
            date_to=date_to,
            columns=dedupe(columns),
            routes=_clean_strings(routes),
            categories=_clean_strings(categories),
            tables=_clean_strings(tables),
            kinds=dedupe(kinds),
        )

    def includes(self, kind: RecordKind) -> bool:
        return not self.kinds or kind in self.kinds

    @property
    def has_date_range(self) -> bool:
        return self.date_from is not None or self.date_to is not None


@dataclass(frozen=True)
class SourceQuery:
    """Predicates in the form the source repositories apply them.

    ``column_numbers`` is None when the column dimension is unrestricted.
    ``violation_codes`` is only read by the inspection side: None means
    unrestricted, an empty set means nothing can match.
    """

    date_from: date | None = None
    date_to: date | None = None
    column_numbers: frozenset[int] | None = None
    routes: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    violation_codes: frozenset[str] | None = None

    @property
    def has_date_range(self) -> bool:
        return self.date_from is not None or self.date_to is not None


@dataclass(frozen=True)
class RecordFilters:
    """Filters of the triage record list."""

    categories: tuple[str, ...] = ()
    seen: tuple[SeenStatus, ...] = ()
    report_types: tuple[ReportType, ...] = ()
    priorities: tuple[Priority, ...] = ()
    statuses: tuple[bool, ...] = ()
    search: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    damage_only: bool = False
    kinds: tuple[RecordKind, ...] = field(default=())

    def includes(self, kind: RecordKind) -> bool:
        return not self.kinds or kind in self.kinds
