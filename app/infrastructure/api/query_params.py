"""Query-string parsing: comma-separated lists into filter value objects."""

from __future__ import annotations

from datetime import date
from enum import IntEnum
from typing import TypeVar

from fastapi import Query

from app.domain.value_objects.enums import Priority, RecordKind, ReportType, SeenStatus
from app.domain.value_objects.filters import (
    RecordFilters,
    StatisticsFilters,
    parse_column_ref,
)

E = TypeVar("E", bound=IntEnum)


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def split_list(raw: str | None) -> list[str]:
    """Split a comma-separated parameter, dropping blank items."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def parse_enum_list(raw: str | None, enum_cls: type[E]) -> tuple[E, ...]:
    """Integer-coded enum list. Non-numeric items are ignored, unknown codes rejected."""
    values = []
    for item in split_list(raw):
        try:
            number = int(item)
        except ValueError:
            continue
        values.append(enum_cls(number))
    return tuple(values)


def parse_bool_list(raw: str | None) -> tuple[bool, ...]:
    return tuple(item == "true" for item in split_list(raw))


def parse_date(raw: str | None) -> date | None:
    value = clean_string(raw)
    if value is None:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}, expected YYYY-MM-DD") from None


def parse_kinds(raw: str | None) -> tuple[RecordKind, ...]:
    return tuple(RecordKind.parse(item) for item in split_list(raw))


def parse_columns(raw: str | None):
    refs = (parse_column_ref(item) for item in split_list(raw))
    return tuple(ref for ref in refs if ref is not None)


# ─── FastAPI dependencies ────────────────────────────────────────────


def statistics_filters(
    date_from: str | None = Query(None, alias="dateFrom"),
    date_to: str | None = Query(None, alias="dateTo"),
    columns: str | None = None,
    routes: str | None = None,
    categories: str | None = None,
    tables: str | None = None,
    types: str | None = None,
) -> StatisticsFilters:
    return StatisticsFilters.normalize(
        date_from=parse_date(date_from),
        date_to=parse_date(date_to),
        columns=parse_columns(columns),
        routes=split_list(routes),
        categories=split_list(categories),
        tables=split_list(tables),
        kinds=parse_kinds(types),
    )


def record_filters(
    category: str | None = None,
    seen_status: str | None = None,
    report_type: str | None = None,
    priority: str | None = None,
    status: str | None = None,
    search: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    damage_only: bool = False,
    types: str | None = None,
) -> RecordFilters:
    # Without an explicit report type the list shows records not yet reported.
    report_types = (
        parse_enum_list(report_type, ReportType)
        if report_type
        else (ReportType.NOT_REQUIRED,)
    )
    return RecordFilters(
        categories=tuple(split_list(category)),
        seen=parse_enum_list(seen_status, SeenStatus),
        report_types=report_types,
        priorities=parse_enum_list(priority, Priority),
        statuses=parse_bool_list(status),
        search=clean_string(search),
        date_from=parse_date(date_from),
        date_to=parse_date(date_to),
        damage_only=damage_only,
        kinds=parse_kinds(types),
    )
