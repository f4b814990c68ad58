"""Inspection-side raw results, before column parsing and category mapping."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date


@dataclass
class InspectionCounts:
    """Counts keyed by stored values: column labels and violation codes."""

    total: int = 0
    by_column_label: Counter[str] = field(default_factory=Counter)
    by_route: Counter[str] = field(default_factory=Counter)
    by_code: Counter[str] = field(default_factory=Counter)
    by_date: Counter[date] = field(default_factory=Counter)


@dataclass(frozen=True)
class InspectionRow:
    event_date: date | None
    analysis_text: str | None
    route: str | None
    column_label: str | None
    violation_code: str | None
    task_num: str | None
