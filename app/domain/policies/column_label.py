"""Inspection column labels: "Колонна № <N>" <-> N."""

from __future__ import annotations

import re

COLUMN_LABEL_RE = re.compile(r"Колонна\s*№\s*(\d+)", re.IGNORECASE)

# PostgreSQL regex used to keep only well-formed labels in SQL.
COLUMN_LABEL_SQL_PATTERN = "Колонна № [0-9]+"


def column_label(number: int) -> str:
    return f"Колонна № {number}"


def extract_column_number(label: str | None) -> int | None:
    if not label:
        return None
    match = COLUMN_LABEL_RE.search(label)
    return int(match.group(1)) if match else None
