"""Event-date resolution: native date first, embedded " от DD.MM.YYYY" second."""

from __future__ import annotations

import re
from datetime import date, datetime

# Inbound references look like "ВХ-1234 от 01.03.2024".
EMBEDDED_DATE_RE = re.compile(r" от (\d{2})\.(\d{2})\.(\d{4})")

# Same pattern in PostgreSQL POSIX syntax, used by substring(text, pattern).
EMBEDDED_DATE_SQL_PATTERN = r" от ([0-9]{2}\.[0-9]{2}\.[0-9]{4})"
EMBEDDED_DATE_SQL_FORMAT = "DD.MM.YYYY"


def parse_embedded_date(text: str | None) -> date | None:
    """Extract the date suffix from an inbound reference.

    Returns None when the suffix is missing or is not a calendar date.
    """
    if not text:
        return None
    match = EMBEDDED_DATE_RE.search(text)
    if match is None:
        return None
    day, month, year = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def resolve_event_date(native: date | datetime | None, reference: str | None) -> date | None:
    """Native date is authoritative; otherwise fall back to the embedded one."""
    if isinstance(native, datetime):
        return native.date()
    if native is not None:
        return native
    return parse_embedded_date(reference)
