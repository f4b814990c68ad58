"""Helpers for ``;``-delimited multi-value fields (routes, categories)."""

from __future__ import annotations

SEPARATOR = ";"


def split_multi_value(raw: str | None) -> list[str]:
    """Split a stored field into trimmed, non-empty values.

    "Опоздание; Грязь" -> ["Опоздание", "Грязь"]
    """
    if not raw:
        return []
    return [part.strip() for part in raw.split(SEPARATOR) if part.strip()]


def like_patterns(value: str) -> tuple[str, str, str]:
    """LIKE patterns matching *value* inside a ``;``-joined field.

    Prefix, infix after a separator, and suffix after a separator.
    """
    return (f"{value}%", f"%{SEPARATOR}{value}%", f"%{SEPARATOR}{value}")
