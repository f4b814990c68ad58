"""ColumnBranch entity: a dispatch column and the depot it belongs to."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ColumnBranch:
    column_no: int
    branch_name: str


# Served when the branch table cannot be read.
FALLBACK_COLUMN_BRANCHES: tuple[ColumnBranch, ...] = tuple(
    ColumnBranch(column_no, branch)
    for column_no, branch in (
        (1, "Витебский"),
        (2, "Витебский"),
        (3, "Витебский"),
        (4, "Горская"),
        (5, "Горская"),
        (6, "Горская"),
        (7, "Горская"),
        (8, "Горская"),
        (9, "Зеленогорск"),
        (10, "Витебский"),
        (11, "Витебский"),
        (12, "Горская"),
        (13, "Горская"),
        (14, "Горская"),
    )
)
