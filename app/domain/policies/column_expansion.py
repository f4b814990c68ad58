"""ColumnExpansionPolicy: resolve mixed column/branch references to column numbers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from app.domain.entities.column_branch import ColumnBranch
from app.domain.value_objects.filters import BranchName, ColumnId, ColumnRef


def columns_by_branch(links: Iterable[ColumnBranch]) -> dict[str, list[int]]:
    """Invert the column -> branch mapping."""
    grouped: dict[str, list[int]] = {}
    for link in links:
        grouped.setdefault(link.branch_name, []).append(link.column_no)
    return grouped


def expand_columns(
    refs: Iterable[ColumnRef], branch_columns: Mapping[str, list[int]]
) -> frozenset[int]:
    """Union of explicit column ids and every column of each named branch.

    Unknown branches contribute nothing.
    """
    numbers: set[int] = set()
    for ref in refs:
        if isinstance(ref, ColumnId):
            numbers.add(ref.number)
        elif isinstance(ref, BranchName):
            numbers.update(branch_columns.get(ref.name, ()))
    return frozenset(numbers)
