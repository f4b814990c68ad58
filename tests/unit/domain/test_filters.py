"""Tests for filter value objects and column expansion."""

from datetime import date

import pytest

from app.domain.entities.column_branch import ColumnBranch
from app.domain.policies.column_expansion import columns_by_branch, expand_columns
from app.domain.value_objects.enums import RecordKind
from app.domain.value_objects.filters import (
    BranchName,
    ColumnId,
    RecordFilters,
    StatisticsFilters,
    parse_column_ref,
)


def test_parse_column_ref():
    assert parse_column_ref("12") == ColumnId(12)
    assert parse_column_ref(" Горская ") == BranchName("Горская")
    assert parse_column_ref("  ") is None


def test_normalize_dedupes_keeping_first_occurrence():
    filters = StatisticsFilters.normalize(
        routes=["5", " 12 ", "5", ""],
        columns=[ColumnId(3), BranchName("Горская"), ColumnId(3)],
        kinds=[RecordKind.INSPECTION, RecordKind.INSPECTION],
    )
    assert filters.routes == ("5", "12")
    assert filters.columns == (ColumnId(3), BranchName("Горская"))
    assert filters.kinds == (RecordKind.INSPECTION,)


def test_normalize_rejects_inverted_range():
    with pytest.raises(ValueError):
        StatisticsFilters.normalize(date_from=date(2024, 3, 2), date_to=date(2024, 3, 1))


def test_single_day_range_is_allowed():
    filters = StatisticsFilters.normalize(date_from=date(2024, 3, 1), date_to=date(2024, 3, 1))
    assert filters.has_date_range


def test_empty_kinds_include_everything():
    filters = StatisticsFilters.normalize()
    assert filters.includes(RecordKind.COMPLAINT)
    assert filters.includes(RecordKind.INSPECTION)
    assert not filters.has_date_range


def test_record_filters_kinds():
    filters = RecordFilters(kinds=(RecordKind.INSPECTION,))
    assert filters.includes(RecordKind.INSPECTION)
    assert not filters.includes(RecordKind.COMPLAINT)


# ─── Column expansion ───────────────────────────────────────────────


LINKS = [
    ColumnBranch(1, "Витебский"),
    ColumnBranch(2, "Витебский"),
    ColumnBranch(4, "Горская"),
]


def test_columns_by_branch():
    assert columns_by_branch(LINKS) == {"Витебский": [1, 2], "Горская": [4]}


def test_expand_union_of_ids_and_branches():
    refs = [ColumnId(9), BranchName("Витебский")]
    assert expand_columns(refs, columns_by_branch(LINKS)) == frozenset({1, 2, 9})


def test_unknown_branch_contributes_nothing():
    refs = [BranchName("Несуществующая")]
    assert expand_columns(refs, columns_by_branch(LINKS)) == frozenset()
