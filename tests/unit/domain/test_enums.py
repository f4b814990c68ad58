"""Tests for domain enums."""

import pytest

from app.domain.value_objects.enums import (
    Priority,
    RecordKind,
    RecordType,
    ReportType,
    SeenStatus,
)


def test_triage_codes():
    assert [s.value for s in SeenStatus] == [0, 1, 2]
    assert [r.value for r in ReportType] == [0, 1, 2]
    assert [p.value for p in Priority] == [0, 1, 2]


def test_labels():
    assert SeenStatus.ACCEPTED.label == "Принято"
    assert ReportType.VERBAL.label == "Устно"
    assert Priority.HIGH.label == "Высокий"


def test_record_type_values():
    assert RecordType.COMPLAINT.value == "Жалоба"
    assert RecordType.INSPECTION.value == "Проверка"


def test_record_kind_maps_to_record_type():
    assert RecordKind.COMPLAINT.record_type == RecordType.COMPLAINT
    assert RecordKind.INSPECTION.record_type == RecordType.INSPECTION


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("complaint", RecordKind.COMPLAINT),
        (" Жалобы ", RecordKind.COMPLAINT),
        ("Жалоба", RecordKind.COMPLAINT),
        ("inspection", RecordKind.INSPECTION),
        ("check", RecordKind.INSPECTION),
        ("Проверки", RecordKind.INSPECTION),
        ("Проверка", RecordKind.INSPECTION),
    ],
)
def test_record_kind_parse_aliases(raw, expected):
    assert RecordKind.parse(raw) == expected


def test_record_kind_parse_rejects_unknown():
    with pytest.raises(ValueError):
        RecordKind.parse("audit")
