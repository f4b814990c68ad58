"""Domain enums: pure Python, no external dependencies."""

from enum import Enum, IntEnum


class ReportType(IntEnum):
    NOT_REQUIRED = 0
    BITRIX = 1
    VERBAL = 2

    @property
    def label(self) -> str:
        return {0: "Не требуется", 1: "Битрикс", 2: "Устно"}[self.value]


class SeenStatus(IntEnum):
    NOT_REQUIRED = 0
    NOT_ACCEPTED = 1
    ACCEPTED = 2

    @property
    def label(self) -> str:
        return {0: "Не требуется", 1: "Не принято", 2: "Принято"}[self.value]


class Priority(IntEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @property
    def label(self) -> str:
        return {0: "Низкий", 1: "Средний", 2: "Высокий"}[self.value]


class RecordType(str, Enum):
    """Discriminator stored on list rows and carried by export rows."""

    COMPLAINT = "Жалоба"
    INSPECTION = "Проверка"


class RecordKind(str, Enum):
    """Record-type tag used in filters."""

    COMPLAINT = "complaint"
    INSPECTION = "inspection"

    @property
    def record_type(self) -> RecordType:
        if self is RecordKind.COMPLAINT:
            return RecordType.COMPLAINT
        return RecordType.INSPECTION

    @classmethod
    def parse(cls, raw: str) -> "RecordKind":
        """Accept the English tags, the legacy ``check`` tag and Russian labels."""
        key = raw.strip().lower()
        if key in _KIND_ALIASES:
            return _KIND_ALIASES[key]
        raise ValueError(f"Unknown record type: {raw!r}")


_KIND_ALIASES: dict[str, RecordKind] = {
    "complaint": RecordKind.COMPLAINT,
    "complaints": RecordKind.COMPLAINT,
    "жалоба": RecordKind.COMPLAINT,
    "жалобы": RecordKind.COMPLAINT,
    "inspection": RecordKind.INSPECTION,
    "inspections": RecordKind.INSPECTION,
    "check": RecordKind.INSPECTION,
    "checks": RecordKind.INSPECTION,
    "проверка": RecordKind.INSPECTION,
    "проверки": RecordKind.INSPECTION,
}
