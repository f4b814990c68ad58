"""Record entity: a complaint or inspection under triage."""

from dataclasses import dataclass
from datetime import date

from app.domain.policies.multi_value import split_multi_value
from app.domain.value_objects.enums import Priority, RecordType, ReportType, SeenStatus

# Records with at least this fee count as "with damage".
DAMAGE_THRESHOLD = 1000.0


@dataclass
class Record:
    id: int
    record_type: RecordType
    bitrix_num: str | None
    vkh_num: str | None
    message_text: str | None
    report_type: ReportType
    seen: SeenStatus
    status: bool
    priority: Priority
    resolution_final: str | None
    category: str | None
    event_date: date | None
    fee: float | None

    def categories(self) -> list[str]:
        return split_multi_value(self.category)

    def has_damage(self) -> bool:
        return self.fee is not None and self.fee >= DAMAGE_THRESHOLD

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "bitrix_num": self.bitrix_num,
            "vkh_num": self.vkh_num,
            "message_text": self.message_text,
            "report_type": int(self.report_type),
            "seen": int(self.seen),
            "status": self.status,
            "priority": int(self.priority),
            "resolution_final": self.resolution_final,
            "category": self.category,
            "categories": self.categories(),
            "event_date": self.event_date.isoformat() if self.event_date else None,
            "fee": self.fee,
            "has_damage": self.has_damage(),
            "record_type": self.record_type.value,
        }


@dataclass
class ResolutionTemplate:
    id: int | None
    value: str


@dataclass(frozen=True)
class RecordSummary:
    total: int
    seen: int
    with_resolution: int
    by_report_type: dict[int, int]
