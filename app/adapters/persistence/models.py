"""SQLAlchemy ORM models: operational database tables."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.adapters.persistence.database import Base


class RecordColumnsMixin:
    """Columns shared by the complaint and inspection triage lists."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    bitrix_num: Mapped[str | None] = mapped_column(String(50), nullable=True)
    vkh_num: Mapped[str | None] = mapped_column(String(200), nullable=True)
    message_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    report_type: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    seen: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    status: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    priority: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    resolution_final: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    fee: Mapped[float | None] = mapped_column(Float, nullable=True)


class ComplaintRecordModel(RecordColumnsMixin, Base):
    __tablename__ = "complaints_list"


class InspectionRecordModel(RecordColumnsMixin, Base):
    __tablename__ = "checks_list"


class ResolutionTemplateModel(Base):
    __tablename__ = "resolution_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)


class BranchModel(Base):
    __tablename__ = "branch"

    column_no: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    branch: Mapped[str] = mapped_column(String(100), nullable=False)


class DistributionSetModel(Base):
    __tablename__ = "distribution_set"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    effective_from: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class RouteAssignmentModel(Base):
    __tablename__ = "route_assignment"

    distribution_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("distribution_set.id"), primary_key=True
    )
    column_number: Mapped[int] = mapped_column(Integer, primary_key=True)
    route: Mapped[str] = mapped_column(String(50), primary_key=True)


class ChecksMappingModel(Base):
    __tablename__ = "checks_mapping"

    code_of_viol: Mapped[str] = mapped_column(String(50), primary_key=True)
    category: Mapped[str] = mapped_column(String(200), nullable=False)


class InboxModel(Base):
    __tablename__ = "inbox"

    vkh_num: Mapped[str] = mapped_column(String(200), primary_key=True)
    bitrix_num: Mapped[str | None] = mapped_column(String(50), nullable=True)
