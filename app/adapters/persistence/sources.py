"""Core table definitions for the complaint source tables and the inspection table.

Source tables are chosen per request, so they are described with Core
``Table`` objects instead of ORM classes. Only configured names are ever
turned into SQL identifiers.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import Column, DateTime, Integer, MetaData, Table, Text

from app.application.ports.complaint_source_repo import UnknownSourceTableError


@dataclass(frozen=True)
class SourceTable:
    """A complaint source table.

    ``dated`` tables carry a native ``event_date`` and a direct task
    reference in ``bitrix_secondary``; the others only have the date
    embedded in ``vkh_num`` and resolve the task reference through ``inbox``.
    """

    name: str
    table: Table
    dated: bool


def build_source_table(metadata: MetaData, name: str, dated: bool) -> Table:
    columns = [
        Column("id", Integer, primary_key=True),
        Column("vkh_num", Text),
        Column("message_text", Text),
        Column("route_num", Text),
        Column("column_no", Integer),
        Column("category", Text),
    ]
    if dated:
        columns += [
            Column("event_date", DateTime),
            Column("bitrix_secondary", Text),
        ]
    return Table(name, metadata, *columns)


class SourceRegistry:
    def __init__(self, names: Iterable[str], dated_name: str):
        self._metadata = MetaData()
        self._sources: dict[str, SourceTable] = {}
        for name in names:
            dated = name == dated_name
            self._sources[name] = SourceTable(
                name=name,
                table=build_source_table(self._metadata, name, dated),
                dated=dated,
            )

    @property
    def names(self) -> list[str]:
        return list(self._sources)

    def get(self, name: str) -> SourceTable:
        try:
            return self._sources[name]
        except KeyError:
            raise UnknownSourceTableError(name) from None


def build_inspection_table(schema: str | None = "checks_workflow") -> Table:
    return Table(
        "checks",
        MetaData(schema=schema),
        Column("id", Integer, primary_key=True),
        Column("date_of_event", DateTime),
        Column("oper_analysis", Text),
        Column("route", Text),
        Column("column_num", Text),
        Column("code_of_viol", Text),
        Column("task_num_bitrix", Text),
    )
