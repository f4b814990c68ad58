"""SQL builders for the statistics and triage queries.

Everything here returns SQLAlchemy Core constructs; the repositories only
execute them. Grouped counts go through a subquery so that the grouping
expression is a plain column even when it carries bound parameters.
"""

from __future__ import annotations

from sqlalchemy import (
    ColumnElement,
    Date,
    Integer,
    Select,
    Table,
    Text,
    and_,
    case,
    cast,
    distinct,
    false,
    func,
    or_,
    select,
)

from app.adapters.persistence.models import InboxModel, RecordColumnsMixin
from app.adapters.persistence.sources import SourceTable
from app.domain.entities.record import DAMAGE_THRESHOLD
from app.domain.policies.column_label import COLUMN_LABEL_SQL_PATTERN, column_label
from app.domain.policies.event_date import EMBEDDED_DATE_SQL_FORMAT, EMBEDDED_DATE_SQL_PATTERN
from app.domain.policies.multi_value import SEPARATOR, like_patterns
from app.domain.value_objects.filters import RecordFilters, SourceQuery

# ─── Shared predicates ───────────────────────────────────────────────


def _month_length(month, year) -> ColumnElement:
    leap = and_(year % 4 == 0, or_(year % 100 != 0, year % 400 == 0))
    return case(
        (month == 2, case((leap, 29), else_=28)),
        (month.in_([4, 6, 9, 11]), 30),
        else_=31,
    )


def embedded_date(reference) -> ColumnElement:
    """`` от DD.MM.YYYY`` suffix of *reference* as a SQL date.

    NULL when the suffix is absent or is not a calendar date, so that
    ``to_date`` never sees values such as ``31.02.2024``.
    """
    raw = func.substring(reference, EMBEDDED_DATE_SQL_PATTERN)
    day = cast(func.substr(raw, 1, 2), Integer)
    month = cast(func.substr(raw, 4, 2), Integer)
    year = cast(func.substr(raw, 7, 4), Integer)
    valid = and_(
        year >= 1,
        month.between(1, 12),
        day >= 1,
        day <= _month_length(month, year),
    )
    return case((valid, func.to_date(raw, EMBEDDED_DATE_SQL_FORMAT, type_=Date)))


def has_embedded_date(reference) -> ColumnElement:
    return embedded_date(reference).is_not(None)


def multi_value_condition(column, values) -> ColumnElement:
    """Match any of *values* as an item of a ``;``-separated column."""
    return or_(*[column.like(pattern) for value in values for pattern in like_patterns(value)])


def _date_bounds(expr, date_from, date_to) -> list[ColumnElement]:
    conditions = []
    if date_from is not None:
        conditions.append(expr >= date_from)
    if date_to is not None:
        conditions.append(expr <= date_to)
    return conditions


def _non_blank(column) -> ColumnElement:
    return and_(column.is_not(None), column != "")


def _split_values(column):
    return func.trim(func.unnest(func.string_to_array(column, SEPARATOR)))


# ─── Complaint source tables ─────────────────────────────────────────


def event_date_expr(source: SourceTable) -> ColumnElement:
    """Calendar date of an event: native column first, then the ``vkh_num`` suffix."""
    t = source.table
    if source.dated:
        return func.coalesce(cast(t.c.event_date, Date), embedded_date(t.c.vkh_num))
    return embedded_date(t.c.vkh_num)


def has_event_date(source: SourceTable) -> ColumnElement:
    t = source.table
    if source.dated:
        return or_(t.c.event_date.is_not(None), has_embedded_date(t.c.vkh_num))
    return has_embedded_date(t.c.vkh_num)


def source_conditions(source: SourceTable, query: SourceQuery) -> list[ColumnElement]:
    t = source.table
    conditions: list[ColumnElement] = []
    if query.has_date_range:
        conditions.append(has_event_date(source))
        conditions += _date_bounds(event_date_expr(source), query.date_from, query.date_to)
    if query.column_numbers is not None:
        conditions.append(t.c.column_no.in_(sorted(query.column_numbers)))
    if query.routes:
        conditions.append(multi_value_condition(t.c.route_num, query.routes))
    if query.categories:
        conditions.append(multi_value_condition(t.c.category, query.categories))
    return conditions


def source_total(source: SourceTable, query: SourceQuery) -> Select:
    return select(func.count()).select_from(source.table).where(*source_conditions(source, query))


def source_by_column(source: SourceTable, query: SourceQuery) -> Select:
    t = source.table
    return (
        select(t.c.column_no, func.count())
        .where(*source_conditions(source, query), t.c.column_no.is_not(None))
        .group_by(t.c.column_no)
    )


def source_by_multi_value(source: SourceTable, query: SourceQuery, column_name: str) -> Select:
    """Count each ``;``-separated item of *column_name* once per row."""
    column = source.table.c[column_name]
    inner = (
        select(_split_values(column).label("value"))
        .where(*source_conditions(source, query), _non_blank(column))
        .subquery()
    )
    return (
        select(inner.c.value, func.count())
        .where(inner.c.value != "")
        .group_by(inner.c.value)
    )


def source_by_date(source: SourceTable, query: SourceQuery) -> Select:
    inner = (
        select(event_date_expr(source).label("day"))
        .where(*source_conditions(source, query), has_event_date(source))
        .subquery()
    )
    return (
        select(inner.c.day, func.count())
        .where(inner.c.day.is_not(None))
        .group_by(inner.c.day)
    )


def source_export(source: SourceTable, query: SourceQuery) -> Select:
    """Rows of one complaint table with their task reference.

    The dated table carries the reference itself; the others look it up
    in ``inbox`` by ``vkh_num``.
    """
    t = source.table
    columns = [t.c.vkh_num, t.c.message_text, t.c.route_num, t.c.column_no, t.c.category]
    if source.dated:
        stmt = select(
            t.c.event_date, *columns, t.c.bitrix_secondary.label("bitrix_num")
        ).select_from(t)
    else:
        inbox = InboxModel.__table__
        stmt = select(*columns, inbox.c.bitrix_num).select_from(
            t.outerjoin(inbox, t.c.vkh_num == inbox.c.vkh_num)
        )
    return stmt.where(*source_conditions(source, query)).order_by(
        event_date_expr(source).desc().nulls_last()
    )


def source_distinct(source: SourceTable, column_name: str) -> Select:
    column = source.table.c[column_name]
    return select(distinct(column)).where(_non_blank(column))


# ─── Inspections ─────────────────────────────────────────────────────


def inspection_conditions(checks: Table, query: SourceQuery) -> list[ColumnElement]:
    conditions: list[ColumnElement] = []
    if query.has_date_range:
        conditions.append(checks.c.date_of_event.is_not(None))
        conditions += _date_bounds(cast(checks.c.date_of_event, Date), query.date_from, query.date_to)
    if query.column_numbers is not None:
        labels = [column_label(n) for n in sorted(query.column_numbers)]
        conditions.append(checks.c.column_num.in_(labels))
    if query.routes:
        conditions.append(checks.c.route.in_(list(query.routes)))
    if query.violation_codes is not None:
        if query.violation_codes:
            conditions.append(checks.c.code_of_viol.in_(sorted(query.violation_codes)))
        else:
            conditions.append(false())
    return conditions


def inspection_total(checks: Table, query: SourceQuery) -> Select:
    return select(func.count()).select_from(checks).where(*inspection_conditions(checks, query))


def inspection_by_column_label(checks: Table, query: SourceQuery) -> Select:
    column = checks.c.column_num
    return (
        select(column, func.count())
        .where(
            *inspection_conditions(checks, query),
            column.is_not(None),
            column.op("~")(COLUMN_LABEL_SQL_PATTERN),
        )
        .group_by(column)
    )


def inspection_by_value(checks: Table, query: SourceQuery, column_name: str) -> Select:
    column = checks.c[column_name]
    return (
        select(column, func.count())
        .where(*inspection_conditions(checks, query), _non_blank(column))
        .group_by(column)
    )


def inspection_by_date(checks: Table, query: SourceQuery) -> Select:
    inner = (
        select(cast(checks.c.date_of_event, Date).label("day"))
        .where(*inspection_conditions(checks, query), checks.c.date_of_event.is_not(None))
        .subquery()
    )
    return select(inner.c.day, func.count()).group_by(inner.c.day)


def inspection_export(checks: Table, query: SourceQuery) -> Select:
    c = checks.c
    return (
        select(
            c.date_of_event,
            c.oper_analysis,
            c.route,
            c.column_num,
            c.code_of_viol,
            c.task_num_bitrix,
        )
        .where(*inspection_conditions(checks, query))
        .order_by(c.date_of_event.desc().nulls_last())
    )


def inspection_distinct(checks: Table, column_name: str) -> Select:
    column = checks.c[column_name]
    return select(distinct(column)).where(_non_blank(column)).order_by(column)


# ─── Triage records ──────────────────────────────────────────────────


def record_conditions(model: type[RecordColumnsMixin], filters: RecordFilters) -> list[ColumnElement]:
    conditions: list[ColumnElement] = []
    if filters.categories:
        conditions.append(or_(*[model.category.ilike(f"%{c}%") for c in filters.categories]))
    if filters.seen:
        conditions.append(model.seen.in_([int(s) for s in filters.seen]))
    if filters.report_types:
        conditions.append(model.report_type.in_([int(r) for r in filters.report_types]))
    if filters.priorities:
        conditions.append(model.priority.in_([int(p) for p in filters.priorities]))
    if filters.statuses:
        conditions.append(model.status.in_(list(filters.statuses)))
    if filters.date_from is not None or filters.date_to is not None:
        conditions.append(model.event_date.is_not(None))
        conditions += _date_bounds(cast(model.event_date, Date), filters.date_from, filters.date_to)
    if filters.search:
        pattern = f"%{filters.search}%"
        conditions.append(
            or_(
                model.message_text.ilike(pattern),
                cast(model.bitrix_num, Text).ilike(pattern),
                model.vkh_num.ilike(pattern),
            )
        )
    if filters.damage_only:
        conditions.append(model.fee >= DAMAGE_THRESHOLD)
    return conditions


def record_columns(model: type[RecordColumnsMixin]) -> list:
    return [
        model.id,
        model.bitrix_num,
        model.vkh_num,
        model.message_text,
        model.report_type,
        model.seen,
        model.status,
        model.priority,
        model.resolution_final,
        model.category,
        model.event_date,
        model.fee,
    ]
