"""Query Engine — runs a validated FilterSpec against a listing source.

Invariants:
    - Input is an already-validated FilterSpec; no validation happens here
    - One conjunction of predicates; absent filters add nothing
    - Sort by exactly one field, then by the source's unique id in the same
      direction, so repeated page reads are stable when sort keys tie
    - total counts predicate matches, ignoring limit/offset
    - A page past the end returns no items, never an error

Design Decisions:
    - Count runs over the filtered statement as a subquery, so a source's
      computed columns never change what is counted
    - Filters apply only to plain columns; computed counts are sortable, not filterable
    - Both reads share the request's AsyncSession (point-in-time, not snapshot isolated)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from admin_console.core.domain_types import SortDirection
from admin_console.core.filter_spec import (
    FilterKind, FilterSpec, ListingDefinition, ValueRange,
)
from admin_console.core.paging import PagedResult


@dataclass(frozen=True)
class ListingSource:
    """Binds a ListingDefinition to SQL: base statement, columns, row serializer."""
    definition: ListingDefinition
    base: Callable[[], Select]
    columns: dict[str, ColumnElement]
    search_columns: tuple[ColumnElement, ...]
    tiebreak: ColumnElement
    serialize: Callable[[Any], dict]


def build_predicate(source: ListingSource, spec: FilterSpec) -> ColumnElement | None:
    """Conjunction of every provided filter, or None when unfiltered."""
    clauses = []
    kinds = {f.name: f.kind for f in source.definition.filters}
    for name, value in spec.filters.items():
        kind = kinds[name]
        if kind is FilterKind.SEARCH:
            pattern = f"%{value}%"
            clauses.append(or_(*(c.ilike(pattern) for c in source.search_columns)))
        elif kind in (FilterKind.DATE_RANGE, FilterKind.NUMBER_RANGE):
            clauses.extend(_range_clauses(source.columns[name], value))
        else:
            clauses.append(source.columns[name] == value)
    if not clauses:
        return None
    return and_(*clauses)


def _range_clauses(column: ColumnElement, bounds: ValueRange) -> list[ColumnElement]:
    clauses = []
    if bounds.lower is not None:
        clauses.append(column >= bounds.lower)
    if bounds.upper is not None:
        clauses.append(column <= bounds.upper)
    return clauses


def build_ordering(source: ListingSource, spec: FilterSpec) -> list[ColumnElement]:
    primary = source.columns[spec.sort_field]
    if spec.sort_dir is SortDirection.DESC:
        return [primary.desc(), source.tiebreak.desc()]
    return [primary.asc(), source.tiebreak.asc()]


async def list_rows(
    db: AsyncSession, source: ListingSource, spec: FilterSpec,
) -> PagedResult[dict]:
    """One page of serialized rows plus the predicate match count."""
    stmt = source.base()
    predicate = build_predicate(source, spec)
    if predicate is not None:
        stmt = stmt.where(predicate)

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    page_stmt = (
        stmt.order_by(*build_ordering(source, spec))
        .limit(spec.page_size)
        .offset(spec.offset)
    )
    rows = (await db.execute(page_stmt)).all()

    return PagedResult(
        items=[source.serialize(row) for row in rows],
        page=spec.page,
        page_size=spec.page_size,
        total=total,
    )
