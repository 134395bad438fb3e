from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterable, Iterator, Protocol, Sequence

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from event_catalog.models.event import Event
from event_catalog.services.pagination.planner import (
    EqualityPredicate,
    QueryPlan,
    RangePredicate,
    SortDirection,
)
from event_catalog.services.pagination.sort_fields import SortField, value_of


class StoreClient(Protocol):
    def query(
        self,
        equalities: Sequence[EqualityPredicate],
        ranges: Sequence[RangePredicate],
        order_by: QueryPlan,
        direction: SortDirection,
        limit: int,
        start_after: Sequence[Any] | None = None,
    ) -> Iterator[Any]:
        ...


def _compare(left: Any, right: Any) -> int:
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


class InMemoryEventStore:
    """Keeps records in a list and evaluates queries the way the SQL store does."""

    def __init__(self, records: Iterable[Any] = ()):
        self._records: list[Any] = list(records)

    def add(self, record: Any) -> None:
        self._records.append(record)

    def _matches(self, record: Any, equalities: Sequence[EqualityPredicate], ranges: Sequence[RangePredicate]) -> bool:
        for predicate in equalities:
            if value_of(record, predicate.field) != predicate.value:
                return False
        for predicate in ranges:
            value = value_of(record, predicate.field)
            if predicate.lower is not None and value < predicate.lower:
                return False
            if predicate.upper is not None and value > predicate.upper:
                return False
        return True

    def query(
        self,
        equalities: Sequence[EqualityPredicate],
        ranges: Sequence[RangePredicate],
        order_by: QueryPlan,
        direction: SortDirection,
        limit: int,
        start_after: Sequence[Any] | None = None,
    ) -> Iterator[Any]:
        orderings = order_by.orderings(direction)

        def position_cmp(left: Sequence[Any], right: Sequence[Any]) -> int:
            for (_, field_direction), a, b in zip(orderings, left, right):
                result = _compare(a, b)
                if result:
                    return -result if field_direction is SortDirection.DESC else result
            return 0

        keyed = [
            (tuple(value_of(record, field) for field, _ in orderings), record)
            for record in self._records
            if self._matches(record, equalities, ranges)
        ]
        keyed.sort(key=cmp_to_key(lambda a, b: position_cmp(a[0], b[0])))
        if start_after is not None:
            cursor = tuple(start_after)
            keyed = [item for item in keyed if position_cmp(item[0], cursor) > 0]
        return iter([record for _, record in keyed[:limit]])


class SqlAlchemyEventStore:
    def __init__(self, db: Session, model=Event):
        self.db = db
        self.model = model

    def _column(self, field: SortField):
        return getattr(self.model, field.value)

    def _seek_condition(self, orderings: list[tuple[SortField, SortDirection]], start_after: Sequence[Any]):
        # For (a DESC, b ASC) after (v1, v2): (a < v1) OR (a = v1 AND b > v2)
        branches = []
        for index, (field, field_direction) in enumerate(orderings):
            column = self._column(field)
            value = start_after[index]
            compare = column < value if field_direction is SortDirection.DESC else column > value
            preceding = [
                self._column(prev_field) == start_after[prev_index]
                for prev_index, (prev_field, _) in enumerate(orderings[:index])
            ]
            branches.append(and_(*preceding, compare) if preceding else compare)
        return or_(*branches)

    def query(
        self,
        equalities: Sequence[EqualityPredicate],
        ranges: Sequence[RangePredicate],
        order_by: QueryPlan,
        direction: SortDirection,
        limit: int,
        start_after: Sequence[Any] | None = None,
    ) -> Iterator[Any]:
        stmt = select(self.model)
        for predicate in equalities:
            stmt = stmt.where(self._column(predicate.field) == predicate.value)
        for predicate in ranges:
            column = self._column(predicate.field)
            if predicate.lower is not None:
                stmt = stmt.where(column >= predicate.lower)
            if predicate.upper is not None:
                stmt = stmt.where(column <= predicate.upper)

        orderings = order_by.orderings(direction)
        if start_after is not None:
            stmt = stmt.where(self._seek_condition(orderings, start_after))
        for field, field_direction in orderings:
            column = self._column(field)
            stmt = stmt.order_by(column.desc() if field_direction is SortDirection.DESC else column.asc())
        stmt = stmt.limit(limit)
        return iter(self.db.scalars(stmt).all())
