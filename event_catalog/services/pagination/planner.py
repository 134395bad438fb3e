"""Filter/sort request types and the query planner.

The document store only accepts a range filter when the filtered field is
also part of the leading sort order, in the same relative order as the
range filters. ``plan_query`` turns a filter set and a requested sort key
into the ordered field list that satisfies that rule and ends with the
unique identifier, so every page boundary is unambiguous.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterator

from event_catalog.services.pagination.sort_fields import (
    DEFAULT_SORT_FIELD,
    IDENTIFIER_FIELD,
    SortField,
    parse_sort_field,
)

# Upper bound for prefix matches: a code point above every printable character.
PREFIX_SENTINEL = "\uf8ff"

INEQUALITY_ORDER: tuple[SortField, ...] = (
    SortField.EVENT_NAME,
    SortField.CITY,
    SortField.PRICE,
    SortField.START_TIME,
    SortField.END_TIME,
)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: str | SortDirection | None) -> SortDirection:
        if isinstance(raw, SortDirection):
            return raw
        return cls.DESC if str(raw or "").strip().lower() == "desc" else cls.ASC


@dataclass(frozen=True)
class EqualityPredicate:
    field: SortField
    value: Any


@dataclass(frozen=True)
class RangePredicate:
    """Inclusive bounds on one field. Either bound may be open."""

    field: SortField
    lower: Any = None
    upper: Any = None


@dataclass(frozen=True)
class FilterSet:
    event_type: str | None = None
    event_name_prefix: str | None = None
    city_prefix: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    def equality_predicates(self) -> tuple[EqualityPredicate, ...]:
        if self.event_type:
            return (EqualityPredicate(SortField.TYPE, self.event_type),)
        return ()

    def range_predicates(self) -> tuple[RangePredicate, ...]:
        """Range predicates in canonical inequality order."""
        ranges: dict[SortField, RangePredicate] = {}
        if self.event_name_prefix:
            ranges[SortField.EVENT_NAME] = _prefix_range(SortField.EVENT_NAME, self.event_name_prefix)
        if self.city_prefix:
            ranges[SortField.CITY] = _prefix_range(SortField.CITY, self.city_prefix)
        if self.min_price is not None or self.max_price is not None:
            ranges[SortField.PRICE] = RangePredicate(SortField.PRICE, self.min_price, self.max_price)
        if self.start_date is not None:
            ranges[SortField.START_TIME] = RangePredicate(SortField.START_TIME, lower=self.start_date)
        if self.end_date is not None:
            ranges[SortField.END_TIME] = RangePredicate(SortField.END_TIME, upper=self.end_date)
        return tuple(ranges[field] for field in INEQUALITY_ORDER if field in ranges)

    def inequality_fields(self) -> tuple[SortField, ...]:
        return tuple(predicate.field for predicate in self.range_predicates())


def _prefix_range(field: SortField, prefix: str) -> RangePredicate:
    return RangePredicate(field, lower=prefix, upper=prefix + PREFIX_SENTINEL)


@dataclass(frozen=True)
class SortRequest:
    sort_key: str = ""
    direction: SortDirection = SortDirection.ASC
    page_size: int = DEFAULT_PAGE_SIZE
    page_token: str = ""


@dataclass(frozen=True)
class QueryPlan:
    fields: tuple[SortField, ...]

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[SortField]:
        return iter(self.fields)

    @property
    def names(self) -> list[str]:
        return [field.value for field in self.fields]

    def orderings(self, direction: SortDirection) -> list[tuple[SortField, SortDirection]]:
        # The identifier only breaks ties; keep it ascending so page
        # boundaries do not depend on the caller's direction.
        return [
            (field, SortDirection.ASC if field is IDENTIFIER_FIELD else direction)
            for field in self.fields
        ]


def plan_query(filters: FilterSet, requested_sort_key: str | SortField | None) -> QueryPlan:
    """Compute the sort order a filtered query must use.

    Inequality fields always lead, in canonical order. A requested key that is
    not one of them is appended after them, so with an active range filter it
    orders results only within ties of the inequality fields. With neither a
    range filter nor a usable requested key the plan falls back to
    ``created_at``. The identifier is always last.
    """
    fields: list[SortField] = list(filters.inequality_fields())

    requested = parse_sort_field(requested_sort_key)
    if requested is not None and requested not in fields:
        fields.append(requested)

    if not fields:
        fields.append(DEFAULT_SORT_FIELD)

    if IDENTIFIER_FIELD not in fields:
        fields.append(IDENTIFIER_FIELD)
    return QueryPlan(tuple(fields))


def clamp_page_size(page_size: int | None) -> int:
    size = int(page_size or 0)
    if size <= 0:
        return DEFAULT_PAGE_SIZE
    return min(size, MAX_PAGE_SIZE)
