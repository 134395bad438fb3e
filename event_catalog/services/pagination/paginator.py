from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from event_catalog.services.pagination.cursor import decode_cursor, encode_cursor
from event_catalog.services.pagination.planner import (
    FilterSet,
    QueryPlan,
    SortDirection,
    SortRequest,
    clamp_page_size,
    plan_query,
)
from event_catalog.services.pagination.sort_fields import value_of
from event_catalog.services.pagination.store import StoreClient

_LOG = logging.getLogger("event_catalog.pagination")


@dataclass
class Page:
    records: list[Any] = field(default_factory=list)
    next_cursor: tuple[Any, ...] | None = None
    next_page_token: str = ""


def values_of(record: Any, plan: QueryPlan) -> tuple[Any, ...]:
    return tuple(value_of(record, plan_field) for plan_field in plan)


def paginate(
    store: StoreClient,
    filters: FilterSet,
    plan: QueryPlan,
    direction: SortDirection,
    limit: int,
    cursor: Sequence[Any] | None = None,
) -> Page:
    """Fetch one page and derive the position of the next one.

    A full page is taken to mean more rows may follow. When the matching rows
    run out exactly at a page boundary the returned token leads to an empty
    page; that costs one extra round trip but avoids a count query.
    """
    records = list(
        store.query(
            filters.equality_predicates(),
            filters.range_predicates(),
            plan,
            direction,
            limit,
            start_after=cursor,
        )
    )
    page = Page(records=records)
    if records and len(records) == limit:
        page.next_cursor = values_of(records[-1], plan)
        page.next_page_token = encode_cursor(page.next_cursor)
    _LOG.debug(
        "page plan=%s direction=%s limit=%s seek=%s returned=%s has_next=%s",
        ",".join(plan.names),
        direction.value,
        limit,
        cursor is not None,
        len(records),
        bool(page.next_page_token),
    )
    return page


def list_events(store: StoreClient, filters: FilterSet, sort: SortRequest) -> tuple[list[Any], str]:
    plan = plan_query(filters, sort.sort_key)
    limit = clamp_page_size(sort.page_size)
    cursor = decode_cursor(sort.page_token, plan) if sort.page_token else None
    page = paginate(store, filters, plan, SortDirection.parse(sort.direction), limit, cursor)
    return page.records, page.next_page_token
