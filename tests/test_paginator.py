import os
import unittest
from datetime import datetime, timedelta, timezone

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from event_catalog.models.event import Event
from event_catalog.services.pagination.cursor import CursorPlanMismatch, decode_cursor
from event_catalog.services.pagination.paginator import list_events, paginate, values_of
from event_catalog.services.pagination.planner import FilterSet, SortDirection, SortRequest, plan_query
from event_catalog.services.pagination.store import InMemoryEventStore

BASE = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _event(event_id, *, minutes, price, name="Event", city="Berlin", event_type="concert"):
    created_at = BASE + timedelta(minutes=minutes)
    return Event(
        id=event_id,
        created_at=created_at,
        price=price,
        start_time=created_at + timedelta(days=10),
        end_time=created_at + timedelta(days=10, hours=3),
        event_name=name,
        city=city,
        type=event_type,
    )


def _collect(store, filters, sort_key, direction, page_size):
    pages = []
    token = ""
    while True:
        records, token = list_events(
            store,
            filters,
            SortRequest(sort_key=sort_key, direction=direction, page_size=page_size, page_token=token),
        )
        pages.append([record.id for record in records])
        if not token:
            return pages


class PaginatorExampleTests(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryEventStore(
            [
                _event("cheap", minutes=0, price=10),
                _event("A", minutes=1, price=75),
                _event("B", minutes=2, price=75),
                _event("C", minutes=3, price=75),
                _event("D", minutes=4, price=75),
            ]
        )
        self.filters = FilterSet(min_price=50)

    def test_walks_pages_and_ends_with_empty_page(self):
        first, token_1 = list_events(self.store, self.filters, SortRequest(sort_key="created_at", page_size=2))
        self.assertEqual([r.id for r in first], ["A", "B"])
        self.assertTrue(token_1)

        plan = plan_query(self.filters, "created_at")
        self.assertEqual(decode_cursor(token_1, plan), values_of(first[-1], plan))

        second, token_2 = list_events(
            self.store, self.filters, SortRequest(sort_key="created_at", page_size=2, page_token=token_1)
        )
        self.assertEqual([r.id for r in second], ["C", "D"])
        self.assertTrue(token_2)

        third, token_3 = list_events(
            self.store, self.filters, SortRequest(sort_key="created_at", page_size=2, page_token=token_2)
        )
        self.assertEqual(third, [])
        self.assertEqual(token_3, "")

    def test_short_page_has_no_next_token(self):
        records, token = list_events(self.store, self.filters, SortRequest(sort_key="created_at", page_size=3))
        self.assertEqual(len(records), 3)
        records, token = list_events(
            self.store, self.filters, SortRequest(sort_key="created_at", page_size=3, page_token=token)
        )
        self.assertEqual([r.id for r in records], ["D"])
        self.assertEqual(token, "")

    def test_changed_filters_reject_old_token(self):
        _, token = list_events(self.store, FilterSet(), SortRequest(sort_key="created_at", page_size=2))
        with self.assertRaises(CursorPlanMismatch):
            list_events(self.store, self.filters, SortRequest(sort_key="created_at", page_size=2, page_token=token))


class PaginatorOrderingTests(unittest.TestCase):
    def setUp(self):
        prices = [30, 10, 30, 20, 10, 30, 40, 20, 10]
        self.events = [
            _event(f"evt-{index:02d}", minutes=(index * 7) % 5, price=price, city=("Berlin" if index % 2 else "Bern"))
            for index, price in enumerate(prices)
        ]
        self.store = InMemoryEventStore(self.events)

    def test_requested_key_orders_within_inequality_ties(self):
        records, _ = list_events(self.store, FilterSet(min_price=20), SortRequest(sort_key="created_at", page_size=100))
        keys = [(r.price, r.created_at, r.id) for r in records]
        self.assertEqual(keys, sorted(keys))
        self.assertTrue(all(r.price >= 20 for r in records))

    def test_pages_cover_every_match_once_in_order(self):
        for direction in (SortDirection.ASC, SortDirection.DESC):
            for page_size in (1, 2, 4, 9, 20):
                pages = _collect(self.store, FilterSet(), "price", direction, page_size)
                flat = [event_id for page in pages for event_id in page]

                expected = sorted(self.events, key=lambda e: e.id)
                expected = sorted(expected, key=lambda e: e.price, reverse=direction is SortDirection.DESC)
                self.assertEqual(flat, [e.id for e in expected], (direction, page_size))

    def test_prefix_and_equality_filters(self):
        self.store.add(_event("other-type", minutes=1, price=15, city="Berlin", event_type="theatre"))
        pages = _collect(self.store, FilterSet(city_prefix="Berl", event_type="concert"), "", SortDirection.ASC, 2)
        flat = [event_id for page in pages for event_id in page]
        expected = sorted(
            (e for e in self.events if e.city == "Berlin"),
            key=lambda e: (e.city, e.id),
        )
        self.assertEqual(flat, [e.id for e in expected])

    def test_paginate_reports_cursor_of_last_record(self):
        plan = plan_query(FilterSet(), "price")
        page = paginate(self.store, FilterSet(), plan, SortDirection.ASC, 3)
        self.assertEqual(len(page.records), 3)
        self.assertEqual(page.next_cursor, values_of(page.records[-1], plan))
        self.assertEqual(decode_cursor(page.next_page_token, plan), page.next_cursor)


if __name__ == "__main__":
    unittest.main()
