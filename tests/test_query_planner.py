import os
import unittest
from datetime import datetime, timezone

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from event_catalog.services.pagination.planner import (
    INEQUALITY_ORDER,
    FilterSet,
    SortDirection,
    clamp_page_size,
    plan_query,
)
from event_catalog.services.pagination.sort_fields import SortField


def _names(plan):
    return [field.value for field in plan]


class QueryPlannerTests(unittest.TestCase):
    def test_no_filters_and_no_key_defaults_to_created_at(self):
        self.assertEqual(_names(plan_query(FilterSet(), "")), ["created_at", "id"])

    def test_unknown_key_falls_back_to_created_at(self):
        self.assertEqual(_names(plan_query(FilterSet(), "organizer_name")), ["created_at", "id"])
        self.assertEqual(_names(plan_query(FilterSet(), None)), ["created_at", "id"])

    def test_requested_key_without_filters_leads(self):
        self.assertEqual(_names(plan_query(FilterSet(), "price")), ["price", "id"])
        self.assertEqual(_names(plan_query(FilterSet(), SortField.CITY)), ["city", "id"])

    def test_requested_key_is_demoted_behind_inequality_fields(self):
        plan = plan_query(FilterSet(min_price=50), "created_at")
        self.assertEqual(_names(plan), ["price", "created_at", "id"])

    def test_requested_key_already_in_inequality_set_is_not_repeated(self):
        filters = FilterSet(min_price=10, start_date=datetime(2026, 1, 1, tzinfo=timezone.utc))
        plan = plan_query(filters, "start_time")
        self.assertEqual(_names(plan), ["price", "start_time", "id"])

    def test_inequality_fields_follow_canonical_order(self):
        filters = FilterSet(
            end_date=datetime(2026, 12, 31, tzinfo=timezone.utc),
            max_price=100,
            city_prefix="Ber",
            start_date=datetime(2026, 1, 1, tzinfo=timezone.utc),
            event_name_prefix="Jazz",
        )
        plan = plan_query(filters, "type")
        self.assertEqual(
            _names(plan),
            ["event_name", "city", "price", "start_time", "end_time", "type", "id"],
        )
        self.assertEqual(tuple(plan.fields[:5]), INEQUALITY_ORDER)

    def test_equality_filter_does_not_enter_the_plan(self):
        plan = plan_query(FilterSet(event_type="concert"), "")
        self.assertEqual(_names(plan), ["created_at", "id"])

    def test_identifier_requested_explicitly_stays_last_once(self):
        self.assertEqual(_names(plan_query(FilterSet(), "id")), ["id"])
        self.assertEqual(_names(plan_query(FilterSet(min_price=1), "id")), ["price", "id"])

    def test_plan_is_deterministic(self):
        filters = FilterSet(city_prefix="Par", min_price=5, event_type="festival")
        plans = {plan_query(filters, "start_time") for _ in range(5)}
        self.assertEqual(len(plans), 1)

    def test_identifier_is_always_last(self):
        cases = [
            (FilterSet(), ""),
            (FilterSet(min_price=1), "event_name"),
            (FilterSet(city_prefix="a"), "city"),
            (FilterSet(end_date=datetime(2026, 1, 1, tzinfo=timezone.utc)), "price"),
        ]
        for filters, key in cases:
            plan = plan_query(filters, key)
            self.assertEqual(plan.fields[-1], SortField.ID)
            self.assertEqual(plan.fields.count(SortField.ID), 1)

    def test_orderings_keep_identifier_ascending(self):
        plan = plan_query(FilterSet(), "price")
        self.assertEqual(
            plan.orderings(SortDirection.DESC),
            [(SortField.PRICE, SortDirection.DESC), (SortField.ID, SortDirection.ASC)],
        )

    def test_prefix_filters_become_bounded_ranges(self):
        ranges = FilterSet(event_name_prefix="Rock").range_predicates()
        self.assertEqual(len(ranges), 1)
        self.assertEqual(ranges[0].field, SortField.EVENT_NAME)
        self.assertEqual(ranges[0].lower, "Rock")
        self.assertEqual(ranges[0].upper, "Rock\uf8ff")

    def test_clamp_page_size(self):
        self.assertEqual(clamp_page_size(0), 20)
        self.assertEqual(clamp_page_size(None), 20)
        self.assertEqual(clamp_page_size(-3), 20)
        self.assertEqual(clamp_page_size(7), 7)
        self.assertEqual(clamp_page_size(500), 100)


if __name__ == "__main__":
    unittest.main()
