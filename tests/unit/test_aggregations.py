"""Unit tests for dashboard aggregations."""
from datetime import datetime
from itertools import count
from typing import List, Optional

from app.services.analytics.aggregations import (
    CustomerOrders,
    PeakHour,
    SalesSummary,
    TopDish,
    peak_hour,
    repeat_customers,
    sales_summary,
    top_dish,
)
from app.services.ordering.models import LineItem, OrderRecord

_ids = count(1)


def make_order(
    hour: int = 12,
    items: Optional[List[dict]] = None,
    customer_name: Optional[str] = None,
    total: Optional[float] = None,
) -> OrderRecord:
    line_items = [LineItem(**item) for item in (items or [])]
    return OrderRecord(
        id=next(_ids),
        order_type="dine-in",
        customer_name=customer_name,
        items=line_items,
        total=total if total is not None else sum(i.line_total for i in line_items),
        created_at=datetime(2024, 5, 15, hour, 15),
    )


class TestSalesSummary:
    def test_sums_totals(self):
        orders = [make_order(total=100), make_order(total=250.5)]

        assert sales_summary(orders) == SalesSummary(total=350.5, count=2)

    def test_empty(self):
        assert sales_summary([]) == SalesSummary(total=0, count=0)


class TestPeakHour:
    def test_busiest_hour(self):
        """Test orders at hours 12, 12 and 14."""
        orders = [make_order(hour=12), make_order(hour=12), make_order(hour=14)]

        assert peak_hour(orders) == PeakHour(hour=12, count=2)

    def test_tie_goes_to_earliest_hour(self):
        orders = [make_order(hour=h) for h in (15, 9, 15, 9, 20)]

        assert peak_hour(orders) == PeakHour(hour=9, count=2)

    def test_empty_returns_sentinel(self):
        result = peak_hour([])

        assert result.hour == "-"
        assert result.count == 0


class TestTopDish:
    def test_quantities_summed_across_orders(self):
        orders = [
            make_order(items=[{"name": "Biryani", "price": 200, "qty": 2}, {"name": "Naan", "price": 20, "qty": 3}]),
            make_order(items=[{"name": "Biryani", "price": 200, "qty": 2}]),
        ]

        assert top_dish(orders) == TopDish(name="Biryani", count=4)

    def test_tie_goes_to_first_name_alphabetically(self):
        orders = [
            make_order(items=[{"name": "Naan", "price": 20, "qty": 2}]),
            make_order(items=[{"name": "Kebab", "price": 150, "qty": 2}]),
        ]

        assert top_dish(orders) == TopDish(name="Kebab", count=2)

    def test_unnamed_items_grouped(self):
        orders = [make_order(items=[{"price": 10, "qty": 5}, {"name": "Naan", "price": 20, "qty": 1}])]

        assert top_dish(orders) == TopDish(name="Unnamed Item", count=5)

    def test_no_items_returns_none(self):
        assert top_dish([]) is None
        assert top_dish([make_order(items=[])]) is None


class TestRepeatCustomers:
    def test_ranked_by_count_then_name(self):
        orders = [
            make_order(customer_name="Priya"),
            make_order(customer_name="Amit"),
            make_order(customer_name="Zoya"),
            make_order(customer_name="Amit"),
            make_order(customer_name="Zoya"),
            make_order(customer_name=None),
        ]

        assert repeat_customers(orders) == [
            CustomerOrders(customer_name="Amit", orders=2),
            CustomerOrders(customer_name="Zoya", orders=2),
            CustomerOrders(customer_name="Priya", orders=1),
        ]

    def test_name_filter_single_entry(self):
        orders = [make_order(customer_name="Amit") for _ in range(3)]

        assert repeat_customers(orders, customer_name="Amit") == [
            CustomerOrders(customer_name="Amit", orders=3)
        ]

    def test_name_filter_without_orders(self):
        assert repeat_customers([], customer_name="Amit") == [
            CustomerOrders(customer_name="Amit", orders=0)
        ]

    def test_serialized_with_camel_case(self):
        entry = repeat_customers([make_order(customer_name="Amit")])[0]

        assert entry.model_dump(by_alias=True) == {"customerName": "Amit", "orders": 1}


class TestIdempotence:
    def test_same_input_same_results(self):
        orders = [
            make_order(hour=h, customer_name=name, items=[{"name": dish, "price": 10, "qty": 1}])
            for h, name, dish in [(11, "Amit", "Naan"), (19, "Priya", "Kebab"), (19, "Amit", "Naan")]
        ]

        first = (sales_summary(orders), peak_hour(orders), top_dish(orders), repeat_customers(orders))
        second = (sales_summary(orders), peak_hour(orders), top_dish(orders), repeat_customers(orders))

        assert first == second
