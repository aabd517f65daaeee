"""Business metrics over an already-filtered collection of orders.

Every function here is pure: the caller resolves the time window and
excludes deleted orders before handing the orders over. Ties are broken
deterministically so repeated runs over the same orders agree.
"""
from collections import Counter
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.services.ordering.models import UNNAMED_ITEM, OrderRecord

NO_PEAK_HOUR = "-"


class _Metric(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SalesSummary(_Metric):
    total: float
    count: int


class PeakHour(_Metric):
    hour: Union[int, str]  # 0-23, or "-" when there were no orders
    count: int


class TopDish(_Metric):
    name: str
    count: int


class CustomerOrders(_Metric):
    customer_name: str
    orders: int


def sales_summary(orders: Iterable[OrderRecord]) -> SalesSummary:
    """Sum of order totals and number of orders."""
    total = 0.0
    count = 0
    for order in orders:
        total += order.total or 0
        count += 1
    return SalesSummary(total=total, count=count)


def peak_hour(orders: Iterable[OrderRecord]) -> PeakHour:
    """Local hour of day with the most orders; ties go to the earliest hour."""
    hourly = Counter(order.created_at.hour for order in orders)
    if not hourly:
        return PeakHour(hour=NO_PEAK_HOUR, count=0)
    hour, count = min(hourly.items(), key=lambda entry: (-entry[1], entry[0]))
    return PeakHour(hour=hour, count=count)


def top_dish(orders: Iterable[OrderRecord]) -> Optional[TopDish]:
    """Item with the highest total quantity; ties go to the alphabetically first name."""
    quantities: Counter = Counter()
    for order in orders:
        for item in order.items:
            quantities[item.name or UNNAMED_ITEM] += item.qty
    if not quantities:
        return None
    name, count = min(quantities.items(), key=lambda entry: (-entry[1], entry[0]))
    return TopDish(name=name, count=count)


def repeat_customers(
    orders: Iterable[OrderRecord], customer_name: Optional[str] = None
) -> List[CustomerOrders]:
    """
    Order counts per customer name.

    Args:
        orders: Orders in the window (anonymous orders are skipped)
        customer_name: If given, report only this customer, with 0 if absent

    Returns:
        Customers by order count descending, then name ascending
    """
    counts = Counter(order.customer_name for order in orders if order.customer_name)
    if customer_name:
        return [CustomerOrders(customer_name=customer_name, orders=counts.get(customer_name, 0))]
    ranked = sorted(counts.items(), key=lambda entry: (-entry[1], entry[0]))
    return [CustomerOrders(customer_name=name, orders=count) for name, count in ranked]
