"""Dashboard metrics: window resolution, order lookup and aggregation."""
import logging
from datetime import date, datetime
from typing import Any, List, Optional

from app.services.analytics import aggregations
from app.services.analytics.aggregations import CustomerOrders, PeakHour, SalesSummary, TopDish
from app.services.analytics.windows import Period, day_window, resolve_period, resolve_range, today
from app.services.ordering.validator import clean_optional
from app.services.persistence.orders import OrderStore

logger = logging.getLogger(__name__)


class DashboardService:
    """Computes business metrics from the order history."""

    def __init__(self, store: OrderStore):
        self.store = store

    async def sales(self, period: Any = Period.DAY, day: Optional[date] = None) -> SalesSummary:
        window = resolve_period(period, day or today())
        orders = await self.store.find_by_window(window.start, window.end)
        summary = aggregations.sales_summary(orders)
        logger.info(
            f"[DASHBOARD] Sales {period} {window.start.date()} - "
            f"total: {summary.total:.2f}, count: {summary.count}"
        )
        return summary

    async def peak_hour(self, day: Optional[date] = None) -> PeakHour:
        window = day_window(day or today())
        orders = await self.store.find_by_window(window.start, window.end)
        return aggregations.peak_hour(orders)

    async def top_dish(
        self,
        day: Optional[date] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Optional[TopDish]:
        window = resolve_range(day, start, end)
        orders = await self.store.find_by_window(window.start, window.end)
        return aggregations.top_dish(orders)

    async def repeat_customers(
        self,
        day: Optional[date] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        customer_name: Optional[str] = None,
    ) -> List[CustomerOrders]:
        window = resolve_range(day, start, end)
        # Stored names are trimmed on intake, so match the filter the same way
        customer_name = clean_optional(customer_name)
        orders = await self.store.find_by_window(window.start, window.end, customer_name=customer_name)
        return aggregations.repeat_customers(orders, customer_name=customer_name)
