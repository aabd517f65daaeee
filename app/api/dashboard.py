"""Dashboard analytics API endpoints."""
import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_dashboard_service
from app.services.analytics.aggregations import CustomerOrders, PeakHour, SalesSummary, TopDish
from app.services.analytics.dashboard import DashboardService


router = APIRouter(prefix="/api/dashboard")
logger = logging.getLogger(__name__)


@router.get("/sales", response_model=SalesSummary)
async def get_sales(
    period: str = "day",
    day: Optional[date] = Query(None, alias="date"),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Total sales and order count for the day, week or month containing `date`."""
    return await dashboard.sales(period, day)


@router.get("/peakhour", response_model=PeakHour)
async def get_peak_hour(
    day: Optional[date] = Query(None, alias="date"),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Busiest hour of the day."""
    return await dashboard.peak_hour(day)


@router.get("/topdish", response_model=Optional[TopDish])
async def get_top_dish(
    day: Optional[date] = Query(None, alias="date"),
    start: Optional[datetime] = Query(None, alias="from"),
    end: Optional[datetime] = Query(None, alias="to"),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Most ordered item by quantity, for a day or an explicit from/to range."""
    return await dashboard.top_dish(day, start, end)


@router.get("/repeatcustomers", response_model=List[CustomerOrders])
async def get_repeat_customers(
    day: Optional[date] = Query(None, alias="date"),
    start: Optional[datetime] = Query(None, alias="from"),
    end: Optional[datetime] = Query(None, alias="to"),
    name: Optional[str] = None,
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Customers ranked by order count, or a single customer's count when `name` is given."""
    logger.debug(f"[DASHBOARD] Repeat customers requested - name: {name}")
    return await dashboard.repeat_customers(day, start, end, customer_name=name)
