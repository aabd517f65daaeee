"""FastAPI dependencies."""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.services.analytics.dashboard import DashboardService
from app.services.persistence.orders import OrderStore
from app.services.realtime.notifier import RealtimeNotifier


def get_notifier(request: Request) -> RealtimeNotifier:
    """Get the process-wide real-time notifier."""
    return request.app.state.notifier


def get_order_store(
    db: AsyncSession = Depends(get_db),
    notifier: RealtimeNotifier = Depends(get_notifier),
) -> OrderStore:
    """Get order store bound to the request's session."""
    return OrderStore(db=db, publisher=notifier)


def get_dashboard_service(store: OrderStore = Depends(get_order_store)) -> DashboardService:
    """Get dashboard metrics service."""
    return DashboardService(store)
