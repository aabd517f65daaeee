"""Order intake and status API endpoints."""
import logging
from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.dependencies import get_order_store
from app.services.analytics.windows import day_window, today
from app.services.ordering.models import OrderRecord
from app.services.persistence.orders import OrderStore


router = APIRouter()
logger = logging.getLogger(__name__)


class OrderCreateRequest(BaseModel):
    """Order intake payload. Field contents are validated by the store."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    order_type: Optional[str] = None
    customer_name: Optional[str] = None
    mobile: Optional[str] = None
    table_number: Optional[str] = None
    address: Optional[str] = None
    items: Optional[List[Any]] = None


class StatusUpdateRequest(BaseModel):
    """Status update payload."""
    status: Optional[str] = None


@router.get("/api/orders", response_model=List[OrderRecord])
async def list_orders(
    request: Request,
    day: Optional[date] = Query(None, alias="date"),
    store: OrderStore = Depends(get_order_store),
):
    """Get the non-deleted orders placed on a date (default today), newest first."""
    day = day or today()
    logger.info(
        f"[ORDERS] List requested - date: {day}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )
    window = day_window(day)
    orders = await store.find_by_window(window.start, window.end)
    logger.info(f"[ORDERS] Found {len(orders)} orders for {day}")
    return orders


@router.post("/api/orders", response_model=OrderRecord)
async def create_order(
    payload: OrderCreateRequest,
    store: OrderStore = Depends(get_order_store),
):
    """Place a new order and notify connected dashboards."""
    logger.debug(
        f"[ORDERS] Create requested - type: {payload.order_type}, "
        f"items: {len(payload.items) if payload.items else 0}"
    )
    return await store.create_order(
        order_type=payload.order_type,
        customer_name=payload.customer_name,
        mobile=payload.mobile,
        table_number=payload.table_number,
        address=payload.address,
        items=payload.items,
    )


@router.get("/api/orders/{order_id}", response_model=OrderRecord)
async def get_order(order_id: int, store: OrderStore = Depends(get_order_store)):
    """Get a single order by id, including soft-deleted ones."""
    return await store.get_order(order_id)


@router.patch("/api/orders/{order_id}/status", response_model=OrderRecord)
async def update_order_status(
    order_id: int,
    payload: StatusUpdateRequest,
    store: OrderStore = Depends(get_order_store),
):
    """Update an order's status and notify connected dashboards."""
    logger.debug(f"[ORDERS] Status update requested - order: {order_id}, status: {payload.status}")
    return await store.update_status(order_id, payload.status)
