"""Order persistence service."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Callable, List, Optional

from sqlalchemy import select, desc
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError, StoreUnavailableError
from app.db.models import Order
from app.services.ordering.models import OrderRecord, OrderStatus
from app.services.ordering.validator import (
    clean_optional,
    compute_total,
    parse_line_items,
    parse_order_type,
    parse_status,
)
from app.services.realtime.events import (
    EventPublisher,
    OrderCreated,
    OrderEvent,
    OrderStatusChanged,
)

logger = logging.getLogger(__name__)


class OrderStore:
    """Owns persisted orders and emits an event after every mutation."""

    def __init__(
        self,
        db: AsyncSession,
        publisher: EventPublisher,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.publisher = publisher
        self.clock = clock

    @asynccontextmanager
    async def _store_call(self, operation: str) -> AsyncIterator[None]:
        """Translate connectivity failures into StoreUnavailableError."""
        try:
            yield
        except (OperationalError, InterfaceError) as e:
            await self.db.rollback()
            logger.error(
                f"[ORDERS] Store unavailable during {operation} - "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise StoreUnavailableError(f"Order store unavailable during {operation}") from e

    def _publish(self, event: OrderEvent) -> None:
        try:
            self.publisher.publish(event)
        except Exception as e:
            # Real-time delivery is best-effort; the write already succeeded
            logger.error(
                f"[ORDERS] Failed to publish '{event.name}' - {type(e).__name__}: {e}",
                exc_info=True,
            )

    async def create_order(
        self,
        order_type: Any,
        customer_name: Optional[str] = None,
        mobile: Optional[str] = None,
        table_number: Optional[str] = None,
        address: Optional[str] = None,
        items: Any = None,
    ) -> OrderRecord:
        """
        Validate and persist a new order, then publish OrderCreated.

        Raises:
            ValidationError: items missing or malformed, or unknown order type
            StoreUnavailableError: persistence layer unreachable
        """
        parsed_type = parse_order_type(order_type)
        line_items = parse_line_items(items)
        total = compute_total(line_items)

        order = Order(
            order_type=parsed_type.value,
            customer_name=clean_optional(customer_name),
            mobile=clean_optional(mobile),
            table_number=clean_optional(table_number),
            address=clean_optional(address),
            items=[item.model_dump() for item in line_items],
            total=total,
            status=OrderStatus.INCOMING.value,
            created_at=self.clock(),
        )
        async with self._store_call("create_order"):
            self.db.add(order)
            await self.db.commit()
            await self.db.refresh(order)

        record = OrderRecord.model_validate(order)
        logger.info(
            f"[ORDERS] Created order {record.id} - type: {record.order_type}, "
            f"items: {len(record.items)}, total: {record.total:.2f}"
        )
        self._publish(OrderCreated(order=record))
        return record

    async def _get(self, order_id: int) -> Optional[Order]:
        result = await self.db.execute(select(Order).where(Order.id == order_id))
        return result.scalar_one_or_none()

    async def get_order(self, order_id: int) -> OrderRecord:
        """
        Get an order by id, soft-deleted orders included.

        Raises:
            NotFoundError: no order with this id
        """
        async with self._store_call("get_order"):
            order = await self._get(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")
        return OrderRecord.model_validate(order)

    async def update_status(self, order_id: int, status: Any) -> OrderRecord:
        """
        Overwrite an order's status, then publish OrderStatusChanged.

        Concurrent updates to the same order are last-write-wins.

        Raises:
            ValidationError: status is not an OrderStatus value
            NotFoundError: no order with this id
        """
        new_status = parse_status(status)
        async with self._store_call("update_status"):
            order = await self._get(order_id)
            if order is None:
                raise NotFoundError(f"Order {order_id} not found")
            previous = order.status
            order.status = new_status.value
            await self.db.commit()
            await self.db.refresh(order)

        record = OrderRecord.model_validate(order)
        logger.info(f"[ORDERS] Order {record.id} status: {previous} -> {record.status}")
        self._publish(OrderStatusChanged(order=record))
        return record

    async def find_by_window(
        self,
        start: datetime,
        end: datetime,
        exclude_deleted: bool = True,
        customer_name: Optional[str] = None,
    ) -> List[OrderRecord]:
        """Orders created within [start, end] inclusive, newest first."""
        query = select(Order).where(Order.created_at >= start, Order.created_at <= end)
        if exclude_deleted:
            query = query.where(Order.status != OrderStatus.DELETED.value)
        if customer_name is not None:
            query = query.where(Order.customer_name == customer_name)
        query = query.order_by(desc(Order.created_at), desc(Order.id))

        async with self._store_call("find_by_window"):
            result = await self.db.execute(query)
            orders = result.scalars().all()

        logger.debug(
            f"[ORDERS] Window {start.isoformat()} .. {end.isoformat()} matched {len(orders)} orders"
        )
        return [OrderRecord.model_validate(order) for order in orders]
