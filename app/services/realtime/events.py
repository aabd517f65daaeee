"""Real-time domain events."""
from typing import Any, ClassVar, Dict, Protocol

from pydantic import BaseModel

from app.services.ordering.models import OrderRecord


class OrderEvent(BaseModel):
    """Base event; `name` is the wire event name dashboards listen for."""

    name: ClassVar[str]

    def payload(self) -> Any:
        raise NotImplementedError

    def to_message(self) -> Dict[str, Any]:
        """Render as the JSON envelope sent to dashboard sessions."""
        return {"event": self.name, "data": self.payload()}


class Connected(OrderEvent):
    """Acknowledgment sent once to a session when it subscribes."""

    name: ClassVar[str] = "connected"

    def payload(self) -> Dict[str, str]:
        return {"status": "connected"}


class OrderCreated(OrderEvent):
    """A new order was persisted."""

    name: ClassVar[str] = "newOrder"
    order: OrderRecord

    def payload(self) -> Dict[str, Any]:
        return self.order.to_payload()


class OrderStatusChanged(OrderEvent):
    """An order's status was overwritten."""

    name: ClassVar[str] = "orderUpdated"
    order: OrderRecord

    def payload(self) -> Dict[str, Any]:
        return self.order.to_payload()


class EventPublisher(Protocol):
    """Anything the order store can hand its domain events to."""

    def publish(self, event: OrderEvent) -> None:
        ...
