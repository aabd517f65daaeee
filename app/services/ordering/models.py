"""Order models."""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNNAMED_ITEM = "Unnamed Item"
MAX_QTY = 10_000


class OrderStatus(str, Enum):
    """Order lifecycle states."""

    INCOMING = "incoming"  # Default on creation
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    DELETED = "deleted"  # Soft delete, hidden from listings and metrics

    def __str__(self) -> str:
        return self.value


class OrderType(str, Enum):
    """How the order is served."""

    DINE_IN = "dine-in"
    TAKEAWAY = "takeaway"
    DELIVERY = "delivery"

    def __str__(self) -> str:
        return self.value


class LineItem(BaseModel):
    """Single line item on an order."""

    model_config = ConfigDict(extra="allow")

    name: str = UNNAMED_ITEM
    price: float = Field(ge=0, allow_inf_nan=False)
    qty: int = Field(gt=0, le=MAX_QTY)

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return UNNAMED_ITEM
        return v

    @field_validator("price", mode="before")
    @classmethod
    def reject_bool_price(cls, v):
        if isinstance(v, bool):
            raise ValueError("price must be a number")
        return v

    @field_validator("qty", mode="before")
    @classmethod
    def reject_bool_qty(cls, v):
        if isinstance(v, bool):
            raise ValueError("qty must be an integer")
        return v

    @property
    def line_total(self) -> float:
        return self.price * self.qty


class OrderRecord(BaseModel):
    """Canonical order as returned by the store and sent to dashboards."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    order_type: OrderType
    customer_name: Optional[str] = None
    mobile: Optional[str] = None
    table_number: Optional[str] = None
    address: Optional[str] = None
    items: List[LineItem] = []
    total: float = 0.0
    status: OrderStatus = OrderStatus.INCOMING
    created_at: datetime

    def to_payload(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
