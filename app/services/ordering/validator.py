"""Order input validation."""
import math
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError
from app.services.ordering.models import LineItem, OrderStatus, OrderType


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def parse_line_items(items: Any) -> List[LineItem]:
    """
    Validate raw line items.

    Args:
        items: Sequence of dicts (or LineItem instances) with name, price, qty

    Returns:
        List of validated LineItem

    Raises:
        ValidationError: if items is missing, empty, or any entry is malformed
    """
    if items is None:
        raise ValidationError("items is required")
    if not isinstance(items, (list, tuple)):
        raise ValidationError("items must be a list")
    if not items:
        raise ValidationError("items must contain at least one line item")

    parsed = []
    for index, item in enumerate(items):
        if isinstance(item, LineItem):
            parsed.append(item)
            continue
        if not isinstance(item, dict):
            raise ValidationError(f"items[{index}] must be an object")
        try:
            parsed.append(LineItem.model_validate(item))
        except PydanticValidationError as e:
            raise ValidationError(f"items[{index}] is invalid: {_describe(e)}") from e
    return parsed


def compute_total(items: List[LineItem]) -> float:
    """
    Sum of price x qty over all line items.

    Raises:
        ValidationError: if the total is not a finite number
    """
    total = sum(item.line_total for item in items)
    if not math.isfinite(total):
        raise ValidationError("order total is too large")
    return total


def parse_order_type(order_type: Any) -> OrderType:
    """Coerce an order type value, rejecting anything outside OrderType."""
    try:
        return OrderType(order_type)
    except ValueError:
        valid = [t.value for t in OrderType]
        raise ValidationError(f"Invalid orderType {order_type!r}. Must be one of: {valid}")


def parse_status(status: Any) -> OrderStatus:
    """Coerce a status value, rejecting anything outside OrderStatus."""
    try:
        return OrderStatus(status)
    except ValueError:
        valid = [s.value for s in OrderStatus]
        raise ValidationError(f"Invalid status {status!r}. Must be one of: {valid}")


def clean_optional(value: Optional[Any]) -> Optional[str]:
    """Normalize optional text fields: blank becomes None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
