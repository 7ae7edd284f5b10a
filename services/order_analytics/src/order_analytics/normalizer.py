"""
Adapter from raw upstream order-history records to normalized Order models.

Upstream payloads are loosely shaped: most fields have one or two alternate
spellings and any of them may be missing. Precedence for each field is fixed
below; the only hard failure is an order with no timestamp at all.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from libs.analytics_shared.logging import get_logger

from .constants import PAYMENT_METHOD_MAPPING, UNKNOWN_ITEM, UNKNOWN_RESTAURANT
from .exceptions import InvalidOrderDataError
from .models import Order, OrderItem

logger = get_logger(__name__)


def map_payment_method(code: Optional[str]) -> str:
    """
    Map an upstream payment type code to a display label.

    Known codes match by case-insensitive substring, first mapping wins.
    Anything else has underscores replaced and every word-initial letter
    upper-cased, including after hyphens.

    Examples:
        >>> map_payment_method("payment_on_delivery")
        'Cash on Delivery'
        >>> map_payment_method("apple_pay")
        'Apple Pay'
    """
    code = code or "unknown"
    lowered = code.lower()
    for token, label in PAYMENT_METHOD_MAPPING.items():
        if token in lowered:
            return label
    return re.sub(r"\b\w", lambda m: m.group().upper(), code.replace("_", " "))


def _first_present(raw: Dict[str, Any], paths: Sequence[str]) -> Any:
    """Return the first non-empty value among dotted paths, else None."""
    for path in paths:
        value: Any = raw
        for key in path.split("."):
            if not isinstance(value, dict):
                value = None
                break
            value = value.get(key)
        if value not in (None, ""):
            return value
    return None


def _to_float(value: Any) -> float:
    try:
        return max(0.0, float(value))
    except (TypeError, ValueError):
        return 0.0


def _to_quantity(value: Any) -> int:
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        return 1
    return quantity if quantity > 0 else 1


def _normalize_item(raw_item: Dict[str, Any]) -> OrderItem:
    name = _first_present(raw_item, ["name"])
    return OrderItem(
        name=str(name) if name is not None else UNKNOWN_ITEM,
        quantity=_to_quantity(raw_item.get("quantity")),
        price=_to_float(_first_present(raw_item, ["total_price", "price"])),
    )


def normalize_order(raw: Dict[str, Any], index: int = 0) -> Order:
    """
    Build an Order from one upstream record.

    Args:
        raw: Upstream order record
        index: Position in the batch, used for the fallback identifier

    Returns:
        Normalized Order

    Raises:
        InvalidOrderDataError: if the record carries no timestamp
    """
    code = _first_present(raw, ["code", "order_code", "id"])
    order_id = str(code) if code is not None else f"temp-{index}"

    date = _first_present(raw, ["ordered_at.date", "createdAt", "delivery_date"])
    if date is None:
        logger.warning(f"Order {order_id} has no timestamp field")
        raise InvalidOrderDataError(order_id, "date", reason="is missing")

    restaurant = _first_present(raw, ["vendor.name", "restaurant_name"])
    status = _first_present(raw, ["current_status.message", "status"])
    raw_items = _first_present(raw, ["order_products", "products"]) or []

    return Order(
        id=order_id,
        order_code=str(code) if code is not None else "N/A",
        restaurant_name=(
            str(restaurant) if restaurant is not None else UNKNOWN_RESTAURANT
        ),
        total_value=_to_float(raw.get("total_value")),
        subtotal=_to_float(raw.get("subtotal")),
        delivery_fee=_to_float(raw.get("delivery_fee")),
        service_fee=_to_float(raw.get("service_fee_total")),
        voucher_discount=_to_float(_first_present(raw, ["voucher.value"])),
        status=str(status) if status is not None else "",
        date=str(date),
        items=[_normalize_item(item) for item in raw_items if isinstance(item, dict)],
        payment_method=map_payment_method(raw.get("payment_type_code")),
    )


def normalize_orders(raws: Iterable[Dict[str, Any]]) -> List[Order]:
    """Normalize a batch, preserving input order."""
    orders = [normalize_order(raw, index) for index, raw in enumerate(raws)]
    logger.debug(f"Normalized {len(orders)} raw orders")
    return orders
