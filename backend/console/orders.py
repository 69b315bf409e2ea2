"""
Order items as the platform stores them: a list of JSON-encoded strings.

Each string is decoded on its own. A malformed item is logged and skipped;
the rest of the order still renders. The stored format is kept as-is.
"""

import json
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from .formatters import format_currency, to_decimal

logger = logging.getLogger(__name__)


@dataclass
class OrderItem:
    name: str
    price: Decimal
    quantity: int
    discount_price: Decimal | None = None
    item_id: str = ""

    @property
    def unit_price(self) -> Decimal:
        return self.discount_price if self.discount_price is not None else self.price

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    def as_dict(self) -> dict:
        return {
            "id": self.item_id,
            "name": self.name,
            "unit_price": str(self.unit_price),
            "unit_price_display": format_currency(self.unit_price),
            "quantity": self.quantity,
            "subtotal": str(self.subtotal),
            "subtotal_display": format_currency(self.subtotal),
        }


def _quantity(value) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"order item quantity is not a number: {value!r}")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"order item quantity is not a number: {value!r}") from exc
    if not number.is_finite() or number != number.to_integral_value():
        raise ValueError(f"order item quantity is not a whole number: {value!r}")
    return int(number)


def _parse_item(raw) -> OrderItem:
    data = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
    if not isinstance(data, dict):
        raise ValueError(f"order item is not an object: {type(data).__name__}")

    price = to_decimal(data.get("price"))
    if price is None:
        raise ValueError("order item has no price")

    return OrderItem(
        name=str(data.get("name") or ""),
        price=price,
        quantity=_quantity(data.get("quantity")),
        discount_price=to_decimal(data.get("discountPrice")),
        item_id=str(data.get("id") or ""),
    )


def parse_order_items(items) -> list[OrderItem]:
    parsed = []
    for index, raw in enumerate(items or []):
        try:
            parsed.append(_parse_item(raw))
        except (ValueError, TypeError) as exc:
            # json.JSONDecodeError is a ValueError
            logger.error("[Orders] skipping malformed item #%d: %s", index, exc)
    return parsed


def order_total(items: list[OrderItem]) -> Decimal:
    return sum((item.subtotal for item in items), Decimal("0.00"))
