"""Order: an immutable record of a completed checkout.

Orders are only ever created by ``Order.place()`` and appended to a
resource's history; nothing edits or removes them afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from shopassist.domain.exceptions import ValidationError
from shopassist.domain.model.cart import Cart, CartItem
from shopassist.domain.model.value_objects import Money


class OrderStatus(Enum):
    CONFIRMED = "confirmed"


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
TAX_RATE = Decimal("0.08")


@dataclass(frozen=True)
class Order:
    """A placed order.

    ``items`` is the cart snapshot at checkout time.  CartItem and the tuple
    holding it are both immutable, so later cart changes cannot reach back
    into a placed order.  The plain ``__init__`` lets the store reconstitute
    persisted orders without recomputing their totals.
    """

    order_id: str
    items: tuple[CartItem, ...]
    subtotal: Money
    tax: Money
    total: Money
    date: datetime
    status: OrderStatus = OrderStatus.CONFIRMED

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(cart: Cart, order_id: str, placed_at: datetime) -> Order:
        """Turn *cart* into a confirmed order with computed totals."""
        if cart.is_empty:
            raise ValidationError(
                "Cannot checkout with an empty cart. "
                "Please add items to your cart first."
            )
        if not order_id:
            raise ValidationError("Order ID is required")

        subtotal = cart.total
        tax = subtotal.percent(TAX_RATE)
        return Order(
            order_id=order_id,
            items=cart.items,
            subtotal=subtotal,
            tax=tax,
            total=subtotal + tax,
            date=placed_at,
        )

    @property
    def item_count(self) -> int:
        return len(self.items)
