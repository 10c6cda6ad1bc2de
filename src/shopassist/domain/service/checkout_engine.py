"""Domain service: Checkout Engine.

The engine is stateless.  OpenCart vs. checked-out is not a stored label;
it is simply whether the cart has been turned into the newest order.

Checkout is compute-then-replace: the Order is fully built first, then a
single new ResourceState (orders + order, empty cart) is returned.  There is
no intermediate state where the cart is cleared but no order exists, or the
other way round.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from shopassist.domain.exceptions import DomainException
from shopassist.domain.model.order import Order
from shopassist.domain.model.resource_state import ResourceState
from shopassist.domain.service.order_id_generator import OrderIdGenerator


@dataclass(frozen=True)
class CheckoutOutcome:
    success: bool
    message: str
    state: ResourceState
    order: Order | None = None


class CheckoutEngine:

    def __init__(
        self,
        id_generator: OrderIdGenerator | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._id_generator = id_generator or OrderIdGenerator()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def checkout(self, state: ResourceState, confirm: bool = True) -> CheckoutOutcome:
        if not confirm:
            return CheckoutOutcome(
                success=False, message="Checkout cancelled by user", state=state
            )

        try:
            order = Order.place(
                state.cart,
                order_id=self._id_generator.next_id(taken=state.order_ids),
                placed_at=self._clock(),
            )
        except DomainException as exc:
            return CheckoutOutcome(success=False, message=str(exc), state=state)

        return CheckoutOutcome(
            success=True,
            message=f"Order placed successfully! Your order ID is {order.order_id}",
            state=state.with_order_placed(order),
            order=order,
        )
