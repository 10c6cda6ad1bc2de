"""ResourceState: the {cart, orders} document owned by one resource identity."""

from __future__ import annotations

from dataclasses import dataclass, replace

from shopassist.domain.model.cart import Cart
from shopassist.domain.model.order import Order


@dataclass(frozen=True)
class ResourceState:
    """Working memory of a single customer/session.

    Engines never mutate a ResourceState; they return a complete replacement
    which the store commits.  ``orders`` only ever grows.
    """

    cart: Cart = Cart()
    orders: tuple[Order, ...] = ()

    @staticmethod
    def empty() -> ResourceState:
        return ResourceState()

    def with_cart(self, cart: Cart) -> ResourceState:
        return replace(self, cart=cart)

    def with_order_placed(self, order: Order) -> ResourceState:
        """Append *order* and empty the cart in a single transition."""
        return ResourceState(cart=Cart(), orders=self.orders + (order,))

    @property
    def order_ids(self) -> set[str]:
        return {o.order_id for o in self.orders}
