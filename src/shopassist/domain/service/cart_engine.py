"""Domain service: Cart Engine.

A total function over (current state, command) -> outcome.  Expected
business conditions (unknown product, insufficient stock, item not in cart)
come back as ``success=False`` with the input state untouched.  Only a
failure of the catalog itself (CatalogUnavailableError) propagates.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopassist.domain.exceptions import DomainException, EntityNotFoundError
from shopassist.domain.model.cart import Cart
from shopassist.domain.model.cart_commands import (
    AddToCart,
    CartCommand,
    ClearCart,
    RemoveFromCart,
    UpdateCartItem,
    ViewCart,
)
from shopassist.domain.model.product import Product
from shopassist.domain.model.resource_state import ResourceState
from shopassist.domain.repository.catalog_repository import CatalogRepository


@dataclass(frozen=True)
class CartOutcome:
    success: bool
    message: str
    state: ResourceState

    @property
    def cart(self) -> Cart:
        return self.state.cart


class CartEngine:

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    def apply(self, state: ResourceState, command: CartCommand) -> CartOutcome:
        """Run *command* against *state*; never raises for business failures."""
        try:
            if isinstance(command, AddToCart):
                return self._add(state, command.product_id, command.quantity)
            if isinstance(command, RemoveFromCart):
                return self._remove(state, command.product_id)
            if isinstance(command, UpdateCartItem):
                return self._update(state, command.product_id, command.quantity)
            if isinstance(command, ViewCart):
                return self._view(state)
            if isinstance(command, ClearCart):
                return self._clear(state)
        except DomainException as exc:
            return CartOutcome(success=False, message=str(exc), state=state)
        return CartOutcome(success=False, message="Invalid action", state=state)

    # --- Convenience wrappers -------------------------------------------------

    def add(self, state: ResourceState, product_id: str, quantity: int = 1) -> CartOutcome:
        return self.apply(state, AddToCart(product_id, quantity))

    def remove(self, state: ResourceState, product_id: str) -> CartOutcome:
        return self.apply(state, RemoveFromCart(product_id))

    def update(self, state: ResourceState, product_id: str, quantity: int) -> CartOutcome:
        return self.apply(state, UpdateCartItem(product_id, quantity))

    def view(self, state: ResourceState) -> CartOutcome:
        return self.apply(state, ViewCart())

    def clear(self, state: ResourceState) -> CartOutcome:
        return self.apply(state, ClearCart())

    # --- Actions --------------------------------------------------------------

    def _add(self, state: ResourceState, product_id: str, quantity: int) -> CartOutcome:
        product = self._product(product_id)
        cart = state.cart.with_added(product, quantity)
        return CartOutcome(
            success=True,
            message=f"Added {quantity}x {product.name} to cart",
            state=state.with_cart(cart),
        )

    def _remove(self, state: ResourceState, product_id: str) -> CartOutcome:
        removed = state.cart.find(product_id)
        cart = state.cart.without(product_id)
        return CartOutcome(
            success=True,
            message=f"Removed {removed.name} from cart",  # type: ignore[union-attr]
            state=state.with_cart(cart),
        )

    def _update(self, state: ResourceState, product_id: str, quantity: int) -> CartOutcome:
        # Cart membership first, then catalog.
        if state.cart.find(product_id) is None:
            raise EntityNotFoundError("Item not found in cart")
        product = self._product(product_id)
        cart = state.cart.with_quantity(product, quantity)
        return CartOutcome(
            success=True,
            message=f"Updated {product.name} quantity to {quantity}",
            state=state.with_cart(cart),
        )

    @staticmethod
    def _view(state: ResourceState) -> CartOutcome:
        cart = state.cart
        if cart.is_empty:
            message = "Your cart is empty"
        else:
            message = f"Your cart contains {cart.item_count} item(s)"
        return CartOutcome(success=True, message=message, state=state)

    @staticmethod
    def _clear(state: ResourceState) -> CartOutcome:
        return CartOutcome(
            success=True,
            message="Cart cleared successfully",
            state=state.with_cart(Cart()),
        )

    # --- Internal helpers -----------------------------------------------------

    def _product(self, product_id: str) -> Product:
        if not product_id:
            raise EntityNotFoundError("Product ID is required")
        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f'Product with ID "{product_id}" not found')
        return product
