"""Cart aggregate: the mutable-looking half of a resource's working memory.

A Cart is immutable: every operation returns a new Cart and leaves the
receiver untouched, so an engine can compute a candidate state and discard
it on failure without any rollback.

Invariants:
- at most one CartItem per product id
- every ``quantity`` is >= 1
- insertion order is preserved across updates
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from shopassist.domain.exceptions import EntityNotFoundError, ValidationError
from shopassist.domain.model.product import Product
from shopassist.domain.model.value_objects import Money


@dataclass(frozen=True)
class CartItem:
    """A product line in the cart.

    ``name`` and ``price`` are a snapshot taken when the product was first
    added; later catalog price changes do not touch existing items.
    """

    product_id: str
    name: str
    quantity: int
    price: Money

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.quantity).__name__}"
            )
        if self.quantity <= 0:
            raise ValidationError("Quantity must be positive")

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity


@dataclass(frozen=True)
class Cart:

    items: tuple[CartItem, ...] = ()

    # --- Queries --------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        """Number of distinct lines (not units) in the cart."""
        return len(self.items)

    @property
    def total(self) -> Money:
        return Money.total(item.line_total for item in self.items)

    def find(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    # --- Transitions ----------------------------------------------------------

    def with_added(self, product: Product, quantity: int = 1) -> Cart:
        """Add *quantity* units of *product*, merging into an existing line.

        Raises ValidationError if the request, alone or combined with what
        is already in the cart, exceeds the product's stock.
        """
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        if quantity > product.stock:
            raise ValidationError(
                f"Only {product.stock} units available for {product.name}"
            )

        existing = self.find(product.id)
        if existing is None:
            new_item = CartItem(
                product_id=product.id,
                name=product.name,
                quantity=quantity,
                price=product.price,  # price snapshot
            )
            return Cart(self.items + (new_item,))

        new_quantity = existing.quantity + quantity
        if new_quantity > product.stock:
            raise ValidationError(
                f"Cannot add {quantity} more. Only {product.stock} units "
                f"available for {product.name}"
            )
        return self._replace_item(replace(existing, quantity=new_quantity))

    def without(self, product_id: str) -> Cart:
        """Remove the line for *product_id*, keeping the order of the rest."""
        self._require(product_id)
        return Cart(tuple(i for i in self.items if i.product_id != product_id))

    def with_quantity(self, product: Product, quantity: int) -> Cart:
        """Set the quantity of an existing line exactly.

        A zero or negative quantity removes the line instead of failing.
        """
        existing = self._require(product.id)
        if quantity > product.stock:
            raise ValidationError(
                f"Only {product.stock} units available for {product.name}"
            )
        if quantity <= 0:
            return self.without(product.id)
        return self._replace_item(replace(existing, quantity=quantity))

    # --- Internal helpers -----------------------------------------------------

    def _require(self, product_id: str) -> CartItem:
        item = self.find(product_id)
        if item is None:
            raise EntityNotFoundError("Item not found in cart")
        return item

    def _replace_item(self, updated: CartItem) -> Cart:
        return Cart(
            tuple(
                updated if i.product_id == updated.product_id else i
                for i in self.items
            )
        )
