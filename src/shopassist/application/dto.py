"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data out of the application layer (to the CLI and the agent
tool boundary) without exposing domain internals.  Money is already
rounded to cents here; the domain keeps full precision.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from shopassist.domain.model.cart import Cart, CartItem
from shopassist.domain.model.order import Order
from shopassist.domain.model.product import Product


@dataclass(frozen=True)
class ProductFilter:
    """Input: conjunctive product search criteria.  All fields optional."""

    query: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    limit: int = 10


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: Decimal
    category: str
    stock: int
    image_url: str

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price.rounded(),
            category=product.category,
            stock=product.stock,
            image_url=product.image_url,
        )


@dataclass(frozen=True)
class SearchResultDTO:
    """Output: one page of matches plus the pre-limit match count."""

    products: list[ProductDTO]
    total_found: int
    message: str


@dataclass(frozen=True)
class CartItemDTO:
    product_id: str
    name: str
    quantity: int
    price: Decimal
    line_total: Decimal

    @staticmethod
    def from_domain(item: CartItem) -> CartItemDTO:
        return CartItemDTO(
            product_id=item.product_id,
            name=item.name,
            quantity=item.quantity,
            price=item.price.rounded(),
            line_total=item.line_total.rounded(),
        )


def cart_items(cart: Cart) -> list[CartItemDTO]:
    return [CartItemDTO.from_domain(item) for item in cart.items]


@dataclass(frozen=True)
class CartResultDTO:
    """Output of every cart action."""

    success: bool
    message: str
    cart: list[CartItemDTO] = field(default_factory=list)
    cart_total: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class OrderDTO:
    order_id: str
    items: list[CartItemDTO]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    date: str  # ISO-8601
    status: str

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        return OrderDTO(
            order_id=order.order_id,
            items=[CartItemDTO.from_domain(i) for i in order.items],
            subtotal=order.subtotal.rounded(),
            tax=order.tax.rounded(),
            total=order.total.rounded(),
            date=order.date.isoformat(),
            status=order.status.value,
        )


@dataclass(frozen=True)
class CheckoutResultDTO:
    success: bool
    message: str
    order: OrderDTO | None = None
