"""Tool input schemas.

Pydantic models for the flat parameter sets an agent sends to each tool.
Field names follow the agent-facing camelCase; validation happens once,
here, and the handlers below only ever see typed commands.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from shopassist.application.dto import ProductFilter
from shopassist.domain.model.cart_commands import (
    AddToCart,
    CartCommand,
    ClearCart,
    RemoveFromCart,
    UpdateCartItem,
    ViewCart,
)


class ToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


# ============================================================================
# Product search
# ============================================================================


class ProductSearchInput(ToolInput):
    """Search and filter products by name, category, or price range."""

    query: str | None = Field(
        default=None, description="Search query to match product name or description"
    )
    category: str | None = Field(
        default=None,
        description="Filter by category (electronics, clothing, books, accessories)",
    )
    min_price: Decimal | None = Field(
        default=None, alias="minPrice", ge=0, description="Minimum price filter"
    )
    max_price: Decimal | None = Field(
        default=None, alias="maxPrice", ge=0, description="Maximum price filter"
    )
    limit: int = Field(
        default=10, ge=1, description="Maximum number of results to return"
    )

    def to_filter(self) -> ProductFilter:
        return ProductFilter(
            query=self.query or None,
            category=self.category or None,
            min_price=self.min_price,
            max_price=self.max_price,
            limit=self.limit,
        )


# ============================================================================
# Cart management (tagged by ``action``)
# ============================================================================


class CartActionInput(ToolInput):
    # Agents send one flat parameter set for every action; keys that do not
    # apply to the chosen action are ignored.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CartAddInput(CartActionInput):
    action: Literal["add"]
    product_id: str = Field(..., alias="productId", min_length=1)
    quantity: int = Field(default=1, description="Quantity to add (default: 1)")

    def to_command(self) -> CartCommand:
        return AddToCart(self.product_id, self.quantity)


class CartRemoveInput(CartActionInput):
    action: Literal["remove"]
    product_id: str = Field(..., alias="productId", min_length=1)

    def to_command(self) -> CartCommand:
        return RemoveFromCart(self.product_id)


class CartUpdateInput(CartActionInput):
    action: Literal["update"]
    product_id: str = Field(..., alias="productId", min_length=1)
    quantity: int = Field(
        ..., description="New quantity; zero or negative removes the item"
    )

    def to_command(self) -> CartCommand:
        return UpdateCartItem(self.product_id, self.quantity)


class CartViewInput(CartActionInput):
    action: Literal["view"]

    def to_command(self) -> CartCommand:
        return ViewCart()


class CartClearInput(CartActionInput):
    action: Literal["clear"]

    def to_command(self) -> CartCommand:
        return ClearCart()


CartToolInput = Annotated[
    Union[CartAddInput, CartRemoveInput, CartUpdateInput, CartViewInput, CartClearInput],
    Field(discriminator="action"),
]

cart_input_adapter: TypeAdapter[CartToolInput] = TypeAdapter(CartToolInput)


# ============================================================================
# Checkout
# ============================================================================


class CheckoutInput(ToolInput):
    confirm_checkout: bool = Field(
        default=True,
        alias="confirmCheckout",
        description="Confirm that user wants to proceed with checkout",
    )


# ============================================================================
# Function-calling definitions
# ============================================================================


class _CartSchema(ToolInput):
    """Flat, agent-facing view of the cart tool's parameters.

    Only used to publish a single JSON schema; real validation goes through
    the discriminated ``CartToolInput`` union.
    """

    action: Literal["add", "remove", "update", "view", "clear"] = Field(
        ..., description="Cart action to perform"
    )
    product_id: str | None = Field(
        default=None,
        alias="productId",
        description="Product ID for add/remove/update actions",
    )
    quantity: int | None = Field(
        default=None, description="Quantity for add/update actions (default: 1)"
    )


TOOL_DEFINITIONS: list[dict] = [
    {
        "name": "product-search",
        "description": (
            "Search and filter products in the store. Can search by name, "
            "category, or price range."
        ),
        "parameters": ProductSearchInput.model_json_schema(by_alias=True),
    },
    {
        "name": "cart-management",
        "description": (
            "Manage shopping cart operations: add items, remove items, update "
            "quantities, view cart, or clear cart."
        ),
        "parameters": _CartSchema.model_json_schema(by_alias=True),
    },
    {
        "name": "checkout",
        "description": (
            "Process checkout for the current cart: calculates subtotal, tax and "
            "total, creates an order ID, and moves items from cart to order history."
        ),
        "parameters": CheckoutInput.model_json_schema(by_alias=True),
    },
]
