"""Agent-facing tools for the shopping assistant.

Thin adapters over the application handlers:
1. product_search - search and filter the catalog
2. cart           - add / remove / update / view / clear the cart
3. checkout       - turn the cart into a confirmed order

Each tool takes a flat set of named parameters and returns a flat,
JSON-ready dict with ``success`` and ``message`` plus tool-specific fields.
Nothing here raises to the agent: invalid parameters and backend outages
become ``success=False`` so the conversation can carry on.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import pydantic
import structlog

from shopassist.application.checkout import CheckoutHandler
from shopassist.application.dto import (
    CartItemDTO,
    CartResultDTO,
    CheckoutResultDTO,
    OrderDTO,
    ProductDTO,
    SearchResultDTO,
)
from shopassist.application.manage_cart import ManageCartHandler
from shopassist.application.search_products import SearchProductsHandler
from shopassist.domain.exceptions import InfrastructureError
from shopassist.infrastructure.tools.schemas import (
    CheckoutInput,
    ProductSearchInput,
    cart_input_adapter,
)

logger = structlog.get_logger()

UNAVAILABLE_MESSAGE = (
    "Sorry, the store is temporarily unavailable. Please try again shortly."
)


def format_validation_error(exc: pydantic.ValidationError) -> str:
    """Format a schema validation error for agent consumption."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"]) or "input"
        problems.append(f"{location}: {err['msg']}")
    return "Invalid parameters - " + "; ".join(problems)


class ShoppingTools:

    def __init__(
        self,
        search_handler: SearchProductsHandler,
        cart_handler: ManageCartHandler,
        checkout_handler: CheckoutHandler,
    ) -> None:
        self._search = search_handler
        self._cart = cart_handler
        self._checkout = checkout_handler

    # =========================================================================
    # Tool 1: product-search
    # =========================================================================

    def product_search(self, **params: Any) -> dict[str, Any]:
        try:
            request = ProductSearchInput.model_validate(params)
        except pydantic.ValidationError as exc:
            return {
                "products": [],
                "totalFound": 0,
                "message": format_validation_error(exc),
            }
        return _search_payload(self._search.handle(request.to_filter()))

    # =========================================================================
    # Tool 2: cart-management
    # =========================================================================

    def cart(self, resource_id: str, **params: Any) -> dict[str, Any]:
        try:
            request = cart_input_adapter.validate_python(params)
        except pydantic.ValidationError as exc:
            return {"success": False, "message": format_validation_error(exc)}

        try:
            result = self._cart.handle(resource_id, request.to_command())
        except InfrastructureError:
            logger.exception(
                "Cart tool failed", resource_id=resource_id, action=request.action
            )
            return {"success": False, "message": UNAVAILABLE_MESSAGE}
        return _cart_payload(result)

    # =========================================================================
    # Tool 3: checkout
    # =========================================================================

    def checkout(self, resource_id: str, **params: Any) -> dict[str, Any]:
        try:
            request = CheckoutInput.model_validate(params)
        except pydantic.ValidationError as exc:
            return {"success": False, "message": format_validation_error(exc)}

        try:
            result = self._checkout.handle(resource_id, confirm=request.confirm_checkout)
        except InfrastructureError:
            logger.exception("Checkout tool failed", resource_id=resource_id)
            return {"success": False, "message": UNAVAILABLE_MESSAGE}
        return _checkout_payload(result)

    # =========================================================================
    # Dispatch by tool name
    # =========================================================================

    def call(self, name: str, resource_id: str, params: dict[str, Any]) -> dict[str, Any]:
        """Invoke a tool by its published name (see ``TOOL_DEFINITIONS``)."""
        if name == "product-search":
            return self.product_search(**params)
        if name == "cart-management":
            return self.cart(resource_id, **params)
        if name == "checkout":
            return self.checkout(resource_id, **params)
        return {"success": False, "message": f"Unknown tool '{name}'"}


# --- Payload mapping ---------------------------------------------------------


def _number(value: Decimal) -> float:
    return float(value)


def _product(dto: ProductDTO) -> dict[str, Any]:
    return {
        "id": dto.id,
        "name": dto.name,
        "description": dto.description,
        "price": _number(dto.price),
        "category": dto.category,
        "stock": dto.stock,
        "imageUrl": dto.image_url,
    }


def _item(dto: CartItemDTO) -> dict[str, Any]:
    return {
        "productId": dto.product_id,
        "name": dto.name,
        "quantity": dto.quantity,
        "price": _number(dto.price),
    }


def _order(dto: OrderDTO) -> dict[str, Any]:
    return {
        "orderId": dto.order_id,
        "items": [_item(i) for i in dto.items],
        "subtotal": _number(dto.subtotal),
        "tax": _number(dto.tax),
        "total": _number(dto.total),
        "date": dto.date,
        "status": dto.status,
    }


def _search_payload(result: SearchResultDTO) -> dict[str, Any]:
    return {
        "products": [_product(p) for p in result.products],
        "totalFound": result.total_found,
        "message": result.message,
    }


def _cart_payload(result: CartResultDTO) -> dict[str, Any]:
    return {
        "success": result.success,
        "message": result.message,
        "cart": [_item(i) for i in result.cart],
        "cartTotal": _number(result.cart_total),
    }


def _checkout_payload(result: CheckoutResultDTO) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": result.success, "message": result.message}
    if result.order is not None:
        payload["order"] = _order(result.order)
    return payload
