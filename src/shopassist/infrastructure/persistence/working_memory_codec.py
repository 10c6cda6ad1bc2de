"""Serialization between ResourceState and the persisted working-memory document.

Wire format (camelCase, decimals as strings)::

    {
      "cart":   [{"productId": "p1", "name": "...", "quantity": 2, "price": "10.00"}],
      "orders": [{"orderId": "ORD-...", "items": [...], "subtotal": "20.00",
                  "tax": "1.60", "total": "21.60", "date": "2024-...Z",
                  "status": "confirmed"}]
    }

Older documents whose orders carry only ``total`` are accepted; the missing
subtotal and tax are derived from the items. Lines with a zero or negative
quantity are dropped on load.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from shopassist.domain.model.cart import Cart, CartItem
from shopassist.domain.model.order import TAX_RATE, Order, OrderStatus
from shopassist.domain.model.resource_state import ResourceState
from shopassist.domain.model.value_objects import Money


def state_to_document(state: ResourceState) -> dict[str, Any]:
    """Return only the keys this package owns: ``cart`` and ``orders``."""
    return {
        "cart": [_item_to_raw(i) for i in state.cart.items],
        "orders": [_order_to_raw(o) for o in state.orders],
    }


def state_from_document(document: dict[str, Any]) -> ResourceState:
    cart = Cart(_items_to_domain(document.get("cart") or []))
    orders = tuple(_order_to_domain(raw) for raw in document.get("orders") or [])
    return ResourceState(cart=cart, orders=orders)


# --- Cart items -------------------------------------------------------------


def _item_to_raw(item: CartItem) -> dict[str, Any]:
    return {
        "productId": item.product_id,
        "name": item.name,
        "quantity": item.quantity,
        "price": str(item.price.amount),
    }


def _item_to_domain(raw: dict[str, Any]) -> CartItem:
    return CartItem(
        product_id=raw["productId"],
        name=raw["name"],
        quantity=int(raw["quantity"]),
        price=Money.of(raw["price"]),
    )


def _items_to_domain(raws: list[dict[str, Any]]) -> tuple[CartItem, ...]:
    # Older writers could persist lines with quantity <= 0; those mean "removed".
    return tuple(_item_to_domain(raw) for raw in raws if int(raw["quantity"]) > 0)


# --- Orders -----------------------------------------------------------------


def _order_to_raw(order: Order) -> dict[str, Any]:
    return {
        "orderId": order.order_id,
        "items": [_item_to_raw(i) for i in order.items],
        "subtotal": str(order.subtotal.amount),
        "tax": str(order.tax.amount),
        "total": str(order.total.amount),
        "date": order.date.isoformat(),
        "status": order.status.value,
    }


def _order_to_domain(raw: dict[str, Any]) -> Order:
    items = _items_to_domain(raw["items"])

    if "subtotal" in raw:
        subtotal = Money.of(raw["subtotal"])
    else:
        subtotal = Cart(items).total
    tax = Money.of(raw["tax"]) if "tax" in raw else subtotal.percent(TAX_RATE)
    total = Money.of(raw["total"]) if "total" in raw else subtotal + tax

    return Order(
        order_id=raw["orderId"],
        items=items,
        subtotal=subtotal,
        tax=tax,
        total=total,
        date=_parse_date(raw["date"]),
        status=OrderStatus(raw.get("status", OrderStatus.CONFIRMED.value)),
    )


def _parse_date(value: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
