"""Cart commands: one frozen record per cart action, tagged by ``action``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class AddToCart:
    action: ClassVar[str] = "add"

    product_id: str
    quantity: int = 1


@dataclass(frozen=True)
class RemoveFromCart:
    action: ClassVar[str] = "remove"

    product_id: str


@dataclass(frozen=True)
class UpdateCartItem:
    action: ClassVar[str] = "update"

    product_id: str
    quantity: int


@dataclass(frozen=True)
class ViewCart:
    action: ClassVar[str] = "view"


@dataclass(frozen=True)
class ClearCart:
    action: ClassVar[str] = "clear"


CartCommand = Union[AddToCart, RemoveFromCart, UpdateCartItem, ViewCart, ClearCart]

MUTATING_ACTIONS = frozenset({"add", "remove", "update", "clear"})
