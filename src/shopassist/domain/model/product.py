"""Product record from the static catalog.

Products are owned by the catalog source and never mutated here; carts and
orders copy the name and price they need at the moment an item is added.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopassist.domain.exceptions import ValidationError
from shopassist.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:

    id: str
    name: str
    price: Money
    stock: int
    category: str = ""
    description: str = ""
    image_url: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Product ID is required")
        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise ValidationError(
                f"Stock must be an integer, got {type(self.stock).__name__}"
            )
        if self.stock < 0:
            raise ValidationError(f"Stock for {self.name} cannot be negative")

    @property
    def in_stock(self) -> bool:
        return self.stock > 0
