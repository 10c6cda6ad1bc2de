"""Abstract read-only repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopassist.domain.model.product import Product


class CatalogRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found.

        Raises CatalogUnavailableError if the source cannot be read.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, in source order."""
