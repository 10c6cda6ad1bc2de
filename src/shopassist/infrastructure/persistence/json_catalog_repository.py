"""JSON-file-backed, read-only implementation of CatalogRepository."""

from __future__ import annotations

import json
import threading
from decimal import Decimal, InvalidOperation
from pathlib import Path

import structlog

from shopassist.domain.exceptions import CatalogUnavailableError, DomainException
from shopassist.domain.model.product import Product
from shopassist.domain.model.value_objects import Money
from shopassist.domain.repository.catalog_repository import CatalogRepository

logger = structlog.get_logger()


class JsonCatalogRepository(CatalogRepository):
    """Reads the product catalog from a JSON array of records.

    By default the file is re-read on every call.  With ``cache=True`` it
    is loaded once and kept for the life of the repository; nothing in this
    package mutates the catalog, so staleness only matters if the file is
    edited underneath a running process.
    """

    def __init__(self, file_path: Path, cache: bool = False) -> None:
        self._file_path = file_path
        self._cache = cache
        self._cached: dict[str, Product] | None = None
        self._lock = threading.Lock()

    # --- CatalogRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._products().get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._products().values())

    # --- Loading --------------------------------------------------------------

    def _products(self) -> dict[str, Product]:
        if not self._cache:
            return self._load()
        with self._lock:
            if self._cached is None:
                self._cached = self._load()
            return self._cached

    def _load(self) -> dict[str, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CatalogUnavailableError(
                f"Cannot read product catalog at {self._file_path}: {exc}"
            ) from exc
        if not isinstance(raw, list):
            raise CatalogUnavailableError(
                f"Product catalog at {self._file_path} must be a JSON array"
            )

        products: dict[str, Product] = {}
        for record in raw:
            try:
                product = self._to_domain(record)
            except (KeyError, TypeError, ValueError, InvalidOperation, DomainException) as exc:
                logger.warning(
                    "Skipping malformed catalog record",
                    record_id=record.get("id") if isinstance(record, dict) else None,
                    error=str(exc),
                )
                continue
            products[product.id] = product
        logger.debug("Catalog loaded", path=str(self._file_path), count=len(products))
        return products

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=str(raw["id"]),
            name=raw["name"],
            description=raw.get("description", ""),
            price=Money(Decimal(str(raw["price"])), raw.get("currency", "USD")),
            category=raw.get("category", ""),
            stock=int(raw.get("stock", 0)),
            image_url=raw.get("imageUrl", ""),
        )
