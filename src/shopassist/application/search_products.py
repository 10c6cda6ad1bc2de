"""Application service: Search Products use case (query).

Filters are conjunctive.  Out-of-stock products are dropped *before* the
limit is applied, and the pre-limit count is reported separately so the
caller can say "found N, showing K".

An unreadable catalog degrades to an empty result; the distinction from a
genuine "no matches" is only visible in the logs.
"""

from __future__ import annotations

import structlog

from shopassist.application.dto import ProductDTO, ProductFilter, SearchResultDTO
from shopassist.domain.exceptions import CatalogUnavailableError, EntityNotFoundError
from shopassist.domain.model.product import Product
from shopassist.domain.repository.catalog_repository import CatalogRepository

logger = structlog.get_logger()


class SearchProductsHandler:

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    def handle(self, criteria: ProductFilter | None = None) -> SearchResultDTO:
        criteria = criteria or ProductFilter()
        try:
            products = self._catalog.list_all()
        except CatalogUnavailableError as exc:
            logger.error("Catalog unavailable during search", error=str(exc))
            products = []

        matches = [p for p in products if _matches(p, criteria) and p.in_stock]
        total_found = len(matches)
        limit = max(criteria.limit, 0)
        page = matches[:limit]

        message = f"Found {total_found} product(s)"
        if total_found > limit:
            message += f" (showing first {limit})"

        logger.debug(
            "Product search",
            query=criteria.query,
            category=criteria.category,
            total_found=total_found,
            returned=len(page),
        )
        return SearchResultDTO(
            products=[ProductDTO.from_domain(p) for p in page],
            total_found=total_found,
            message=message,
        )


class GetProductHandler:

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    def handle(self, product_id: str) -> ProductDTO:
        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f'Product with ID "{product_id}" not found')
        return ProductDTO.from_domain(product)


def _matches(product: Product, criteria: ProductFilter) -> bool:
    if criteria.category and product.category.lower() != criteria.category.lower():
        return False
    if criteria.query:
        term = criteria.query.lower()
        if term not in product.name.lower() and term not in product.description.lower():
            return False
    if criteria.min_price is not None and product.price.amount < criteria.min_price:
        return False
    if criteria.max_price is not None and product.price.amount > criteria.max_price:
        return False
    return True
