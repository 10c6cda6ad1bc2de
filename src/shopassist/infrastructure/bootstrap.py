"""Composition root: builds handlers on top of the JSON-file adapters.

Every factory takes optional Settings (the CLI passes its own copy).
Handlers built here share one ResourceLocks registry, so cart and checkout
calls for the same resource serialize against each other.
"""

from __future__ import annotations

from functools import lru_cache

from shopassist.application.checkout import CheckoutHandler
from shopassist.application.manage_cart import ManageCartHandler
from shopassist.application.resource_locks import ResourceLocks
from shopassist.application.search_products import GetProductHandler, SearchProductsHandler
from shopassist.application.show_orders import ShowOrdersHandler
from shopassist.infrastructure.config import Settings, get_settings
from shopassist.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from shopassist.infrastructure.persistence.json_working_memory_store import (
    JsonWorkingMemoryStore,
)
from shopassist.infrastructure.tools.shopping_tools import ShoppingTools


def catalog_repository(settings: Settings | None = None) -> JsonCatalogRepository:
    settings = settings or get_settings()
    return JsonCatalogRepository(settings.catalog_path, cache=settings.cache_catalog)


def working_memory_store(settings: Settings | None = None) -> JsonWorkingMemoryStore:
    settings = settings or get_settings()
    return JsonWorkingMemoryStore(settings.memory_path)


@lru_cache
def resource_locks() -> ResourceLocks:
    return ResourceLocks()


def search_products_handler(settings: Settings | None = None) -> SearchProductsHandler:
    return SearchProductsHandler(catalog_repository(settings))


def get_product_handler(settings: Settings | None = None) -> GetProductHandler:
    return GetProductHandler(catalog_repository(settings))


def manage_cart_handler(settings: Settings | None = None) -> ManageCartHandler:
    return ManageCartHandler(
        store=working_memory_store(settings),
        catalog=catalog_repository(settings),
        locks=resource_locks(),
    )


def checkout_handler(settings: Settings | None = None) -> CheckoutHandler:
    return CheckoutHandler(store=working_memory_store(settings), locks=resource_locks())


def show_orders_handler(settings: Settings | None = None) -> ShowOrdersHandler:
    return ShowOrdersHandler(working_memory_store(settings))


def shopping_tools(settings: Settings | None = None) -> ShoppingTools:
    return ShoppingTools(
        search_handler=search_products_handler(settings),
        cart_handler=manage_cart_handler(settings),
        checkout_handler=checkout_handler(settings),
    )
