"""Application service: Manage Cart use case.

Orchestrates one read-modify-write cycle per command:

1. Take the resource lock.
2. Load the current working memory.
3. Let the CartEngine compute the outcome.
4. Commit the new state only if a mutating action succeeded.
"""

from __future__ import annotations

import structlog

from shopassist.application.dto import CartResultDTO, cart_items
from shopassist.application.resource_locks import ResourceLocks
from shopassist.domain.exceptions import CatalogUnavailableError
from shopassist.domain.model.cart_commands import MUTATING_ACTIONS, CartCommand
from shopassist.domain.repository.catalog_repository import CatalogRepository
from shopassist.domain.repository.working_memory_store import WorkingMemoryStore
from shopassist.domain.service.cart_engine import CartEngine

logger = structlog.get_logger()

CATALOG_UNAVAILABLE_MESSAGE = "Product catalog is currently unavailable"


class ManageCartHandler:

    def __init__(
        self,
        store: WorkingMemoryStore,
        catalog: CatalogRepository,
        locks: ResourceLocks | None = None,
    ) -> None:
        self._store = store
        self._engine = CartEngine(catalog)
        self._locks = locks or ResourceLocks()

    def handle(self, resource_id: str, command: CartCommand) -> CartResultDTO:
        with self._locks.hold(resource_id):
            state = self._store.load(resource_id)
            log = logger.bind(
                resource_id=resource_id,
                action=command.action,
                product_id=getattr(command, "product_id", None),
                initial_cart_length=state.cart.item_count,
            )

            try:
                outcome = self._engine.apply(state, command)
            except CatalogUnavailableError as exc:
                log.error("Catalog unavailable for cart action", error=str(exc))
                return CartResultDTO(
                    success=False,
                    message=CATALOG_UNAVAILABLE_MESSAGE,
                    cart=cart_items(state.cart),
                    cart_total=state.cart.total.rounded(),
                )

            if outcome.success and command.action in MUTATING_ACTIONS:
                self._store.commit(resource_id, outcome.state)

        log.info(
            "Cart action handled",
            success=outcome.success,
            cart_length=outcome.cart.item_count,
            cart_total=str(outcome.cart.total.rounded()),
        )
        return CartResultDTO(
            success=outcome.success,
            message=outcome.message,
            cart=cart_items(outcome.cart),
            cart_total=outcome.cart.total.rounded(),
        )
