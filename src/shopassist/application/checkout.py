"""Application service: Checkout use case.

The CheckoutEngine builds the order and the replacement state; this handler
serializes the cycle per resource and commits the new {cart, orders} pair in
a single write.
"""

from __future__ import annotations

import structlog

from shopassist.application.dto import CheckoutResultDTO, OrderDTO
from shopassist.application.resource_locks import ResourceLocks
from shopassist.domain.repository.working_memory_store import WorkingMemoryStore
from shopassist.domain.service.checkout_engine import CheckoutEngine

logger = structlog.get_logger()


class CheckoutHandler:

    def __init__(
        self,
        store: WorkingMemoryStore,
        engine: CheckoutEngine | None = None,
        locks: ResourceLocks | None = None,
    ) -> None:
        self._store = store
        self._engine = engine or CheckoutEngine()
        self._locks = locks or ResourceLocks()

    def handle(self, resource_id: str, confirm: bool = True) -> CheckoutResultDTO:
        with self._locks.hold(resource_id):
            state = self._store.load(resource_id)
            outcome = self._engine.checkout(state, confirm=confirm)
            if outcome.success:
                self._store.commit(resource_id, outcome.state)

        if outcome.order is None:
            logger.info(
                "Checkout rejected",
                resource_id=resource_id,
                reason=outcome.message,
                cart_length=state.cart.item_count,
            )
            return CheckoutResultDTO(success=False, message=outcome.message)

        order = outcome.order
        logger.info(
            "Checkout completed",
            resource_id=resource_id,
            order_id=order.order_id,
            orders_length=len(outcome.state.orders),
            subtotal=str(order.subtotal.rounded()),
            tax=str(order.tax.rounded()),
            total=str(order.total.rounded()),
        )
        return CheckoutResultDTO(
            success=True,
            message=outcome.message,
            order=OrderDTO.from_domain(order),
        )
