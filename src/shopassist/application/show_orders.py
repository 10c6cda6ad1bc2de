"""Application service: Show Orders use case (query)."""

from __future__ import annotations

from shopassist.application.dto import OrderDTO
from shopassist.domain.exceptions import EntityNotFoundError
from shopassist.domain.repository.working_memory_store import WorkingMemoryStore


class ShowOrdersHandler:

    def __init__(self, store: WorkingMemoryStore) -> None:
        self._store = store

    def handle(self, resource_id: str) -> list[OrderDTO]:
        """Return the order history for *resource_id*, oldest first."""
        state = self._store.load(resource_id)
        return [OrderDTO.from_domain(order) for order in state.orders]

    def handle_one(self, resource_id: str, order_id: str) -> OrderDTO:
        for order in self._store.load(resource_id).orders:
            if order.order_id == order_id:
                return OrderDTO.from_domain(order)
        raise EntityNotFoundError(f"Order {order_id} not found")
