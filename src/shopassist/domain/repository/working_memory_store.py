"""Abstract store for per-resource working memory.

The persisted document for a resource may carry top-level keys this
package does not own.  ``commit`` is therefore a shallow merge: it
overwrites ``cart`` and ``orders`` and leaves every other key exactly as
found.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from shopassist.domain.model.resource_state import ResourceState

OWNED_KEYS = ("cart", "orders")


class WorkingMemoryStore(ABC):

    @abstractmethod
    def load(self, resource_id: str) -> ResourceState:
        """Return the state for *resource_id*, or an empty state if none exists."""

    @abstractmethod
    def commit(self, resource_id: str, state: ResourceState) -> None:
        """Shallow-merge the ``cart`` and ``orders`` of *state* into the stored document."""

    @abstractmethod
    def load_document(self, resource_id: str) -> dict[str, Any]:
        """Return the raw stored document, including keys owned by others."""
