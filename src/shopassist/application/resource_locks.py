"""Per-resource serialization of read-modify-write cycles.

Two invocations for the same resource must never both read the same
pre-state, or one of their mutations is lost.  Invocations for different
resources take different locks and proceed in parallel.

Locks are held weakly: once no caller references a resource's lock, the
entry disappears, so a long-running process does not keep one lock per
resource ever seen.
"""

from __future__ import annotations

import threading
import weakref
from collections.abc import Iterator
from contextlib import contextmanager


class ResourceLocks:

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        """Number of resources whose lock is currently referenced."""
        with self._registry_lock:
            return len(self._locks)

    def lock_for(self, resource_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(resource_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[resource_id] = lock
            return lock

    @contextmanager
    def hold(self, resource_id: str) -> Iterator[None]:
        """Hold the lock for *resource_id* for the duration of the block."""
        lock = self.lock_for(resource_id)
        with lock:
            yield
