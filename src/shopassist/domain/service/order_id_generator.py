"""Domain service: order id minting.

Ids look like ``ORD-1718000000123-9f2c``: wall-clock milliseconds for
readability and ordering, plus a random suffix so two checkouts landing in
the same millisecond (in this process or another) collide only with low
probability.  Within one process the millisecond part never repeats or goes
backwards, even if the system clock does.
"""

from __future__ import annotations

import secrets
import threading
import time
from collections.abc import Callable, Collection

_MAX_ATTEMPTS = 10


class OrderIdGenerator:

    def __init__(
        self,
        prefix: str = "ORD",
        clock_ms: Callable[[], int] | None = None,
        suffix: Callable[[], str] | None = None,
    ) -> None:
        self._prefix = prefix
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._suffix = suffix or (lambda: secrets.token_hex(2))
        self._last_ms = 0
        self._lock = threading.Lock()

    def next_id(self, taken: Collection[str] = ()) -> str:
        """Return an id not present in *taken* (the resource's prior order ids)."""
        for _ in range(_MAX_ATTEMPTS):
            candidate = f"{self._prefix}-{self._tick()}-{self._suffix()}"
            if candidate not in taken:
                return candidate
        raise RuntimeError(
            f"Could not mint a unique order id after {_MAX_ATTEMPTS} attempts"
        )

    def _tick(self) -> int:
        with self._lock:
            now = self._clock_ms()
            self._last_ms = now if now > self._last_ms else self._last_ms + 1
            return self._last_ms
