"""Concurrency tests: no lost updates for one resource, no contention across resources."""

import gc
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from shopassist.application.manage_cart import ManageCartHandler
from shopassist.application.resource_locks import ResourceLocks
from shopassist.domain.model.cart_commands import AddToCart
from shopassist.domain.model.resource_state import ResourceState
from tests.fakes import FakeCatalogRepository, FakeWorkingMemoryStore, make_product


class SlowStore(FakeWorkingMemoryStore):
    """Widens the read-modify-write window so races would show up."""

    def load(self, resource_id: str) -> ResourceState:
        state = super().load(resource_id)
        time.sleep(0.002)
        return state


class TestResourceLocks:

    def test_same_resource_gets_same_lock(self):
        locks = ResourceLocks()
        assert locks.lock_for("a") is locks.lock_for("a")
        assert locks.lock_for("a") is not locks.lock_for("b")

    def test_concurrent_adds_are_not_lost(self):
        catalog = FakeCatalogRepository([make_product("p1", "Widget", "1.00", stock=1000)])
        store = SlowStore()
        handler = ManageCartHandler(store=store, catalog=catalog, locks=ResourceLocks())

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: handler.handle("alice", AddToCart("p1", 1)), range(40)))

        assert all(r.success for r in results)
        assert store.load("alice").cart.find("p1").quantity == 40

    def test_different_resources_do_not_block_each_other(self):
        locks = ResourceLocks()
        entered_b = threading.Event()

        with locks.hold("a"):
            worker = threading.Thread(target=lambda: _hold_and_signal(locks, "b", entered_b))
            worker.start()
            assert entered_b.wait(timeout=2)
            worker.join()


def _hold_and_signal(locks: ResourceLocks, resource_id: str, event: threading.Event) -> None:
    with locks.hold(resource_id):
        event.set()


class TestResourceLockEviction:

    def test_unreferenced_locks_are_dropped(self):
        locks = ResourceLocks()
        for i in range(100):
            with locks.hold(f"session-{i}"):
                pass
        gc.collect()
        assert len(locks) == 0

    def test_lock_survives_while_held(self):
        locks = ResourceLocks()
        held = locks.lock_for("a")
        gc.collect()
        assert locks.lock_for("a") is held
        assert len(locks) == 1
