"""Tests for the JSON-file working-memory store (real file I/O under tmp_path)."""

import json
import multiprocessing
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from shopassist.domain.exceptions import StoreUnavailableError
from shopassist.domain.model.cart import Cart, CartItem
from shopassist.domain.model.order import Order
from shopassist.domain.model.resource_state import ResourceState
from shopassist.domain.model.value_objects import Money
from shopassist.infrastructure.persistence.json_working_memory_store import (
    JsonWorkingMemoryStore,
)
from tests.fakes import make_product

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _state() -> ResourceState:
    cart = Cart().with_added(make_product("p1", "Widget", "10.00", stock=5), 2)
    order = Order.place(
        Cart().with_added(make_product("p2", "Gadget", "3.33", stock=5), 3),
        "ORD-1",
        NOW,
    )
    return ResourceState(cart=cart, orders=(order,))


class TestLoad:

    def test_creates_file_and_returns_empty_state(self, tmp_path):
        path = tmp_path / "nested" / "wm.json"
        store = JsonWorkingMemoryStore(path)
        assert path.exists()
        assert store.load("alice") == ResourceState.empty()

    def test_round_trip(self, tmp_path):
        store = JsonWorkingMemoryStore(tmp_path / "wm.json")
        state = _state()
        store.commit("alice", state)
        assert JsonWorkingMemoryStore(tmp_path / "wm.json").load("alice") == state

    def test_decimal_precision_survives(self, tmp_path):
        store = JsonWorkingMemoryStore(tmp_path / "wm.json")
        store.commit("alice", _state())
        order = store.load("alice").orders[0]
        assert order.tax.amount == Decimal("9.99") * Decimal("0.08")

    def test_reads_legacy_numeric_documents(self, tmp_path):
        path = tmp_path / "wm.json"
        path.write_text(json.dumps({
            "alice": {
                "cart": [{"productId": "p1", "name": "Widget", "quantity": 1, "price": 10}],
                "orders": [{
                    "orderId": "ORD-1700000000000",
                    "items": [{"productId": "p1", "name": "Widget", "quantity": 2, "price": 10}],
                    "total": 21.6,
                    "date": "2024-05-01T12:00:00.000Z",
                    "status": "confirmed",
                }],
            }
        }))
        state = JsonWorkingMemoryStore(path).load("alice")
        order = state.orders[0]
        assert order.subtotal.amount == Decimal("20")
        assert order.tax.rounded() == Decimal("1.60")
        assert order.total.amount == Decimal("21.6")
        assert order.date == NOW

    def test_drops_lines_with_non_positive_quantity(self, tmp_path):
        path = tmp_path / "wm.json"
        path.write_text(json.dumps({
            "alice": {
                "cart": [
                    {"productId": "p1", "name": "Widget", "quantity": 0, "price": 10},
                    {"productId": "p2", "name": "Gadget", "quantity": -2, "price": 5},
                    {"productId": "p3", "name": "Gizmo", "quantity": 1, "price": 3},
                ],
            }
        }))
        state = JsonWorkingMemoryStore(path).load("alice")
        assert [i.product_id for i in state.cart.items] == ["p3"]

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "wm.json"
        path.write_text("{not json")
        with pytest.raises(StoreUnavailableError):
            JsonWorkingMemoryStore(path).load("alice")

    def test_corrupt_document_raises(self, tmp_path):
        path = tmp_path / "wm.json"
        path.write_text(json.dumps({"alice": {"cart": [{"productId": "p1"}]}}))
        with pytest.raises(StoreUnavailableError, match="corrupt"):
            JsonWorkingMemoryStore(path).load("alice")


class TestCommitMerge:

    def test_preserves_unowned_keys(self, tmp_path):
        path = tmp_path / "wm.json"
        path.write_text(json.dumps({
            "alice": {"cart": [], "orders": [], "profile": {"name": "Alice"}, "lastSeen": 3},
        }))
        store = JsonWorkingMemoryStore(path)

        store.commit("alice", _state())

        document = json.loads(path.read_text())["alice"]
        assert document["profile"] == {"name": "Alice"}
        assert document["lastSeen"] == 3
        assert document["cart"][0]["productId"] == "p1"
        assert document["orders"][0]["orderId"] == "ORD-1"

    def test_preserves_other_resources(self, tmp_path):
        store = JsonWorkingMemoryStore(tmp_path / "wm.json")
        store.commit("alice", _state())
        store.commit("bob", ResourceState.empty())
        assert store.load("alice") == _state()
        assert store.load_document("bob") == {"cart": [], "orders": []}

    def test_wire_format_is_camel_case_with_string_decimals(self, tmp_path):
        store = JsonWorkingMemoryStore(tmp_path / "wm.json")
        store.commit("alice", _state())
        document = store.load_document("alice")
        assert document["cart"] == [
            {"productId": "p1", "name": "Widget", "quantity": 2, "price": "10.00"}
        ]
        order = document["orders"][0]
        assert order["subtotal"] == "9.99"
        assert order["status"] == "confirmed"
        assert order["date"] == NOW.isoformat()

    def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonWorkingMemoryStore(tmp_path / "wm.json")
        store.commit("alice", _state())
        assert not [p.name for p in tmp_path.iterdir() if p.name.startswith(".wm-")]

    def test_load_document_of_unknown_resource_is_empty(self, tmp_path):
        assert JsonWorkingMemoryStore(tmp_path / "wm.json").load_document("x") == {}


COMMITS_PER_PROCESS = 40


def _commit_repeatedly(path: str, resource_id: str) -> None:
    store = JsonWorkingMemoryStore(Path(path))
    for quantity in range(1, COMMITS_PER_PROCESS + 1):
        item = CartItem("p1", "Widget", quantity, Money.of("1.00"))
        store.commit(resource_id, ResourceState(cart=Cart((item,))))


@pytest.mark.skipif(sys.platform == "win32", reason="needs the fork start method")
class TestCrossProcessCommits:

    def test_processes_do_not_undo_each_others_commits(self, tmp_path):
        path = tmp_path / "wm.json"
        JsonWorkingMemoryStore(path)
        ctx = multiprocessing.get_context("fork")
        workers = [
            ctx.Process(target=_commit_repeatedly, args=(str(path), f"r{i}"))
            for i in range(4)
        ]
        for w in workers:
            w.start()
        for w in workers:
            w.join(timeout=60)
            assert w.exitcode == 0

        store = JsonWorkingMemoryStore(path)
        for i in range(4):
            assert store.load(f"r{i}").cart.find("p1").quantity == COMMITS_PER_PROCESS
