"""End-to-end CLI tests against a temporary data directory."""

import json
import shutil
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from shopassist.infrastructure.cli.main import cli
from shopassist.infrastructure.config import get_settings

SHIPPED_CATALOG = Path(__file__).resolve().parents[2] / "data" / "products.json"


@pytest.fixture(autouse=True)
def _reset_logging():
    # The CLI points structlog at the runner's stderr, which is closed afterwards.
    yield
    structlog.reset_defaults()
    get_settings.cache_clear()


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("SHOPASSIST_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    shutil.copy(SHIPPED_CATALOG, tmp_path / "products.json")
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args])

    return _run


class TestCatalogCommands:

    def test_search_by_category(self, run):
        result = run("catalog", "search", "--category", "books")
        assert result.exit_code == 0
        assert "Found 2 product(s)" in result.stdout
        assert "The Pragmatic Engineer" in result.stdout

    def test_search_hides_out_of_stock(self, run):
        result = run("catalog", "search", "--category", "electronics", "--limit", "2")
        assert "Found 6 product(s) (showing first 2)" in result.stdout
        assert "SlateTab" not in result.stdout

    def test_show_product(self, run):
        result = run("catalog", "show", "--id", "prod-014")
        assert result.exit_code == 0
        assert "Commuter Backpack" in result.stdout
        assert "$79.00" in result.stdout

    def test_show_missing_product(self, run):
        result = run("catalog", "show", "--id", "nope")
        assert result.exit_code == 1
        assert "not found" in result.output


class TestCartCommands:

    def test_add_and_view(self, run):
        added = run("cart", "add", "--resource", "alice", "--product", "prod-008", "--qty", "2")
        assert added.exit_code == 0
        assert "Added 2x Organic Cotton T-Shirt to cart" in added.stdout

        viewed = run("cart", "view", "--resource", "alice")
        assert "Your cart contains 1 item(s)" in viewed.stdout
        assert "$48.00" in viewed.stdout

    def test_out_of_stock_add_fails(self, run):
        result = run("cart", "add", "--resource", "alice", "--product", "prod-004")
        assert result.exit_code == 1
        assert "Only 0 units available for SlateTab 11" in result.output

    def test_update_to_zero_removes(self, run):
        run("cart", "add", "--resource", "alice", "--product", "prod-005")
        result = run("cart", "update", "--resource", "alice", "--product", "prod-005", "--qty", "0")
        assert result.exit_code == 0
        assert "Updated Mechanical Keyboard quantity to 0" in result.stdout
        assert "Your cart is empty" in run("cart", "view", "--resource", "alice").stdout

    def test_clear(self, run):
        run("cart", "add", "--resource", "alice", "--product", "prod-005")
        assert "Cart cleared successfully" in run("cart", "clear", "--resource", "alice").stdout
        assert "Your cart is empty" in run("cart", "view", "--resource", "alice").stdout


class TestCheckoutAndOrders:

    def test_checkout_flow(self, run):
        run("cart", "add", "--resource", "alice", "--product", "prod-008", "--qty", "2")

        result = run("checkout", "--resource", "alice")

        assert result.exit_code == 0
        assert "Order placed successfully! Your order ID is ORD-" in result.stdout
        assert "$3.84" in result.stdout
        assert "$51.84" in result.stdout

        listed = run("orders", "list", "--resource", "alice")
        assert "ORD-" in listed.stdout
        assert "$51.84" in listed.stdout

        document = json.loads(run("memory", "show", "--resource", "alice").stdout)
        assert document["cart"] == []
        assert len(document["orders"]) == 1

    def test_cancelled_checkout(self, run):
        run("cart", "add", "--resource", "alice", "--product", "prod-008")
        result = run("checkout", "--resource", "alice", "--cancel")
        assert result.exit_code == 1
        assert "Checkout cancelled by user" in result.output

    def test_empty_cart_checkout(self, run):
        result = run("checkout", "--resource", "alice")
        assert result.exit_code == 1
        assert "empty cart" in result.output

    def test_show_single_order(self, run):
        run("cart", "add", "--resource", "alice", "--product", "prod-012", "--qty", "2")
        placed = run("checkout", "--resource", "alice").stdout
        order_id = placed.split("Your order ID is ")[1].split()[0]

        result = run("orders", "show", "--resource", "alice", "--id", order_id)

        assert result.exit_code == 0
        assert f"Order {order_id}" in result.stdout
        assert "The Pragmatic Engineer" in result.stdout
        assert "$74.52" in result.stdout

    def test_show_unknown_order(self, run):
        result = run("orders", "show", "--resource", "alice", "--id", "ORD-missing")
        assert result.exit_code == 1
        assert "Order ORD-missing not found" in result.output

    def test_no_orders(self, run):
        assert "No orders found." in run("orders", "list", "--resource", "bob").stdout
