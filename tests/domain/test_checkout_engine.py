"""Unit tests for the CheckoutEngine domain service."""

from datetime import datetime, timezone
from decimal import Decimal

from shopassist.domain.model.resource_state import ResourceState
from shopassist.domain.service.cart_engine import CartEngine
from shopassist.domain.service.checkout_engine import CheckoutEngine
from shopassist.domain.service.order_id_generator import OrderIdGenerator
from tests.fakes import FakeCatalogRepository, make_product

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _engines() -> tuple[CartEngine, CheckoutEngine]:
    catalog = FakeCatalogRepository([
        make_product("p1", "Widget", "10.00", stock=5),
        make_product("p2", "Gadget", "19.99", stock=10),
    ])
    ids = OrderIdGenerator(clock_ms=lambda: 1_700_000_000_000, suffix=lambda: "abcd")
    return CartEngine(catalog), CheckoutEngine(id_generator=ids, clock=lambda: NOW)


def _state_with(cart_engine: CartEngine, *lines: tuple[str, int]) -> ResourceState:
    state = ResourceState.empty()
    for product_id, qty in lines:
        state = cart_engine.add(state, product_id, qty).state
    return state


class TestCheckoutRejections:

    def test_not_confirmed_is_noop(self):
        cart_engine, checkout = _engines()
        state = _state_with(cart_engine, ("p1", 1))
        outcome = checkout.checkout(state, confirm=False)
        assert not outcome.success
        assert "cancelled by user" in outcome.message
        assert outcome.state is state
        assert outcome.order is None

    def test_empty_cart_never_appends_or_alters(self):
        _, checkout = _engines()
        state = ResourceState.empty()
        outcome = checkout.checkout(state, confirm=True)
        assert not outcome.success
        assert "Cannot checkout with an empty cart" in outcome.message
        assert outcome.state.orders == ()
        assert outcome.state.cart == state.cart


class TestCheckoutSuccess:

    def test_concrete_scenario_totals(self):
        cart_engine, checkout = _engines()
        state = _state_with(cart_engine, ("p1", 2))
        state = cart_engine.update(state, "p1", 5).state

        outcome = checkout.checkout(state, confirm=True)

        assert outcome.success
        order = outcome.order
        assert order.subtotal.rounded() == Decimal("50.00")
        assert order.tax.rounded() == Decimal("4.00")
        assert order.total.rounded() == Decimal("54.00")
        assert outcome.state.cart.is_empty
        assert len(outcome.state.orders) == 1

    def test_total_is_subtotal_plus_eight_percent(self):
        cart_engine, checkout = _engines()
        state = _state_with(cart_engine, ("p1", 3), ("p2", 7))
        order = checkout.checkout(state).order
        expected = order.subtotal.amount + order.subtotal.amount * Decimal("0.08")
        assert abs(order.total.amount - expected) < Decimal("1e-9")

    def test_order_items_equal_pre_checkout_cart(self):
        cart_engine, checkout = _engines()
        state = _state_with(cart_engine, ("p1", 2), ("p2", 1))
        outcome = checkout.checkout(state)
        assert outcome.order.items == state.cart.items

    def test_order_unaffected_by_later_cart_mutation(self):
        cart_engine, checkout = _engines()
        state = _state_with(cart_engine, ("p1", 2))
        after = checkout.checkout(state).state
        snapshot = after.orders[0].items

        after = cart_engine.add(after, "p1", 3).state
        after = cart_engine.update(after, "p1", 1).state

        assert after.orders[0].items == snapshot
        assert after.orders[0].items[0].quantity == 2

    def test_orders_are_append_only(self):
        cart_engine, checkout = _engines()
        first = checkout.checkout(_state_with(cart_engine, ("p1", 1))).state
        first_order = first.orders[0]

        second_state = cart_engine.add(first, "p2", 2).state
        second = checkout.checkout(second_state).state

        assert len(second.orders) == 2
        assert second.orders[0] == first_order
        assert second.orders[0].order_id != second.orders[1].order_id

    def test_order_metadata(self):
        cart_engine, checkout = _engines()
        outcome = checkout.checkout(_state_with(cart_engine, ("p1", 1)))
        assert outcome.order.order_id == "ORD-1700000000000-abcd"
        assert outcome.order.date == NOW
        assert outcome.order.status.value == "confirmed"
        assert outcome.message == (
            "Order placed successfully! Your order ID is ORD-1700000000000-abcd"
        )
