"""Tests for the ShoppingCart aggregate — merge-on-add, snapshots and item management."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.errors import NotFoundError
from protean.exceptions import ValidationError


def _cart():
    return ShoppingCart.create(customer_id="cust-001")


class TestCartItems:
    def test_new_cart_is_empty(self):
        cart = _cart()
        assert cart.is_empty
        assert cart.subtotal == 0

    def test_add_item(self):
        cart = _cart()
        cart.add_item("prod-a", "Widget", unit_price=10.0, quantity=2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].line_total == 20.0
        assert isinstance(cart._events[-1], CartItemAdded)

    def test_adding_same_product_merges_lines(self):
        cart = _cart()
        cart.add_item("prod-a", "Widget", unit_price=10.0, quantity=2)
        cart.add_item("prod-a", "Widget", unit_price=10.0, quantity=3)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5
        assert cart._events[-1].quantity == 5

    def test_merge_refreshes_snapshot_price(self):
        cart = _cart()
        cart.add_item("prod-a", "Widget", unit_price=10.0, quantity=1)
        cart.add_item("prod-a", "Widget", unit_price=12.0, quantity=1)
        assert cart.items[0].unit_price == 12.0
        assert cart.subtotal == 24.0

    def test_distinct_products_get_distinct_lines(self):
        cart = _cart()
        cart.add_item("prod-a", "Widget", unit_price=10.0)
        cart.add_item("prod-b", "Gadget", unit_price=2.5, quantity=2)
        assert len(cart.items) == 2
        assert cart.subtotal == 15.0

    def test_quantity_must_be_positive(self):
        cart = _cart()
        with pytest.raises(ValidationError):
            cart.add_item("prod-a", "Widget", unit_price=10.0, quantity=0)

    def test_update_quantity(self):
        cart = _cart()
        cart.add_item("prod-a", "Widget", unit_price=10.0, quantity=1)
        cart.update_item_quantity("prod-a", 4)
        assert cart.items[0].quantity == 4
        event = cart._events[-1]
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 1
        assert event.new_quantity == 4

    def test_update_quantity_can_refresh_price(self):
        cart = _cart()
        cart.add_item("prod-a", "Widget", unit_price=10.0, quantity=1)
        cart.update_item_quantity("prod-a", 2, unit_price=9.0)
        assert cart.subtotal == 18.0

    def test_update_quantity_below_one_rejected(self):
        cart = _cart()
        cart.add_item("prod-a", "Widget", unit_price=10.0, quantity=1)
        with pytest.raises(ValidationError):
            cart.update_item_quantity("prod-a", 0)

    def test_update_missing_item(self):
        with pytest.raises(NotFoundError):
            _cart().update_item_quantity("prod-x", 2)

    def test_remove_item(self):
        cart = _cart()
        cart.add_item("prod-a", "Widget", unit_price=10.0)
        cart.remove_item("prod-a")
        assert cart.is_empty
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_remove_missing_item(self):
        with pytest.raises(NotFoundError):
            _cart().remove_item("prod-x")

    def test_clear(self):
        cart = _cart()
        cart.add_item("prod-a", "Widget", unit_price=10.0)
        cart.add_item("prod-b", "Gadget", unit_price=2.0)
        cart.clear(reason="order_placed")
        assert cart.is_empty
        event = cart._events[-1]
        assert isinstance(event, CartCleared)
        assert event.item_count == 2
        assert event.reason == "order_placed"
