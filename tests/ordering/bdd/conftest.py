"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.activity.activity import OrderActivity
from ordering.cart.cart import ShoppingCart
from ordering.catalogue.product import Product
from ordering.order.order import Order
from ordering.order.status import SetOrderStatus
from pytest_bdd import given, parsers, then
from protean.utils.globals import current_domain


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured business-rule errors."""
    return {"exc": None}


@pytest.fixture()
def context():
    """Products by name and the order under test."""
    return {"products": {}, "order_id": None}


def _order(context):
    assert context["order_id"] is not None, "No order was placed"
    return current_domain.repository_for(Order).get(context["order_id"])


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{product_name}" priced at {price:g} with {stock:d} in stock'))
def product_in_catalogue(context, register_product, product_name, price, stock):
    context["products"][product_name] = register_product(name=product_name, price=price, stock=stock)


@given(parsers.cfparse('a shipping rate of {charge:g} for postal code "{postal_code}"'))
def shipping_rate(add_rate, charge, postal_code):
    add_rate(postal_code, charge)


@given(parsers.cfparse('customer "{customer_id}" has {quantity:d} of "{product_name}" in the cart'))
def cart_holds(context, add_to_cart, customer_id, quantity, product_name):
    add_to_cart(customer_id, context["products"][product_name], quantity)


@given(parsers.cfparse('customer "{customer_id}" has placed an order'))
def order_placed(context, place_order, customer_id):
    context["order_id"] = place_order(customer_id).id


@given(parsers.cfparse('admin "{admin_id}" has set the status to "{status}"'))
def status_already_set(context, admin_id, status):
    current_domain.process(
        SetOrderStatus(order_id=context["order_id"], status=status, changed_by=admin_id),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the action fails with error "{category}"'))
def action_fails(error, category):
    assert error["exc"] is not None, "Expected an error but none was raised"
    assert error["exc"].category == category


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(context, status):
    assert _order(context).status == status


@then(parsers.cfparse("the order total is {total:g}"))
def order_total_is(context, total):
    assert _order(context).total == pytest.approx(total)


@then(parsers.cfparse("the order shipping is {shipping:g}"))
def order_shipping_is(context, shipping):
    assert _order(context).shipping == pytest.approx(shipping)


@then(parsers.cfparse("the order has {count:d} activity {noun}"))
def order_activity_count(context, count, noun):
    assert current_domain.repository_for(OrderActivity).count_for(context["order_id"]) == count


@then(parsers.cfparse('"{product_name}" has {stock:d} in stock'))
def product_stock_is(context, product_name, stock):
    product = current_domain.repository_for(Product).get(context["products"][product_name])
    assert product.stock == stock


@then(parsers.cfparse('the cart of customer "{customer_id}" is empty'))
def cart_is_empty(customer_id):
    cart = current_domain.repository_for(ShoppingCart).find_by_customer(customer_id)
    assert cart is None or cart.is_empty


@then("no order has been placed")
def no_order_placed():
    assert current_domain.repository_for(Order)._dao.query.all().total == 0
