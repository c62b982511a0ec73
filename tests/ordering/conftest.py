import json

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    from ordering.invoice.pdf import reset_pdf_engine
    from ordering.notification.channel import reset_channels

    with ordering_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()

    reset_channels()
    reset_pdf_engine()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
ADDRESS = {
    "full_name": "Asha Rao",
    "line1": "12 MG Road",
    "city": "Bengaluru",
    "state": "KA",
    "postal_code": "560001",
    "country": "IN",
}


@pytest.fixture()
def address():
    return dict(ADDRESS)


@pytest.fixture()
def register_product():
    from ordering.catalogue.management import RegisterProduct

    def _register(name="Widget", price=10.0, stock=10, status="active"):
        return current_domain.process(
            RegisterProduct(name=name, price=price, stock=stock, status=status),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def add_to_cart():
    from ordering.cart.items import AddToCart

    def _add(customer_id, product_id, quantity=1):
        current_domain.process(
            AddToCart(customer_id=customer_id, product_id=product_id, quantity=quantity),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def add_rate():
    from ordering.shipping.management import AddShippingRate

    def _add(postal_code="560001", charge=5.0, status="active"):
        return current_domain.process(
            AddShippingRate(postal_code=postal_code, charge=charge, status=status),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def place_order():
    """Place an order for whatever is in the customer's cart and return the stored Order."""
    from ordering.order.order import Order
    from ordering.order.placement import PlaceOrder, submit_order

    def _place(customer_id="cust-001", shipping_address=None, **kwargs):
        kwargs.setdefault("customer_name", "Asha Rao")
        kwargs.setdefault("customer_email", "asha@example.com")
        order_id = submit_order(
            PlaceOrder(
                customer_id=customer_id,
                shipping_address=json.dumps(shipping_address or ADDRESS),
                **kwargs,
            )
        )
        return current_domain.repository_for(Order).get(order_id)

    return _place


@pytest.fixture()
def pending_order(register_product, add_to_cart, place_order):
    """A pending order: 2 x Widget at 10.00, no shipping rate configured."""
    product_id = register_product(name="Widget", price=10.0, stock=5)
    add_to_cart("cust-001", product_id, 2)
    return place_order("cust-001")
