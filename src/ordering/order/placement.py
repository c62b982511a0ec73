"""Order placement — turns a customer's cart into a pending order.

Checks run in a fixed order and each failure is distinct:

1. The shipping address has a street line and a city (``ValidationError``).
2. The cart holds at least one line (``EmptyCartError``).
3. Shipping is resolved: an explicit charge wins, otherwise the postal code
   is looked up (no active rate means 0 and a recorded coverage gap).
4. Every line's product is re-read from the catalogue and must be sellable
   with enough stock (``ProductUnavailableError`` / ``InsufficientStockError``).

Totals come from the cart's snapshot prices. The handler runs inside a single
unit of work: the order, its ``created`` ledger entry, every stock withdrawal
and the cart clear are committed together or not at all. Callers go through
``submit_order``, which keeps the coverage gap of a rejected placement.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.access import Requester, Role
from ordering.activity.activity import ActivityAction
from ordering.activity.ledger import record_activity
from ordering.cart.cart import ShoppingCart
from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.errors import EmptyCartError, OrderingValidationError, ProductUnavailableError
from ordering.order.numbering import next_order_number
from ordering.order.order import Order, PaymentMethod
from ordering.shipping.management import CheckCoverage
from ordering.shipping.resolver import resolve_shipping_charge

logger = structlog.get_logger(__name__)

_REQUIRED_ADDRESS_FIELDS = ("line1", "city")


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    customer_name = String(max_length=255)
    customer_email = String(max_length=255)
    shipping_address = Text(required=True)  # JSON: address dict
    billing_address = Text()  # JSON: address dict
    tax_identifier = String(max_length=50)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.CASH.value)
    shipping_charge = Float(min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    notes = Text()


def _load_address(raw):
    if raw is None or raw == "":
        return None
    return json.loads(raw) if isinstance(raw, str) else dict(raw)


def _validate_shipping_address(address):
    missing = [name for name in _REQUIRED_ADDRESS_FIELDS if not (address or {}).get(name)]
    if missing:
        raise ValidationError({"shipping_address": ["Shipping address line1 and city are required"]})


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        shipping_address = _load_address(command.shipping_address)
        billing_address = _load_address(command.billing_address)
        _validate_shipping_address(shipping_address)

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.find_by_customer(command.customer_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError(str(command.customer_id))

        quote = resolve_shipping_charge(
            shipping_address.get("postal_code"),
            explicit_charge=command.shipping_charge,
            customer_id=command.customer_id,
            customer_email=command.customer_email,
        )

        try:
            order = self._convert_cart(command, cart, quote, shipping_address, billing_address)
        except OrderingValidationError as exc:
            if quote.gap_recorded:
                exc.uncovered_postal_code = quote.postal_code
            raise

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(command.customer_id),
            total=order.total,
            shipping_covered=quote.covered,
        )
        return str(order.id)

    def _convert_cart(self, command, cart, quote, shipping_address, billing_address):
        product_repo = current_domain.repository_for(Product)
        for item in cart.items:
            product = product_repo.find(item.product_id)
            if product is None:
                raise ProductUnavailableError(item.product_name)
            product.ensure_can_fulfil(item.quantity)

        order = Order.place(
            order_number=next_order_number(),
            customer_id=command.customer_id,
            customer_name=command.customer_name,
            customer_email=command.customer_email,
            lines=[
                {
                    "product_id": str(item.product_id),
                    "name": item.product_name,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                }
                for item in cart.items
            ],
            shipping_address=shipping_address,
            billing_address=billing_address,
            tax=command.tax or 0.0,
            shipping=quote.charge,
            tax_identifier=command.tax_identifier,
            payment_method=command.payment_method,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        record_activity(
            order_id=order.id,
            action=ActivityAction.CREATED.value,
            requester=Requester(
                user_id=str(command.customer_id),
                role=Role.CUSTOMER,
                name=command.customer_name,
                email=command.customer_email,
            ),
            to_status=order.status,
            note="Order created by customer",
        )

        # Re-read and withdraw one product at a time; a stale read fails here
        # instead of overselling.
        for item in order.items:
            product = product_repo.fetch(item.product_id)
            product.withdraw_stock(item.quantity, order_id=str(order.id))
            product_repo.add(product)

        cart.clear(reason="order_placed")
        current_domain.repository_for(ShoppingCart).add(cart)
        return order


def submit_order(command: PlaceOrder) -> str:
    """Process a placement and return the new order id.

    A rejection rolls back the whole placement, including a coverage gap
    written for an uncovered destination. That gap is then recorded again in
    its own unit of work so operators still see the request.
    """
    try:
        return current_domain.process(command, asynchronous=False)
    except OrderingValidationError as exc:
        if exc.uncovered_postal_code:
            current_domain.process(
                CheckCoverage(
                    postal_code=exc.uncovered_postal_code,
                    customer_id=command.customer_id,
                    customer_email=command.customer_email,
                ),
                asynchronous=False,
            )
        raise
