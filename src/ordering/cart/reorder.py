"""Reorder — copy a previous order's lines back into the customer's cart.

Lines are re-priced at the current catalogue price; products that are gone
or no longer sellable are skipped.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.errors import NotFoundError
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class Reorder:
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ReorderHandler:
    @handle(Reorder)
    def reorder(self, command):
        order = current_domain.repository_for(Order).fetch(command.order_id)
        if str(order.customer_id) != str(command.customer_id):
            raise NotFoundError("Order", str(command.order_id))

        product_repo = current_domain.repository_for(Product)
        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.for_customer(command.customer_id)

        added, skipped = 0, []
        for item in order.items:
            product = product_repo.find(item.product_id)
            if product is None or not product.is_sellable:
                skipped.append(str(item.product_id))
                continue
            cart.add_item(
                product_id=str(product.id),
                product_name=product.name,
                unit_price=product.price,
                quantity=item.quantity,
            )
            added += 1

        cart_repo.add(cart)

        logger.info(
            "Order lines copied to cart",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            added=added,
            skipped=len(skipped),
        )
        return {"added": added, "skipped": skipped}
