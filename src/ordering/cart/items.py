"""Cart item management — commands and handler.

Every add or update reads the product fresh from the catalogue so the line's
snapshot price reflects the price at the moment the customer touched it.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.errors import ProductUnavailableError

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@ordering.command(part_of="ShoppingCart")
class UpdateCartItem:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).fetch(command.product_id)
        if not product.is_sellable:
            raise ProductUnavailableError(product.name)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        cart.add_item(
            product_id=str(product.id),
            product_name=product.name,
            unit_price=product.price,
            quantity=command.quantity or 1,
        )
        repo.add(cart)

        logger.info(
            "Item added to cart",
            customer_id=str(command.customer_id),
            product_id=str(product.id),
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)

        product = current_domain.repository_for(Product).find(command.product_id)
        cart.update_item_quantity(
            product_id=command.product_id,
            new_quantity=command.quantity,
            unit_price=product.price if product is not None else None,
        )
        repo.add(cart)

        logger.info(
            "Cart item quantity updated",
            customer_id=str(command.customer_id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        cart.remove_item(product_id=command.product_id)
        repo.add(cart)

        logger.info(
            "Item removed from cart",
            customer_id=str(command.customer_id),
            product_id=str(command.product_id),
        )

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        cart.clear(reason="customer")
        repo.add(cart)

        logger.info("Cart cleared", customer_id=str(command.customer_id))
