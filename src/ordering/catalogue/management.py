"""Product registration and catalogue updates — commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.catalogue.product import Product, ProductStatus
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Product")
class RegisterProduct:
    product_id = Identifier()
    name = String(required=True, max_length=255)
    sku = String(max_length=50)
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    status = String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)


@ordering.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    price = Float(min_value=0.0)
    status = String(choices=ProductStatus)


@ordering.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(RegisterProduct)
    def register_product(self, command):
        product = Product.register(
            name=command.name,
            price=command.price,
            stock=command.stock or 0,
            sku=command.sku,
            status=command.status or ProductStatus.ACTIVE.value,
            product_id=command.product_id,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product registered", product_id=str(product.id), name=product.name, stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        if command.price is not None:
            product.reprice(command.price)
        if command.status:
            product.change_status(command.status)
        repo.add(product)

        logger.info("Product updated", product_id=str(product.id), price=product.price, status=product.status)
