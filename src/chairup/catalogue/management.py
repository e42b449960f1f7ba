"""Product management — administrative commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from chairup.catalogue.product import Product
from chairup.domain import chairup

logger = structlog.get_logger(__name__)


@chairup.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    description = Text()
    image = String(max_length=500)
    stock_quantity = Integer(default=0, min_value=0)


@chairup.command(part_of="Product")
class UpdateProductDetails:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    price = Float(min_value=0.0)
    category = String(max_length=100)
    description = Text()
    image = String(max_length=500)


@chairup.command(part_of="Product")
class RemoveProduct:
    product_id = Identifier(required=True)


@chairup.command(part_of="Product")
class AdjustStock:
    """Receive or correct stock as a signed delta."""

    product_id = Identifier(required=True)
    quantity_change = Integer(required=True)
    reason = String(required=True, max_length=255)


@chairup.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            price=command.price,
            category=command.category,
            description=command.description,
            image=command.image,
            stock_quantity=command.stock_quantity,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), stock_quantity=product.stock_quantity)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)
        product.update_details(
            name=command.name,
            price=command.price,
            category=command.category,
            description=command.description,
            image=command.image,
        )
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)
        product.remove()
        repo.add(product)
        logger.info("Product removed", product_id=str(product.id))

    @handle(AdjustStock)
    def adjust_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)
        product.adjust_stock(quantity_change=command.quantity_change, reason=command.reason)
        repo.add(product)
        logger.info(
            "Stock adjusted",
            product_id=str(product.id),
            quantity_change=command.quantity_change,
            stock_quantity=product.stock_quantity,
        )
