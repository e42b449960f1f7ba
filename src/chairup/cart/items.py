"""Commands and handler for managing cart items.

The cart is addressed by its owner rather than by id: each user has exactly
one, opened on the first ``SetCartItem``.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from chairup.cart.cart import Cart
from chairup.catalogue.product import Product
from chairup.domain import chairup

logger = structlog.get_logger(__name__)


@chairup.command(part_of="Cart")
class SetCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@chairup.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@chairup.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@chairup.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(SetCartItem)
    def set_cart_item(self, command):
        product = current_domain.repository_for(Product).get_active(command.product_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id) or Cart.open_for(command.user_id)
        cart.set_item(product, command.quantity)
        repo.add(cart)

        logger.info(
            "Cart item set",
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        cart.remove_item(command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        cart.clear()
        repo.add(cart)
