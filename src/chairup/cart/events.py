"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from chairup.domain import chairup


@chairup.event(part_of="Cart")
class CartItemSet:
    """A product was added to the cart or its quantity was replaced."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@chairup.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@chairup.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items_removed = Integer(required=True)
