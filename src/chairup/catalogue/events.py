"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from chairup.domain import chairup


@chairup.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    category = String()
    stock_quantity = Integer(required=True)
    added_at = DateTime(required=True)


@chairup.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    category = String()
    updated_at = DateTime(required=True)


@chairup.event(part_of="Product")
class ProductRemoved:
    __version__ = 1

    product_id = Identifier(required=True)
    removed_at = DateTime(required=True)


@chairup.event(part_of="Product")
class StockReserved:
    """Stock was taken out of the available quantity for an order."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    reserved_at = DateTime(required=True)


@chairup.event(part_of="Product")
class StockReleased:
    """Previously reserved stock was returned, typically on cancellation."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    released_at = DateTime(required=True)


@chairup.event(part_of="Product")
class StockAdjusted:
    """Stock was changed by an administrator (receiving, count, correction)."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity_change = Integer(required=True)  # Can be negative
    reason = String(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    adjusted_at = DateTime(required=True)
