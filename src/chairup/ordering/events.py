"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from chairup.domain import chairup


@chairup.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order and its stock was reserved."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, unit_price}
    items_price = Float(required=True)
    shipping_price = Float(required=True)
    discount = Float()
    total_price = Float(required=True)
    payment_method = String(required=True)
    promo_code = String()
    placed_at = DateTime(required=True)


@chairup.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = Identifier(required=True)
    changed_at = DateTime(required=True)


@chairup.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled and every line item went back to stock."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    cancelled_by = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    cancelled_at = DateTime(required=True)


@chairup.event(part_of="Order")
class OrderDelivered:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    delivered_at = DateTime(required=True)
