"""Order aggregate — a placed purchase and its fulfilment status.

State machine:
    pending → processing → shipped → delivered
    pending/processing → cancelled

Administrators may skip forward (``pending → shipped``); nothing ever moves
backwards, and ``delivered`` and ``cancelled`` are terminal. Line items capture
the product name, image and price at the moment of purchase.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from chairup.config import DEFAULT_PAYMENT_METHOD, PAYMENT_METHODS
from chairup.domain import chairup
from chairup.exceptions import InvalidTransition
from chairup.ordering.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPlaced,
    OrderStatusChanged,
)


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Position along the forward path; cancelled sits outside it
_FORWARD_RANK = {
    OrderStatus.PENDING: 0,
    OrderStatus.PROCESSING: 1,
    OrderStatus.SHIPPED: 2,
    OrderStatus.DELIVERED: 3,
}

_CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.PROCESSING}

_TERMINAL_STATES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

# Statuses that prove the customer received, or is about to receive, the product
PURCHASED_STATES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}


def parse_status(value) -> OrderStatus:
    """Map a client-supplied status string onto ``OrderStatus``."""
    try:
        return OrderStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError({"status": [f"Invalid status value: {value}"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@chairup.value_object(part_of="Order")
class ShippingAddress:
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@chairup.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def line_total(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@chairup.aggregate
class Order:
    user_id = Identifier(required=True)
    user_name = String(max_length=255)
    user_email = String(max_length=255)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress, required=True)
    phone_number = String(required=True, max_length=50)
    payment_method = String(max_length=50, default=DEFAULT_PAYMENT_METHOD)
    items_price = Float(default=0.0, min_value=0.0)
    shipping_price = Float(default=0.0, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0)
    total_price = Float(default=0.0)
    promo_code = String(max_length=50)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()

    @invariant.post
    def total_matches_components(self):
        expected = (self.items_price or 0.0) + (self.shipping_price or 0.0) - (self.discount or 0.0)
        if abs((self.total_price or 0.0) - expected) > 0.01:
            raise ValidationError(
                {"total_price": [f"Total {self.total_price} does not equal items + shipping - discount ({expected:.2f})"]}
            )

    @invariant.post
    def payment_method_is_supported(self):
        if self.payment_method not in PAYMENT_METHODS:
            raise ValidationError({"payment_method": [f"Unsupported payment method: {self.payment_method}"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        lines,
        shipping_address,
        phone_number,
        payment_method=None,
        shipping_price=0.0,
        discount=0.0,
        promo_code=None,
        user_name=None,
        user_email=None,
    ):
        """Build a pending order from priced line dicts.

        Each line carries ``product_id``, ``name``, ``image``, ``quantity`` and
        ``unit_price``. Stock must already have been reserved by the caller.
        """
        if not lines:
            raise ValidationError({"items": ["Order must contain at least one item"]})
        if not phone_number or not str(phone_number).strip():
            raise ValidationError({"phone_number": ["Phone number is required"]})

        address = ShippingAddress(**shipping_address)
        for key in ("address", "city", "postal_code", "country"):
            if not str(getattr(address, key) or "").strip():
                raise ValidationError({key: [f"Shipping {key.replace('_', ' ')} is required"]})

        items = [
            OrderItem(
                product_id=str(line["product_id"]),
                name=line.get("name"),
                image=line.get("image"),
                quantity=line["quantity"],
                unit_price=line["unit_price"],
            )
            for line in lines
        ]
        items_price = round(sum(item.line_total for item in items), 2)
        shipping_price = shipping_price or 0.0
        discount = discount or 0.0
        if discount > items_price + shipping_price:
            raise ValidationError({"discount": ["Discount cannot exceed the order total"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=str(user_id),
            user_name=user_name,
            user_email=user_email,
            items=items,
            shipping_address=address,
            phone_number=str(phone_number).strip(),
            payment_method=payment_method or DEFAULT_PAYMENT_METHOD,
            items_price=items_price,
            shipping_price=shipping_price,
            discount=discount,
            total_price=round(items_price + shipping_price - discount, 2),
            promo_code=promo_code,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                items=json.dumps(
                    [
                        {"product_id": str(i.product_id), "quantity": i.quantity, "unit_price": i.unit_price}
                        for i in items
                    ]
                ),
                items_price=order.items_price,
                shipping_price=order.shipping_price,
                discount=order.discount,
                total_price=order.total_price,
                payment_method=order.payment_method,
                promo_code=promo_code,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    def contains(self, product_id) -> bool:
        return any(str(i.product_id) == str(product_id) for i in self.items)

    def quantities_by_product(self) -> dict[str, int]:
        """Total ordered quantity per product, merging repeated lines."""
        totals: dict[str, int] = {}
        for item in self.items:
            totals[str(item.product_id)] = totals.get(str(item.product_id), 0) + item.quantity
        return totals

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def _assert_can_advance(self, target):
        current = OrderStatus(self.status)
        if target == OrderStatus.CANCELLED:
            if current not in _CANCELLABLE_STATES:
                raise InvalidTransition({"status": [f"Cannot cancel an order that is {current.value}"]})
            return
        if current in _TERMINAL_STATES or _FORWARD_RANK[target] <= _FORWARD_RANK[current]:
            raise InvalidTransition({"status": [f"Cannot transition from {current.value} to {target.value}"]})

    def advance_to(self, target: OrderStatus, changed_by):
        """Move forward along the fulfilment path, skipping steps if needed."""
        if target == OrderStatus.CANCELLED:
            return self.cancel(cancelled_by=changed_by)

        self._assert_can_advance(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        if target == OrderStatus.DELIVERED:
            self.delivered_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_by=str(changed_by),
                changed_at=now,
            )
        )
        if target == OrderStatus.DELIVERED:
            self.raise_(OrderDelivered(order_id=str(self.id), user_id=str(self.user_id), delivered_at=now))

    def cancel(self, cancelled_by):
        """Cancel the order. The caller must release stock in the same unit of work."""
        self._assert_can_advance(OrderStatus.CANCELLED)

        previous = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=OrderStatus.CANCELLED.value,
                changed_by=str(cancelled_by),
                changed_at=now,
            )
        )
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                cancelled_by=str(cancelled_by),
                items=json.dumps(
                    [{"product_id": str(i.product_id), "quantity": i.quantity} for i in self.items]
                ),
                cancelled_at=now,
            )
        )
