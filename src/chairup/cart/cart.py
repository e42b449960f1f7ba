"""Cart aggregate: the authoritative server copy of a user's cart.

One cart per user, created on first add. Each product appears at most once;
setting an item replaces its quantity. The quantity-versus-stock check happens
at mutation time only and is not a reservation.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from chairup.cart.events import CartCleared, CartItemRemoved, CartItemSet
from chairup.domain import chairup
from chairup.exceptions import InsufficientStock


@chairup.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@chairup.aggregate
class Cart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def products_are_unique(self):
        product_ids = [str(i.product_id) for i in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    @classmethod
    def open_for(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def set_item(self, product, quantity):
        """Add ``product`` or replace its quantity, bounded by current stock."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if quantity > (product.stock_quantity or 0):
            raise InsufficientStock(
                {"quantity": [f"Insufficient stock. Only {product.stock_quantity or 0} available."]}
            )

        now = datetime.now(UTC)
        existing = self.item_for(product.id)
        if existing:
            existing.quantity = quantity
        else:
            self.add_items(CartItem(product_id=str(product.id), quantity=quantity, added_at=now))
        self.updated_at = now

        self.raise_(
            CartItemSet(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product.id),
                quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.item_for(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                items_removed=count,
            )
        )
