"""Product aggregate — catalogue record and the only holder of stock.

Stock is mutated exclusively through ``reserve``, ``release`` and
``adjust_stock``; there is no setter that writes an arbitrary quantity. Every
mutation bumps the aggregate version, so two writers that loaded the same
version cannot both commit.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from chairup.catalogue.events import (
    ProductAdded,
    ProductDetailsUpdated,
    ProductRemoved,
    StockAdjusted,
    StockReleased,
    StockReserved,
)
from chairup.config import default_category
from chairup.domain import chairup
from chairup.exceptions import InsufficientStock


@chairup.aggregate
class Product:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    description = Text()
    image = String(max_length=500)
    stock_quantity = Integer(default=0, min_value=0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Product name cannot be empty"]})

    @invariant.post
    def stock_cannot_go_negative(self):
        if self.stock_quantity is not None and self.stock_quantity < 0:
            raise ValidationError({"stock_quantity": ["Stock quantity cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def add(cls, name, price, category=None, description=None, image=None, stock_quantity=0):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            category=category or default_category(),
            description=description or "",
            image=image or "",
            stock_quantity=stock_quantity or 0,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                category=product.category,
                stock_quantity=product.stock_quantity,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update_details(self, name=None, price=None, category=None, description=None, image=None):
        """Update display fields. Stock is deliberately not accepted here."""
        if name is not None:
            self.name = name
        if price is not None:
            self.price = price
        if category is not None:
            self.category = category
        if description is not None:
            self.description = description
        if image is not None:
            self.image = image

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                category=self.category,
                updated_at=now,
            )
        )

    def remove(self):
        """Withdraw the product from the catalogue; past orders keep their snapshots."""
        if not self.is_active:
            raise ValidationError({"product_id": ["Product has already been removed"]})

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(ProductRemoved(product_id=str(self.id), removed_at=now))

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def reserve(self, quantity):
        """Check-and-decrement: take ``quantity`` units, or fail without touching stock."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        available = self.stock_quantity or 0
        if quantity > available:
            raise InsufficientStock(
                {
                    "quantity": [f"Not enough stock for {self.name}. Available: {available}"],
                    "product_id": [str(self.id)],
                }
            )

        now = datetime.now(UTC)
        self.stock_quantity = available - quantity
        self.updated_at = now

        self.raise_(
            StockReserved(
                product_id=str(self.id),
                quantity=quantity,
                previous_quantity=available,
                new_quantity=self.stock_quantity,
                reserved_at=now,
            )
        )

    def release(self, quantity):
        """Return ``quantity`` units to stock. No upper bound is enforced."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous = self.stock_quantity or 0
        now = datetime.now(UTC)
        self.stock_quantity = previous + quantity
        self.updated_at = now

        self.raise_(
            StockReleased(
                product_id=str(self.id),
                quantity=quantity,
                previous_quantity=previous,
                new_quantity=self.stock_quantity,
                released_at=now,
            )
        )

    def adjust_stock(self, quantity_change, reason):
        """Administrative receiving or correction, applied as a delta."""
        if not reason:
            raise ValidationError({"reason": ["Reason is required for stock adjustments"]})
        if not quantity_change:
            raise ValidationError({"quantity_change": ["Adjustment must change the stock"]})

        previous = self.stock_quantity or 0
        new_quantity = previous + quantity_change
        if new_quantity < 0:
            raise InsufficientStock(
                {"quantity_change": [f"Adjustment would leave {self.name} with negative stock: {new_quantity}"]}
            )

        now = datetime.now(UTC)
        self.stock_quantity = new_quantity
        self.updated_at = now

        self.raise_(
            StockAdjusted(
                product_id=str(self.id),
                quantity_change=quantity_change,
                reason=reason,
                previous_quantity=previous,
                new_quantity=new_quantity,
                adjusted_at=now,
            )
        )
