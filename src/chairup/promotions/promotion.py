"""Promotion aggregate — a percentage discount redeemable by code at checkout."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from chairup.domain import chairup
from chairup.promotions.events import PromotionCreated, PromotionDeactivated


def normalize_code(code):
    return (code or "").strip().upper()


@chairup.aggregate
class Promotion:
    code = String(required=True, max_length=50)
    title = String(max_length=255)
    description = Text()
    discount_percent = Integer(required=True, min_value=1, max_value=100)
    is_active = Boolean(default=True)
    created_at = DateTime()
    deactivated_at = DateTime()

    @classmethod
    def create(cls, code, discount_percent, title=None, description=None):
        code = normalize_code(code)
        if not code:
            raise ValidationError({"code": ["Promotion code cannot be empty"]})

        now = datetime.now(UTC)
        promotion = cls(
            code=code,
            title=title or code,
            description=description or "",
            discount_percent=discount_percent,
            is_active=True,
            created_at=now,
        )
        promotion.raise_(
            PromotionCreated(
                promotion_id=str(promotion.id),
                code=code,
                discount_percent=discount_percent,
                created_at=now,
            )
        )
        return promotion

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"code": [f"Promotion {self.code} is already inactive"]})

        now = datetime.now(UTC)
        self.is_active = False
        self.deactivated_at = now
        self.raise_(
            PromotionDeactivated(
                promotion_id=str(self.id),
                code=self.code,
                deactivated_at=now,
            )
        )

    def discount_on(self, items_price):
        """Discount amount this promotion grants on ``items_price``."""
        return round(items_price * self.discount_percent / 100, 2)
