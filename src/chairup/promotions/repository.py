"""Repository for the Promotion aggregate."""

from protean.exceptions import ValidationError

from chairup.domain import chairup
from chairup.exceptions import NotFound
from chairup.promotions.promotion import Promotion, normalize_code


@chairup.repository(part_of=Promotion)
class PromotionRepository:
    def find_by_code(self, code) -> Promotion | None:
        promotions = self._dao.query.filter(code=normalize_code(code)).all().items
        return promotions[0] if promotions else None

    def by_code(self, code) -> Promotion:
        promotion = self.find_by_code(code)
        if promotion is None:
            raise NotFound({"code": [f"Promotion not found: {code}"]})
        return promotion

    def redeemable(self, code) -> Promotion:
        """Active promotion for ``code``; unknown and inactive codes are invalid input."""
        promotion = self.find_by_code(code)
        if promotion is None or not promotion.is_active:
            raise ValidationError({"promo_code": [f"Invalid or expired promotion code: {code}"]})
        return promotion

    def active(self) -> list[Promotion]:
        promotions = self._dao.query.filter(is_active=True).all().items
        return sorted(promotions, key=lambda p: p.created_at, reverse=True)
