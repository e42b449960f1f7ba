"""Domain events for the Promotion aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from chairup.domain import chairup


@chairup.event(part_of="Promotion")
class PromotionCreated:
    __version__ = 1

    promotion_id = Identifier(required=True)
    code = String(required=True)
    discount_percent = Integer(required=True)
    created_at = DateTime(required=True)


@chairup.event(part_of="Promotion")
class PromotionDeactivated:
    __version__ = 1

    promotion_id = Identifier(required=True)
    code = String(required=True)
    deactivated_at = DateTime(required=True)
