"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer

from chairup.domain import chairup


@chairup.event(part_of="Review")
class ReviewSubmitted:
    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    verified = Boolean(default=False)
    submitted_at = DateTime(required=True)


@chairup.event(part_of="Review")
class ReviewEdited:
    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    edited_at = DateTime(required=True)
