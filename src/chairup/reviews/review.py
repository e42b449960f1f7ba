"""Review aggregate — one rating and comment per user per product.

``verified`` records whether the author had a shipped or delivered order for
the product when the review was written. It is never recomputed.
"""

from datetime import UTC, datetime

from protean import atomic_change
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from chairup.domain import chairup
from chairup.exceptions import Forbidden
from chairup.reviews.events import ReviewEdited, ReviewSubmitted


@chairup.aggregate
class Review:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    user_name = String(max_length=255)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text()
    verified = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def submit(cls, product_id, user_id, rating, comment=None, verified=False, user_name=None):
        now = datetime.now(UTC)
        review = cls(
            product_id=str(product_id),
            user_id=str(user_id),
            user_name=user_name,
            rating=rating,
            comment=comment or "",
            verified=bool(verified),
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                user_id=str(user_id),
                rating=review.rating,
                verified=review.verified,
                submitted_at=now,
            )
        )
        return review

    def edit(self, editor_id, rating=None, comment=None):
        if str(editor_id) != str(self.user_id):
            raise Forbidden({"review_id": ["Not authorized to update this review"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            if rating is not None:
                self.rating = rating
            if comment is not None:
                self.comment = comment
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                product_id=str(self.product_id),
                user_id=str(self.user_id),
                rating=self.rating,
                edited_at=now,
            )
        )
