"""Repository for the Review aggregate."""

from protean.exceptions import ObjectNotFoundError

from chairup.domain import chairup
from chairup.exceptions import NotFound
from chairup.reviews.review import Review


def _newest_first(reviews):
    return sorted(reviews, key=lambda r: r.created_at, reverse=True)


@chairup.repository(part_of=Review)
class ReviewRepository:
    def get_review(self, review_id) -> Review:
        try:
            return self.get(str(review_id))
        except ObjectNotFoundError:
            raise NotFound({"review_id": [f"Review not found: {review_id}"]}) from None

    def by_author_and_product(self, user_id, product_id) -> Review | None:
        reviews = self._dao.query.filter(user_id=str(user_id), product_id=str(product_id)).all().items
        return reviews[0] if reviews else None

    def for_product(self, product_id) -> list[Review]:
        return _newest_first(self._dao.query.filter(product_id=str(product_id)).all().items)

    def by_user(self, user_id) -> list[Review]:
        return _newest_first(self._dao.query.filter(user_id=str(user_id)).all().items)
