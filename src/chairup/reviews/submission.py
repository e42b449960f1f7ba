"""Commands and handler for submitting and editing reviews.

One review per user per product is enforced here, since it spans aggregate
instances and needs a repository query.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from chairup.catalogue.product import Product
from chairup.domain import chairup
from chairup.exceptions import Conflict, NotFound
from chairup.reviews.eligibility import has_verified_purchase
from chairup.reviews.review import Review

logger = structlog.get_logger(__name__)


@chairup.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    user_name = String(max_length=255)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text()


@chairup.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier()
    rating = Integer(min_value=1, max_value=5)
    comment = Text()


@chairup.command_handler(part_of=Review)
class ReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        current_domain.repository_for(Product).get_active(command.product_id)

        repo = current_domain.repository_for(Review)
        if repo.by_author_and_product(command.user_id, command.product_id):
            raise Conflict({"review": ["You have already reviewed this product"]})

        review = Review.submit(
            product_id=command.product_id,
            user_id=command.user_id,
            user_name=command.user_name,
            rating=command.rating,
            comment=command.comment,
            verified=has_verified_purchase(command.user_id, command.product_id),
        )
        repo.add(review)

        logger.info(
            "Review submitted",
            review_id=str(review.id),
            product_id=str(command.product_id),
            user_id=str(command.user_id),
            verified=review.verified,
        )
        return str(review.id)

    @handle(EditReview)
    def edit_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get_review(command.review_id)
        if command.product_id and str(review.product_id) != str(command.product_id):
            raise NotFound({"review_id": [f"Review not found: {command.review_id}"]})

        review.edit(editor_id=command.user_id, rating=command.rating, comment=command.comment)
        repo.add(review)
