"""Review eligibility: a purchase that shipped and no review yet."""

from protean.utils.globals import current_domain

from chairup.ordering.order import Order
from chairup.reviews.review import Review


def has_verified_purchase(user_id, product_id) -> bool:
    return current_domain.repository_for(Order).has_purchased(user_id, product_id)


def can_review(user_id, product_id) -> bool:
    if current_domain.repository_for(Review).by_author_and_product(user_id, product_id):
        return False
    return has_verified_purchase(user_id, product_id)
