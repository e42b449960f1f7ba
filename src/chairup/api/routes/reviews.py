"""FastAPI routes for product reviews."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from chairup.api.auth import Actor, current_actor
from chairup.api.schemas import (
    EditReviewRequest,
    EligibilityResponse,
    ProductReviewsResponse,
    ReviewResponse,
    SubmitReviewRequest,
)
from chairup.api.views import product_reviews_view, review_view, reviews_by_user_view
from chairup.reviews.eligibility import can_review
from chairup.reviews.review import Review
from chairup.reviews.submission import EditReview, SubmitReview

review_router = APIRouter(tags=["reviews"])


@review_router.get("/products/{product_id}/reviews", response_model=ProductReviewsResponse)
async def product_reviews(product_id: str) -> ProductReviewsResponse:
    return product_reviews_view(current_domain.repository_for(Review).for_product(product_id))


@review_router.get("/products/{product_id}/reviews/eligibility", response_model=EligibilityResponse)
async def review_eligibility(product_id: str, actor: Actor = Depends(current_actor)) -> EligibilityResponse:
    return EligibilityResponse(can_review=can_review(actor.user_id, product_id))


@review_router.post("/products/{product_id}/reviews", status_code=201, response_model=ReviewResponse)
async def submit_review(
    product_id: str, body: SubmitReviewRequest, actor: Actor = Depends(current_actor)
) -> ReviewResponse:
    review_id = current_domain.process(
        SubmitReview(
            product_id=product_id,
            user_id=actor.user_id,
            user_name=actor.name,
            rating=body.rating,
            comment=body.comment,
        ),
        asynchronous=False,
    )
    return review_view(current_domain.repository_for(Review).get(review_id))


@review_router.put("/products/{product_id}/reviews/{review_id}", response_model=ReviewResponse)
async def edit_review(
    product_id: str, review_id: str, body: EditReviewRequest, actor: Actor = Depends(current_actor)
) -> ReviewResponse:
    current_domain.process(
        EditReview(
            review_id=review_id,
            user_id=actor.user_id,
            product_id=product_id,
            rating=body.rating,
            comment=body.comment,
        ),
        asynchronous=False,
    )
    return review_view(current_domain.repository_for(Review).get(review_id))


@review_router.get("/reviews/mine", response_model=list[ReviewResponse])
async def my_reviews(actor: Actor = Depends(current_actor)) -> list[ReviewResponse]:
    return reviews_by_user_view(current_domain.repository_for(Review).by_user(actor.user_id))
