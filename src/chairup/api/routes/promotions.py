"""FastAPI routes for promotions."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from chairup.api.auth import Actor, require_admin
from chairup.api.schemas import CreatePromotionRequest, PromotionResponse
from chairup.api.views import promotion_view
from chairup.promotions.management import CreatePromotion, DeactivatePromotion
from chairup.promotions.promotion import Promotion

promotion_router = APIRouter(prefix="/promotions", tags=["promotions"])


@promotion_router.get("", response_model=list[PromotionResponse])
async def active_promotions() -> list[PromotionResponse]:
    return [promotion_view(p) for p in current_domain.repository_for(Promotion).active()]


@promotion_router.post("", status_code=201, response_model=PromotionResponse)
async def create_promotion(body: CreatePromotionRequest, admin: Actor = Depends(require_admin)) -> PromotionResponse:
    promotion_id = current_domain.process(
        CreatePromotion(
            code=body.code,
            discount_percent=body.discount_percent,
            title=body.title,
            description=body.description,
        ),
        asynchronous=False,
    )
    return promotion_view(current_domain.repository_for(Promotion).get(promotion_id))


@promotion_router.put("/{code}/deactivate", response_model=PromotionResponse)
async def deactivate_promotion(code: str, admin: Actor = Depends(require_admin)) -> PromotionResponse:
    current_domain.process(DeactivatePromotion(code=code), asynchronous=False)
    return promotion_view(current_domain.repository_for(Promotion).by_code(code))
