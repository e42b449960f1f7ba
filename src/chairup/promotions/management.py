"""Admin commands for creating and retiring promotions."""

import structlog
from protean import handle
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from chairup.domain import chairup
from chairup.exceptions import Conflict
from chairup.promotions.promotion import Promotion

logger = structlog.get_logger(__name__)


@chairup.command(part_of="Promotion")
class CreatePromotion:
    code = String(required=True, max_length=50)
    discount_percent = Integer(required=True, min_value=1, max_value=100)
    title = String(max_length=255)
    description = Text()


@chairup.command(part_of="Promotion")
class DeactivatePromotion:
    code = String(required=True, max_length=50)


@chairup.command_handler(part_of=Promotion)
class ManagePromotionsHandler:
    @handle(CreatePromotion)
    def create_promotion(self, command):
        repo = current_domain.repository_for(Promotion)
        if repo.find_by_code(command.code) is not None:
            raise Conflict({"code": [f"Promotion code already exists: {command.code.upper()}"]})

        promotion = Promotion.create(
            code=command.code,
            discount_percent=command.discount_percent,
            title=command.title,
            description=command.description,
        )
        repo.add(promotion)
        logger.info("Promotion created", code=promotion.code, discount_percent=promotion.discount_percent)
        return str(promotion.id)

    @handle(DeactivatePromotion)
    def deactivate_promotion(self, command):
        repo = current_domain.repository_for(Promotion)
        promotion = repo.by_code(command.code)
        promotion.deactivate()
        repo.add(promotion)
        logger.info("Promotion deactivated", code=promotion.code)
