"""Order status changes — the single entry point for every transition.

Cancellation restocks each line item inside the same unit of work as the
status change. The status itself is the guard: once an order is cancelled a
second request is rejected before any stock moves, and two concurrent cancels
collide on the order's version so only one commits.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from chairup.catalogue.product import Product
from chairup.domain import chairup
from chairup.exceptions import Forbidden
from chairup.ordering.order import Order, OrderStatus, parse_status

logger = structlog.get_logger(__name__)


@chairup.command(part_of="Order")
class ChangeOrderStatus:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_is_admin = Boolean(default=False)
    new_status = String(required=True, max_length=20)


def _authorize(order, requested_status, actor_id, actor_is_admin):
    """Owners may only cancel; everyone else needs the admin role."""
    if actor_is_admin:
        return
    if not order.is_owned_by(actor_id):
        raise Forbidden({"order_id": ["Not authorized to modify this order"]})
    if str(requested_status).strip().lower() != OrderStatus.CANCELLED.value:
        raise Forbidden({"status": ["Only administrators can change order status"]})


@chairup.command_handler(part_of=Order)
class ChangeOrderStatusHandler:
    @handle(ChangeOrderStatus)
    def change_order_status(self, command):
        order_repo = current_domain.repository_for(Order)
        order = order_repo.get_order(command.order_id)
        _authorize(order, command.new_status, command.actor_id, command.actor_is_admin)
        target = parse_status(command.new_status)

        previous = order.status
        if target == OrderStatus.CANCELLED:
            order.cancel(cancelled_by=command.actor_id)
            self._restock(order)
        else:
            order.advance_to(target, changed_by=command.actor_id)

        order_repo.add(order)
        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous,
            status=order.status,
            actor_id=str(command.actor_id),
        )
        return order.status

    def _restock(self, order):
        product_repo = current_domain.repository_for(Product)
        for product_id, quantity in order.quantities_by_product().items():
            try:
                product = product_repo.get(product_id)
            except ObjectNotFoundError:
                logger.warning("Cannot restock missing product", order_id=str(order.id), product_id=product_id)
                continue
            product.release(quantity)
            product_repo.add(product)
            logger.info("Stock released", order_id=str(order.id), product_id=product_id, quantity=quantity)
