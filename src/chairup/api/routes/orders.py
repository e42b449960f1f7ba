"""FastAPI routes for placing, viewing and progressing orders."""

import json

import structlog
from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from chairup.api.auth import Actor, current_actor, require_admin
from chairup.api.schemas import ChangeStatusRequest, OrderResponse, PlaceOrderRequest
from chairup.api.views import order_view
from chairup.cart.cart import Cart
from chairup.cart.items import ClearCart
from chairup.exceptions import Forbidden
from chairup.ordering.order import Order, OrderStatus
from chairup.ordering.placement import PlaceOrder
from chairup.ordering.status import ChangeOrderStatus

logger = structlog.get_logger(__name__)

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, actor: Actor = Depends(current_actor)) -> OrderResponse:
    command = PlaceOrder(
        user_id=actor.user_id,
        user_name=actor.name,
        user_email=actor.email,
        items=json.dumps([{"product_id": line.product, "quantity": line.quantity} for line in body.order_items]),
        address=body.shipping_address.address,
        city=body.shipping_address.city,
        postal_code=body.shipping_address.postal_code,
        country=body.shipping_address.country,
        phone_number=body.phone_number,
        payment_method=body.payment_method,
        shipping_price=body.shipping_price,
        discount=body.discount,
        promo_code=body.promo_code,
    )
    order_id = current_domain.process(command, asynchronous=False)

    # The order is committed; an empty or missing cart is not an error here
    if current_domain.repository_for(Cart).find_for_user(actor.user_id) is not None:
        current_domain.process(ClearCart(user_id=actor.user_id), asynchronous=False)

    return order_view(current_domain.repository_for(Order).get(order_id))


@order_router.get("/mine", response_model=list[OrderResponse])
async def my_orders(actor: Actor = Depends(current_actor)) -> list[OrderResponse]:
    return [order_view(o) for o in current_domain.repository_for(Order).for_user(actor.user_id)]


@order_router.get("", response_model=list[OrderResponse])
async def all_orders(admin: Actor = Depends(require_admin)) -> list[OrderResponse]:
    return [order_view(o) for o in current_domain.repository_for(Order).newest_first()]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, actor: Actor = Depends(current_actor)) -> OrderResponse:
    order = current_domain.repository_for(Order).get_order(order_id)
    if not (actor.is_admin or order.is_owned_by(actor.user_id)):
        raise Forbidden({"order_id": ["Not authorized to view this order"]})
    return order_view(order, current_products=True)


def _change_status(order_id, actor, new_status):
    current_domain.process(
        ChangeOrderStatus(
            order_id=order_id,
            actor_id=actor.user_id,
            actor_is_admin=actor.is_admin,
            new_status=new_status,
        ),
        asynchronous=False,
    )
    return order_view(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: ChangeStatusRequest, admin: Actor = Depends(require_admin)
) -> OrderResponse:
    return _change_status(order_id, admin, body.status)


@order_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, actor: Actor = Depends(current_actor)) -> OrderResponse:
    return _change_status(order_id, actor, OrderStatus.CANCELLED.value)
