"""FastAPI routes for the signed-in user's cart."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from chairup.api.auth import Actor, current_actor
from chairup.api.schemas import CartResponse, MessageResponse, SetCartItemRequest
from chairup.api.views import cart_view
from chairup.cart.cart import Cart
from chairup.cart.items import ClearCart, RemoveCartItem, SetCartItem

cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _current_cart(actor):
    return cart_view(current_domain.repository_for(Cart).find_for_user(actor.user_id), actor.user_id)


@cart_router.get("", response_model=CartResponse)
async def get_cart(actor: Actor = Depends(current_actor)) -> CartResponse:
    return _current_cart(actor)


@cart_router.put("/items", response_model=CartResponse)
async def set_cart_item(body: SetCartItemRequest, actor: Actor = Depends(current_actor)) -> CartResponse:
    current_domain.process(
        SetCartItem(user_id=actor.user_id, product_id=body.product_id, quantity=body.quantity),
        asynchronous=False,
    )
    return _current_cart(actor)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, actor: Actor = Depends(current_actor)) -> CartResponse:
    current_domain.process(RemoveCartItem(user_id=actor.user_id, product_id=product_id), asynchronous=False)
    return _current_cart(actor)


@cart_router.delete("", response_model=MessageResponse)
async def clear_cart(actor: Actor = Depends(current_actor)) -> MessageResponse:
    current_domain.process(ClearCart(user_id=actor.user_id), asynchronous=False)
    return MessageResponse(message="Cart cleared successfully")
