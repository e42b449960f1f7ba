from chairup.api.routes.cart import cart_router
from chairup.api.routes.orders import order_router
from chairup.api.routes.products import product_router
from chairup.api.routes.promotions import promotion_router
from chairup.api.routes.reviews import review_router

routers = [product_router, cart_router, order_router, review_router, promotion_router]

__all__ = [
    "cart_router",
    "order_router",
    "product_router",
    "promotion_router",
    "review_router",
    "routers",
]
