"""Repository for the Cart aggregate."""

from chairup.cart.cart import Cart
from chairup.domain import chairup
from chairup.exceptions import NotFound


@chairup.repository(part_of=Cart)
class CartRepository:
    def find_for_user(self, user_id) -> Cart | None:
        carts = self._dao.query.filter(user_id=str(user_id)).all().items
        return carts[0] if carts else None

    def for_user(self, user_id) -> Cart:
        cart = self.find_for_user(user_id)
        if cart is None:
            raise NotFound({"cart": [f"Cart not found for user {user_id}"]})
        return cart
