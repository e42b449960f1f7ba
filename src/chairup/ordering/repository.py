"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from chairup.domain import chairup
from chairup.exceptions import NotFound
from chairup.ordering.order import PURCHASED_STATES, Order


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


@chairup.repository(part_of=Order)
class OrderRepository:
    def get_order(self, order_id) -> Order:
        try:
            return self.get(str(order_id))
        except ObjectNotFoundError:
            raise NotFound({"order_id": [f"Order not found: {order_id}"]}) from None

    def for_user(self, user_id) -> list[Order]:
        return _newest_first(self._dao.query.filter(user_id=str(user_id)).all().items)

    def newest_first(self) -> list[Order]:
        return _newest_first(self._dao.query.all().items)

    def has_purchased(self, user_id, product_id) -> bool:
        """True when one of the user's shipped or delivered orders contains the product."""
        purchased = {s.value for s in PURCHASED_STATES}
        return any(
            order.status in purchased and order.contains(product_id)
            for order in self._dao.query.filter(user_id=str(user_id)).all().items
        )
