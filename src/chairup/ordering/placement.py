"""Order placement — reserve stock for every line and record the order.

Reservations and the new order are written by one handler, so they commit or
roll back together. A product that was changed by another writer since it was
loaded fails the version check and aborts the whole placement.
"""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from chairup.catalogue.product import Product
from chairup.config import DEFAULT_PAYMENT_METHOD, shipping_price
from chairup.domain import chairup
from chairup.ordering.order import Order
from chairup.promotions.promotion import Promotion

logger = structlog.get_logger(__name__)


@chairup.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    user_name = String(max_length=255)
    user_email = String(max_length=255)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone_number = String(required=True, max_length=50)
    payment_method = String(max_length=50, default=DEFAULT_PAYMENT_METHOD)
    shipping_price = Float(min_value=0.0)
    discount = Float(min_value=0.0)
    promo_code = String(max_length=50)


@chairup.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        requested = json.loads(command.items) if isinstance(command.items, str) else command.items

        product_repo = current_domain.repository_for(Product)
        # One instance per product, so repeated lines draw from the same stock
        products = {}
        lines = []
        for entry in requested or []:
            product_id = str(entry["product_id"])
            quantity = int(entry["quantity"])

            product = products.get(product_id)
            if product is None:
                product = product_repo.get_active(product_id)
                products[product_id] = product

            product.reserve(quantity)
            lines.append(
                {
                    "product_id": product_id,
                    "name": product.name,
                    "image": product.image,
                    "quantity": quantity,
                    "unit_price": product.price,
                }
            )

        discount = command.discount or 0.0
        promo_code = None
        if command.promo_code:
            promotion = current_domain.repository_for(Promotion).redeemable(command.promo_code)
            items_price = sum(line["unit_price"] * line["quantity"] for line in lines)
            discount = promotion.discount_on(items_price)
            promo_code = promotion.code

        order = Order.place(
            user_id=command.user_id,
            lines=lines,
            shipping_address={
                "address": command.address,
                "city": command.city,
                "postal_code": command.postal_code,
                "country": command.country,
            },
            phone_number=command.phone_number,
            payment_method=command.payment_method,
            shipping_price=shipping_price() if command.shipping_price is None else command.shipping_price,
            discount=discount,
            promo_code=promo_code,
            user_name=command.user_name,
            user_email=command.user_email,
        )

        for product in products.values():
            product_repo.add(product)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            line_count=len(lines),
            total_price=order.total_price,
        )
        return str(order.id)
