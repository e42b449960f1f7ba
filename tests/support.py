"""Builders shared by the application, integration and BDD tests."""

import json

from protean import current_domain

from chairup.catalogue.management import AddProduct
from chairup.catalogue.product import Product
from chairup.ordering.order import Order
from chairup.ordering.placement import PlaceOrder
from chairup.ordering.status import ChangeOrderStatus

ADMIN_ID = "admin-001"

SHIPPING = {
    "address": "12 Rue des Chaises",
    "city": "Lyon",
    "postal_code": "69001",
    "country": "France",
}


def add_product(name="Aeron Task Chair", price=100.0, stock_quantity=5, category="Office"):
    return current_domain.process(
        AddProduct(name=name, price=price, category=category, stock_quantity=stock_quantity),
        asynchronous=False,
    )


def stock_of(product_id):
    return current_domain.repository_for(Product).get(product_id).stock_quantity


def place_order(user_id, lines, **overrides):
    """Place an order for ``lines`` of ``(product_id, quantity)``."""
    data = {
        "user_id": user_id,
        "items": json.dumps([{"product_id": pid, "quantity": qty} for pid, qty in lines]),
        "phone_number": "+33 6 12 34 56 78",
        "payment_method": "creditCard",
        **SHIPPING,
    }
    data.update(overrides)
    return current_domain.process(PlaceOrder(**data), asynchronous=False)


def change_status(order_id, new_status, actor_id=ADMIN_ID, is_admin=True):
    return current_domain.process(
        ChangeOrderStatus(
            order_id=order_id,
            actor_id=actor_id,
            actor_is_admin=is_admin,
            new_status=new_status,
        ),
        asynchronous=False,
    )


def cancel_as(order_id, user_id):
    return change_status(order_id, "cancelled", actor_id=user_id, is_admin=False)


def get_order(order_id):
    return current_domain.repository_for(Order).get(order_id)


def order_count():
    return len(current_domain.repository_for(Order).newest_first())
