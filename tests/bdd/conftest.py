"""Shared BDD fixtures and step definitions for the order and review flows."""

import pytest
from protean import current_domain
from protean.exceptions import ProteanException
from pytest_bdd import given, parsers, then, when
from support import add_product, change_status, place_order, stock_of

from chairup.exceptions import Conflict, InsufficientStock, InvalidTransition
from chairup.ordering.order import Order
from chairup.reviews.review import Review


@pytest.fixture()
def products():
    """Product ids by display name."""
    return {}


@pytest.fixture()
def outcome():
    """Last order id and the last captured domain error."""
    return {"order_id": None, "review_id": None, "error": None}


def _attempt(outcome, key, fn, *args, **kwargs):
    outcome["error"] = None
    try:
        outcome[key] = fn(*args, **kwargs)
    except ProteanException as exc:
        outcome["error"] = exc


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" with {stock:d} in stock'))
def product_in_stock(products, name, stock):
    products[name] = add_product(name=name, stock_quantity=stock)


@given(parsers.cfparse('"{user_id}" has an order for {quantity:d} of "{name}"'))
def existing_order(products, outcome, user_id, quantity, name):
    outcome["order_id"] = place_order(user_id, [(products[name], quantity)])


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{user_id}" orders {quantity:d} of "{name:w}"'))
def order_product(products, outcome, user_id, quantity, name):
    _attempt(outcome, "order_id", place_order, user_id, [(products[name], quantity)])


@when(parsers.cfparse('"{user_id}" orders {first_qty:d} of "{first}" and {second_qty:d} of "{second}"'))
def order_two_products(products, outcome, user_id, first_qty, first, second_qty, second):
    lines = [(products[first], first_qty), (products[second], second_qty)]
    _attempt(outcome, "order_id", place_order, user_id, lines)


@when(parsers.cfparse('"{user_id}" cancels the order'))
def cancel_order(outcome, user_id):
    order_id = outcome["order_id"]
    _attempt(outcome, "status", change_status, order_id, "cancelled", actor_id=user_id, is_admin=False)
    outcome["order_id"] = order_id


@given(parsers.cfparse('the admin moves the order to "{status}"'))
@when(parsers.cfparse('the admin moves the order to "{status}"'))
def admin_moves_order(outcome, status):
    _attempt(outcome, "status", change_status, outcome["order_id"], status)


@when(parsers.cfparse('"{user_id}" reviews "{name}" with rating {rating:d}'))
def review_product(products, outcome, user_id, name, rating):
    from chairup.reviews.submission import SubmitReview

    _attempt(
        outcome,
        "review_id",
        current_domain.process,
        SubmitReview(product_id=products[name], user_id=user_id, rating=rating),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the order is placed")
def order_placed(outcome):
    assert outcome["error"] is None
    assert current_domain.repository_for(Order).get(outcome["order_id"]).status == "pending"


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def stock_level(products, name, stock):
    assert stock_of(products[name]) == stock


@then("the order fails with insufficient stock")
def insufficient_stock(outcome):
    assert isinstance(outcome["error"], InsufficientStock)


@then("the request fails with an invalid transition")
def invalid_transition(outcome):
    assert isinstance(outcome["error"], InvalidTransition)


@then(parsers.cfparse('the order status is "{status}"'))
def order_status(outcome, status):
    assert current_domain.repository_for(Order).get(outcome["order_id"]).status == status


@then("no order exists")
def no_order():
    assert current_domain.repository_for(Order).newest_first() == []


@then(parsers.cfparse('"{user_id}" can review "{name}"'))
def can_review_product(products, user_id, name):
    from chairup.reviews.eligibility import can_review

    assert can_review(user_id, products[name]) is True


@then(parsers.cfparse('"{user_id}" cannot review "{name}"'))
def cannot_review_product(products, user_id, name):
    from chairup.reviews.eligibility import can_review

    assert can_review(user_id, products[name]) is False


@then("the review is verified")
def review_verified(outcome):
    assert current_domain.repository_for(Review).get(outcome["review_id"]).verified is True


@then("the review is not verified")
def review_not_verified(outcome):
    assert current_domain.repository_for(Review).get(outcome["review_id"]).verified is False


@then("the review fails with a conflict")
def review_conflict(outcome):
    assert isinstance(outcome["error"], Conflict)


@then(parsers.cfparse('"{name}" has {count:d} review'))
def review_count(products, name, count):
    assert len(current_domain.repository_for(Review).for_product(products[name])) == count
