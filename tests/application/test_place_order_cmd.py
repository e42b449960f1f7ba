"""Application tests for PlaceOrder: stock reservation is all-or-nothing."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from support import add_product, get_order, order_count, place_order, stock_of

from chairup.exceptions import InsufficientStock, NotFound
from chairup.promotions.management import CreatePromotion, DeactivatePromotion


class TestSuccessfulPlacement:
    def test_reserves_stock_and_creates_pending_order(self):
        chair = add_product(stock_quantity=5, price=100.0)
        order_id = place_order("user-001", [(chair, 2)])

        assert stock_of(chair) == 3
        order = get_order(order_id)
        assert order.status == "pending"
        assert order.items_price == 200.0

    def test_shipping_defaults_to_flat_price(self):
        chair = add_product(price=100.0)
        order = get_order(place_order("user-001", [(chair, 1)]))
        assert order.shipping_price == 10.0
        assert order.total_price == 110.0

    def test_explicit_shipping_price(self):
        chair = add_product(price=100.0)
        order = get_order(place_order("user-001", [(chair, 1)], shipping_price=0.0))
        assert order.total_price == 100.0

    def test_prices_captured_from_catalogue(self):
        chair = add_product(price=149.5)
        stool = add_product(name="Stool", price=20.0, stock_quantity=10)
        order = get_order(place_order("user-001", [(chair, 1), (stool, 3)]))
        assert order.items_price == pytest.approx(209.5)
        assert order.total_price == pytest.approx(219.5)

    def test_line_items_include_display_fields(self):
        chair = add_product(name="Eames Lounge")
        order = get_order(place_order("user-001", [(chair, 1)]))
        assert order.items[0].name == "Eames Lounge"

    def test_owner_name_and_email_captured(self):
        chair = add_product()
        order = get_order(place_order("user-001", [(chair, 1)], user_name="Alice", user_email="alice@chairup.test"))
        assert order.user_name == "Alice"
        assert order.user_email == "alice@chairup.test"

    def test_exact_stock_can_be_ordered(self):
        chair = add_product(stock_quantity=3)
        place_order("user-001", [(chair, 3)])
        assert stock_of(chair) == 0


class TestAllOrNothing:
    def test_insufficient_stock_changes_nothing(self):
        chair = add_product(stock_quantity=5)
        stool = add_product(name="Stool", stock_quantity=1)

        with pytest.raises(InsufficientStock):
            place_order("user-001", [(chair, 2), (stool, 2)])

        assert stock_of(chair) == 5
        assert stock_of(stool) == 1
        assert order_count() == 0

    def test_missing_product_changes_nothing(self):
        chair = add_product(stock_quantity=5)

        with pytest.raises(NotFound) as exc:
            place_order("user-001", [(chair, 2), ("no-such-product", 1)])

        assert "no-such-product" in exc.value.messages["product_id"][0]
        assert stock_of(chair) == 5
        assert order_count() == 0

    def test_repeated_product_lines_share_stock(self):
        chair = add_product(stock_quantity=5)

        with pytest.raises(InsufficientStock):
            place_order("user-001", [(chair, 3), (chair, 3)])

        assert stock_of(chair) == 5

    def test_repeated_product_lines_within_stock(self):
        chair = add_product(stock_quantity=5)
        place_order("user-001", [(chair, 2), (chair, 3)])
        assert stock_of(chair) == 0

    def test_second_order_cannot_oversell(self):
        chair = add_product(stock_quantity=3)
        place_order("user-001", [(chair, 3)])

        with pytest.raises(InsufficientStock):
            place_order("user-002", [(chair, 1)])

        assert stock_of(chair) == 0
        assert order_count() == 1

    def test_removed_product_cannot_be_ordered(self):
        from chairup.catalogue.management import RemoveProduct

        chair = add_product()
        current_domain.process(RemoveProduct(product_id=chair), asynchronous=False)

        with pytest.raises(NotFound):
            place_order("user-001", [(chair, 1)])

    def test_invalid_address_changes_nothing(self):
        chair = add_product(stock_quantity=5)
        with pytest.raises(ValidationError):
            place_order("user-001", [(chair, 1)], city="")
        assert stock_of(chair) == 5


class TestPromotionCodes:
    def test_active_code_applies_discount(self):
        current_domain.process(CreatePromotion(code="welcome10", discount_percent=10), asynchronous=False)
        chair = add_product(price=100.0)

        order = get_order(place_order("user-001", [(chair, 2)], promo_code="WELCOME10"))

        assert order.discount == 20.0
        assert order.promo_code == "WELCOME10"
        assert order.total_price == 190.0

    def test_unknown_code_rejected_without_reserving(self):
        chair = add_product(stock_quantity=5)
        with pytest.raises(ValidationError):
            place_order("user-001", [(chair, 1)], promo_code="NOPE")
        assert stock_of(chair) == 5

    def test_inactive_code_rejected(self):
        current_domain.process(CreatePromotion(code="OLD", discount_percent=10), asynchronous=False)
        current_domain.process(DeactivatePromotion(code="OLD"), asynchronous=False)
        chair = add_product()
        with pytest.raises(ValidationError):
            place_order("user-001", [(chair, 1)], promo_code="OLD")

    def test_pre_applied_discount(self):
        chair = add_product(price=100.0)
        order = get_order(place_order("user-001", [(chair, 1)], discount=15.0))
        assert order.total_price == 95.0
