"""Integration tests for the cart, review and promotion endpoints."""

SHIPPING = {"address": "1 Main St", "city": "Oslo", "postalCode": "0150", "country": "Norway"}


def _delivered_order(client, admin, user, product_id):
    order = client.post(
        "/orders",
        json={
            "orderItems": [{"product": product_id, "quantity": 1}],
            "shippingAddress": SHIPPING,
            "phoneNumber": "555-0100",
        },
        headers=user,
    ).json()
    client.put(f"/orders/{order['id']}/status", json={"status": "delivered"}, headers=admin)
    return order


class TestCartAPI:
    def test_empty_cart(self, client, alice):
        response = client.get("/cart", headers=alice)
        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["user"] == "user-alice"

    def test_set_item_expands_product(self, client, alice, chair_id):
        response = client.put("/cart/items", json={"productId": chair_id, "quantity": 2}, headers=alice)
        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["quantity"] == 2
        assert item["product"]["name"] == "Aeron Task Chair"
        assert item["product"]["stockQuantity"] == 5

    def test_set_item_above_stock(self, client, alice, chair_id):
        response = client.put("/cart/items", json={"productId": chair_id, "quantity": 9}, headers=alice)
        assert response.status_code == 400
        assert response.json()["error"] == "insufficient_stock"

    def test_remove_item(self, client, alice, chair_id):
        client.put("/cart/items", json={"productId": chair_id, "quantity": 2}, headers=alice)
        response = client.delete(f"/cart/items/{chair_id}", headers=alice)
        assert response.json()["items"] == []

    def test_clear_without_cart(self, client, alice):
        assert client.delete("/cart", headers=alice).status_code == 404


class TestReviewsAPI:
    def test_eligibility_follows_delivery(self, client, admin, alice, chair_id):
        url = f"/products/{chair_id}/reviews/eligibility"
        assert client.get(url, headers=alice).json()["canReview"] is False
        _delivered_order(client, admin, alice, chair_id)
        assert client.get(url, headers=alice).json()["canReview"] is True

    def test_verified_review_then_conflict(self, client, admin, alice, chair_id):
        _delivered_order(client, admin, alice, chair_id)

        response = client.post(f"/products/{chair_id}/reviews", json={"rating": 5, "comment": "Superb"}, headers=alice)
        assert response.status_code == 201
        assert response.json()["verified"] is True
        assert response.json()["user"]["name"] == "Alice"

        again = client.post(f"/products/{chair_id}/reviews", json={"rating": 1}, headers=alice)
        assert again.status_code == 409
        assert again.json()["error"] == "conflict"

    def test_product_reviews_summary(self, client, alice, bob, chair_id):
        client.post(f"/products/{chair_id}/reviews", json={"rating": 5}, headers=alice)
        client.post(f"/products/{chair_id}/reviews", json={"rating": 2}, headers=bob)
        body = client.get(f"/products/{chair_id}/reviews").json()
        assert body["count"] == 2
        assert body["averageRating"] == 3.5

    def test_rating_out_of_range(self, client, alice, chair_id):
        response = client.post(f"/products/{chair_id}/reviews", json={"rating": 6}, headers=alice)
        assert response.status_code == 400

    def test_edit_by_other_user_forbidden(self, client, alice, bob, chair_id):
        review = client.post(f"/products/{chair_id}/reviews", json={"rating": 4}, headers=alice).json()
        response = client.put(f"/products/{chair_id}/reviews/{review['id']}", json={"rating": 1}, headers=bob)
        assert response.status_code == 403

    def test_edit_by_owner(self, client, alice, chair_id):
        review = client.post(f"/products/{chair_id}/reviews", json={"rating": 4}, headers=alice).json()
        response = client.put(
            f"/products/{chair_id}/reviews/{review['id']}", json={"comment": "Even better now"}, headers=alice
        )
        assert response.status_code == 200
        assert response.json()["comment"] == "Even better now"
        assert response.json()["rating"] == 4

    def test_my_reviews_expand_product(self, client, alice, chair_id):
        client.post(f"/products/{chair_id}/reviews", json={"rating": 4}, headers=alice)
        reviews = client.get("/reviews/mine", headers=alice).json()
        assert reviews[0]["product"]["name"] == "Aeron Task Chair"


class TestPromotionsAPI:
    def test_create_list_deactivate(self, client, admin):
        created = client.post("/promotions", json={"code": "spring20", "discountPercent": 20}, headers=admin)
        assert created.status_code == 201
        assert created.json()["code"] == "SPRING20"

        assert [p["code"] for p in client.get("/promotions").json()] == ["SPRING20"]

        client.put("/promotions/SPRING20/deactivate", headers=admin)
        assert client.get("/promotions").json() == []

    def test_duplicate_code(self, client, admin):
        client.post("/promotions", json={"code": "SPRING20", "discountPercent": 20}, headers=admin)
        response = client.post("/promotions", json={"code": "SPRING20", "discountPercent": 5}, headers=admin)
        assert response.status_code == 409
