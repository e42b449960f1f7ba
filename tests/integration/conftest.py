import pytest
from fastapi.testclient import TestClient

from chairup.api.auth import issue_token
from chairup.app import create_app


@pytest.fixture()
def client():
    return TestClient(create_app(initialize_domain=False))


def bearer(user_id, is_admin=False, name=None, email=None):
    return {"Authorization": f"Bearer {issue_token(user_id, is_admin=is_admin, name=name, email=email)}"}


@pytest.fixture()
def admin():
    return bearer("admin-001", is_admin=True, name="Admin")


@pytest.fixture()
def alice():
    return bearer("user-alice", name="Alice", email="alice@chairup.test")


@pytest.fixture()
def bob():
    return bearer("user-bob", name="Bob")


@pytest.fixture()
def chair_id(client, admin):
    response = client.post(
        "/products",
        json={"name": "Aeron Task Chair", "price": 100.0, "category": "Office", "stockQuantity": 5},
        headers=admin,
    )
    assert response.status_code == 201
    return response.json()["id"]
