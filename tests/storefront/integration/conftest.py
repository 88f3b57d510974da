import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import routers
from storefront.api.errors import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    for router in routers:
        app.include_router(router)
    return TestClient(app)


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def signup(client):
    """Register through the API and return (user, auth headers)."""

    def _signup(name="Ada Lens", email="ada@example.com", password="shutter42", phone=None):
        response = client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password, "phone": phone},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return data["user"], _bearer(data["token"])

    return _signup


@pytest.fixture()
def customer_headers(signup):
    _, headers = signup()
    return headers


@pytest.fixture()
def other_headers(signup):
    _, headers = signup(name="Bo Prism", email="bo@example.com")
    return headers


@pytest.fixture()
def admin_headers(client, make_user):
    make_user(name="Shop Owner", email="owner@example.com", password="owner-pass", is_admin=True)
    response = client.post("/auth/login", json={"email": "owner@example.com", "password": "owner-pass"})
    assert response.status_code == 200, response.text
    return _bearer(response.json()["token"])


@pytest.fixture()
def product_id(client, admin_headers):
    response = client.post(
        "/products",
        json={
            "name": "Mirrorless Body X100",
            "description": "24MP full-frame body",
            "price": 10.0,
            "brand": "Optika",
            "category": "Camera",
            "stock": 5,
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]
