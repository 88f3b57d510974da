"""Integration tests for authentication and user endpoints."""

from datetime import UTC, datetime, timedelta

import jwt
from storefront.api.auth import JWT_ALGORITHM


class TestRegisterEndpoint:
    def test_register_returns_token_and_user(self, client):
        response = client.post(
            "/auth/register",
            json={"name": "Ada Lens", "email": "Ada@Example.com", "password": "shutter42"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["token"]
        assert data["user"]["email"] == "ada@example.com"
        assert data["user"]["isAdmin"] is False
        assert "passwordHash" not in data["user"]

    def test_duplicate_email(self, client, signup):
        signup()
        response = client.post(
            "/auth/register",
            json={"name": "Ada Again", "email": "ada@example.com", "password": "shutter42"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": {"email": ["User already exists"]}}

    def test_missing_fields_are_bad_request(self, client):
        response = client.post("/auth/register", json={"email": "ada@example.com"})

        assert response.status_code == 400
        assert "name" in response.json()["error"]


class TestLoginEndpoint:
    def test_login_with_valid_credentials(self, client, signup):
        signup()
        response = client.post("/auth/login", json={"email": "ada@example.com", "password": "shutter42"})

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Ada Lens"

    def test_wrong_password(self, client, signup):
        signup()
        response = client.post("/auth/login", json={"email": "ada@example.com", "password": "nope-nope"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_unknown_email(self, client):
        response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "shutter42"})
        assert response.status_code == 401


class TestTokenValidation:
    def test_missing_token(self, client):
        assert client.get("/users/profile").status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/users/profile", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_expired_token(self, client, signup):
        user, _ = signup()
        expired = jwt.encode(
            {"sub": user["id"], "exp": datetime.now(UTC) - timedelta(minutes=1)},
            "devsecret",
            algorithm=JWT_ALGORITHM,
        )

        response = client.get("/users/profile", headers={"Authorization": f"Bearer {expired}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Token expired"}

    def test_token_for_unknown_user(self, client):
        token = jwt.encode({"sub": "ghost"}, "devsecret", algorithm=JWT_ALGORITHM)
        response = client.get("/users/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestProfileEndpoints:
    def test_get_profile(self, client, customer_headers):
        response = client.get("/users/profile", headers=customer_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "ada@example.com"

    def test_update_profile(self, client, customer_headers):
        response = client.put(
            "/users/profile",
            json={"address": "5 Lake Drive", "phone": "+94770000000"},
            headers=customer_headers,
        )

        assert response.status_code == 200
        assert response.json()["address"] == "5 Lake Drive"
        assert response.json()["phone"] == "+94770000000"


class TestFavoritesEndpoints:
    def test_add_list_remove(self, client, customer_headers, product_id):
        added = client.post(f"/users/favorites/{product_id}", headers=customer_headers)
        assert added.status_code == 200
        assert [p["id"] for p in added.json()] == [product_id]

        listed = client.get("/users/favorites", headers=customer_headers)
        assert listed.json()[0]["inStock"] is True

        removed = client.delete(f"/users/favorites/{product_id}", headers=customer_headers)
        assert removed.json() == []

    def test_unknown_product(self, client, customer_headers):
        response = client.post("/users/favorites/missing", headers=customer_headers)
        assert response.status_code == 404


class TestProvisionAdminEndpoint:
    def test_admin_provisions_admin(self, client, admin_headers):
        response = client.post(
            "/users/admins",
            json={"name": "Second Admin", "email": "second@example.com", "password": "admin-pass"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["isAdmin"] is True

    def test_customer_cannot_provision(self, client, customer_headers):
        response = client.post(
            "/users/admins",
            json={"name": "Sneaky", "email": "sneaky@example.com", "password": "admin-pass"},
            headers=customer_headers,
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}
