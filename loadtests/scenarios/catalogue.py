"""Catalogue load test scenarios.

Anonymous browsing (search, filter, product detail, compatibility) and an admin journey
that maintains a product. The admin journey logs in with the account
provisioned by ``python src/manage.py create-admin``; its credentials come
from LOADTEST_ADMIN_EMAIL and LOADTEST_ADMIN_PASSWORD.
"""

import os
import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import product_data, product_update_data, search_params
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import AdminState

ADMIN_EMAIL = os.getenv("LOADTEST_ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("LOADTEST_ADMIN_PASSWORD", "admin-pass")


class BrowseCatalogueJourney(SequentialTaskSet):
    """Search -> Open a product -> Check compatibility -> Search again with a filter.

    Read-only traffic; the most common request mix on a storefront.
    """

    def on_start(self):
        self.product_ids = []

    @task
    def search(self):
        with self.client.get(
            "/products",
            params=search_params(),
            catch_response=True,
            name="GET /products",
        ) as resp:
            if resp.status_code == 200:
                self.product_ids = [p["id"] for p in resp.json()["products"]]
            else:
                resp.failure(f"Search failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def open_product(self):
        if not self.product_ids:
            self.interrupt()
        with self.client.get(
            f"/products/{random.choice(self.product_ids)}",
            catch_response=True,
            name="GET /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Product detail failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def check_compatibility(self):
        if len(self.product_ids) < 2:
            return
        first, second = random.sample(self.product_ids, 2)
        with self.client.get(
            "/compatibility",
            params={"product1Id": first, "product2Id": second},
            catch_response=True,
            name="GET /compatibility",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Compatibility check failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def refine_search(self):
        self.client.get("/products", params=search_params(), name="GET /products")
        self.interrupt()


class ProductMaintenanceJourney(SequentialTaskSet):
    """Login -> Create Product -> Update -> Toggle Stock (x2).

    Models an admin adding a listing and adjusting it.
    """

    def on_start(self):
        self.state = AdminState()

    @task
    def login(self):
        with self.client.post(
            "/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
            catch_response=True,
            name="POST /auth/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Admin login failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_product(self):
        with self.client.post(
            "/products",
            json=product_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["id"]
                self.state.current_stock = resp.json()["stock"]
            else:
                resp.failure(f"Create product failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def update_product(self):
        with self.client.put(
            f"/products/{self.state.product_id}",
            json=product_update_data(),
            headers=self.state.headers,
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update product failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def toggle_stock(self):
        with self.client.put(
            f"/products/{self.state.product_id}/stock",
            json={"restockQuantity": random.randint(1, 10)},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /products/{id}/stock",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_stock = resp.json()["stock"]
            else:
                resp.failure(f"Toggle stock failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def toggle_stock_back(self):
        with self.client.put(
            f"/products/{self.state.product_id}/stock",
            headers=self.state.headers,
            catch_response=True,
            name="PUT /products/{id}/stock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Toggle stock back failed: {resp.status_code} — {extract_error_detail(resp)}")
        self.interrupt()


class CatalogueUser(HttpUser):
    """Catalogue traffic: mostly browsing, occasional admin maintenance."""

    wait_time = between(0.5, 2.0)
    tasks = {
        BrowseCatalogueJourney: 9,
        ProductMaintenanceJourney: 1,
    }
