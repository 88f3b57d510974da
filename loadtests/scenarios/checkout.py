"""Cart and checkout load test scenarios.

Stateful SequentialTaskSet journeys for a shopper: sign up, fill a cart,
change it, check out and read the order back. Also an abandoned-cart
journey that never checks out.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, checkout_data, register_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class _ShopperJourney(SequentialTaskSet):
    def on_start(self):
        self.state = ShopperState()

    def _register(self):
        with self.client.post(
            "/auth/register",
            json=register_data(),
            catch_response=True,
            name="POST /auth/register",
        ) as resp:
            if resp.status_code == 201:
                self.state.token = resp.json()["token"]
                self.state.user_id = resp.json()["user"]["id"]
            else:
                resp.failure(f"Register failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    def _browse(self):
        with self.client.get(
            "/products",
            params={"limit": 20},
            catch_response=True,
            name="GET /products",
        ) as resp:
            if resp.status_code == 200:
                self.state.product_ids = [p["id"] for p in resp.json()["products"]]
            else:
                resp.failure(f"Browse failed: {resp.status_code} — {extract_error_detail(resp)}")
        if not self.state.product_ids:
            # Nothing to buy until an admin has created products
            self.interrupt()

    def _add_to_cart(self, product_id):
        with self.client.post(
            "/cart",
            json=cart_item_data(product_id),
            headers=self.state.headers,
            catch_response=True,
            name="POST /cart",
        ) as resp:
            if resp.status_code == 200:
                if product_id not in self.state.cart_product_ids:
                    self.state.cart_product_ids.append(product_id)
            else:
                resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")


class CheckoutJourney(_ShopperJourney):
    """Register -> Browse -> Add Items (x2) -> Change Quantity -> Checkout -> Read Order.

    The happy path: a new shopper buying one or two products.
    """

    @task
    def register(self):
        self._register()

    @task
    def browse(self):
        self._browse()

    @task
    def add_items(self):
        for product_id in random.sample(self.state.product_ids, k=min(2, len(self.state.product_ids))):
            self._add_to_cart(product_id)

    @task
    def change_quantity(self):
        if self.state.cart_product_ids:
            self._add_to_cart(self.state.cart_product_ids[0])

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.state.headers, name="GET /cart")

    @task
    def checkout(self):
        with self.client.post(
            "/orders",
            json=checkout_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_numbers.append(resp.json()["orderId"])
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def list_orders(self):
        self.client.get("/orders", headers=self.state.headers, name="GET /orders")

    @task
    def read_order(self):
        with self.client.get(
            f"/orders/by-orderid/{self.state.order_numbers[-1]}",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders/by-orderid/{orderId}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Read order failed: {resp.status_code} — {extract_error_detail(resp)}")
        self.interrupt()


class AbandonedCartJourney(_ShopperJourney):
    """Register -> Browse -> Add Items -> Remove One -> Leave.

    Models a shopper who fills a cart and changes their mind.
    """

    @task
    def register(self):
        self._register()

    @task
    def browse(self):
        self._browse()

    @task
    def add_items(self):
        for product_id in random.sample(self.state.product_ids, k=min(3, len(self.state.product_ids))):
            self._add_to_cart(product_id)

    @task
    def remove_item(self):
        if not self.state.cart_product_ids:
            self.interrupt()
        product_id = self.state.cart_product_ids.pop()
        with self.client.delete(
            f"/cart/{product_id}",
            headers=self.state.headers,
            catch_response=True,
            name="DELETE /cart/{productId}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove from cart failed: {resp.status_code} — {extract_error_detail(resp)}")
        self.interrupt()


class ShopperUser(HttpUser):
    """Shopper traffic: roughly one in three carts is abandoned."""

    wait_time = between(1.0, 3.0)
    tasks = {
        CheckoutJourney: 2,
        AbandonedCartJourney: 1,
    }
