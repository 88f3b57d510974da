"""Integration tests for order endpoints, including the end-to-end checkout flow."""

CHECKOUT = {
    "shippingAddress": "12 Galle Road, Colombo 03",
    "paymentMethod": "Bank Transfer",
    "phone": "+94771234567",
}


def _checkout(client, headers, product_id, quantity=2):
    client.post("/cart", json={"productId": product_id, "quantity": quantity}, headers=headers)
    response = client.post("/orders", json=CHECKOUT, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCheckoutFlow:
    def test_place_order_from_cart(self, client, customer_headers, product_id):
        data = _checkout(client, customer_headers, product_id, quantity=2)

        assert data["orderId"] == "OR00001"
        order = data["order"]
        assert order["orderId"] == "OR00001"
        assert order["status"] == "Processing"
        assert order["totalAmount"] == 20.0
        assert order["items"] == [
            {"productId": product_id, "product": order["items"][0]["product"], "quantity": 2, "price": 10.0}
        ]
        assert order["user"]["email"] == "ada@example.com"

        cart = client.get("/cart", headers=customer_headers).json()
        assert cart["items"] == []

    def test_empty_cart_is_bad_request(self, client, customer_headers):
        response = client.post("/orders", json=CHECKOUT, headers=customer_headers)

        assert response.status_code == 400
        assert response.json() == {"error": {"cart": ["Cart is empty"]}}
        assert client.get("/orders", headers=customer_headers).json() == []

    def test_missing_checkout_fields(self, client, customer_headers, product_id):
        client.post("/cart", json={"productId": product_id, "quantity": 1}, headers=customer_headers)

        response = client.post("/orders", json={"phone": "+94771234567"}, headers=customer_headers)

        assert response.status_code == 400
        assert "shippingAddress" in response.json()["error"]

    def test_price_change_after_checkout_does_not_reprice(self, client, customer_headers, admin_headers, product_id):
        data = _checkout(client, customer_headers, product_id, quantity=2)
        client.put(f"/products/{product_id}", json={"price": 99.0}, headers=admin_headers)

        order = client.get(f"/orders/by-orderid/{data['orderId']}", headers=customer_headers).json()

        assert order["items"][0]["price"] == 10.0
        assert order["totalAmount"] == 20.0


class TestReadOrders:
    def test_list_my_orders(self, client, customer_headers, other_headers, product_id):
        _checkout(client, customer_headers, product_id)
        _checkout(client, other_headers, product_id)
        _checkout(client, customer_headers, product_id)

        orders = client.get("/orders", headers=customer_headers).json()

        assert [o["orderId"] for o in orders] == ["OR00003", "OR00001"]

    def test_get_by_internal_id(self, client, customer_headers, product_id):
        data = _checkout(client, customer_headers, product_id)

        response = client.get(f"/orders/{data['order']['id']}", headers=customer_headers)

        assert response.status_code == 200
        assert response.json()["orderId"] == data["orderId"]

    def test_other_user_is_unauthorized(self, client, customer_headers, other_headers, product_id):
        data = _checkout(client, customer_headers, product_id)

        by_number = client.get(f"/orders/by-orderid/{data['orderId']}", headers=other_headers)
        by_id = client.get(f"/orders/{data['order']['id']}", headers=other_headers)

        assert by_number.status_code == 403
        assert by_number.json() == {"error": "Unauthorized"}
        assert by_id.status_code == 403

    def test_admin_reads_any_order(self, client, customer_headers, admin_headers, product_id):
        data = _checkout(client, customer_headers, product_id)

        response = client.get(f"/orders/by-orderid/{data['orderId']}", headers=admin_headers)

        assert response.status_code == 200

    def test_unknown_order_is_not_found(self, client, customer_headers):
        assert client.get("/orders/by-orderid/OR99999", headers=customer_headers).status_code == 404
        assert client.get("/orders/no-such-id", headers=customer_headers).status_code == 404


class TestUpdateStatus:
    def test_admin_updates_status(self, client, customer_headers, admin_headers, product_id):
        data = _checkout(client, customer_headers, product_id)

        response = client.put(f"/orders/status/{data['orderId']}", json={"status": "Shipped"}, headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Order status updated"
        assert body["order"]["status"] == "Shipped"
        assert body["order"]["totalAmount"] == data["order"]["totalAmount"]

    def test_owner_is_forbidden(self, client, customer_headers, product_id):
        data = _checkout(client, customer_headers, product_id)

        response = client.put(f"/orders/status/{data['orderId']}", json={"status": "Paid"}, headers=customer_headers)

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}
        order = client.get(f"/orders/by-orderid/{data['orderId']}", headers=customer_headers).json()
        assert order["status"] == "Processing"

    def test_unknown_status_is_bad_request(self, client, customer_headers, admin_headers, product_id):
        data = _checkout(client, customer_headers, product_id)

        response = client.put(f"/orders/status/{data['orderId']}", json={"status": "Lost"}, headers=admin_headers)

        assert response.status_code == 400
        assert "status" in response.json()["error"]

    def test_unknown_order(self, client, admin_headers):
        response = client.put("/orders/status/OR99999", json={"status": "Paid"}, headers=admin_headers)
        assert response.status_code == 404
