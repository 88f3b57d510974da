"""Integration tests for the catch-all 500 handler."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import errors, routers
from storefront.api.errors import register_exception_handlers
from storefront.catalogue.product import ProductRepository
from storefront.order import service as order_service


class _RecordingLogger:
    def __init__(self):
        self.calls = []

    def exception(self, event, **context):
        self.calls.append((event, context))


@pytest.fixture()
def lenient_client():
    app = FastAPI()
    register_exception_handlers(app)
    for router in routers:
        app.include_router(router)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def recorder(monkeypatch):
    recorder = _RecordingLogger()
    monkeypatch.setattr(errors, "logger", recorder)
    return recorder


def _explode(*args, **kwargs):
    raise RuntimeError("database went away")


class TestUnhandledErrors:
    def test_body_hides_details(self, lenient_client, customer_headers, recorder, monkeypatch):
        monkeypatch.setattr(order_service, "list_orders", _explode)

        response = lenient_client.get("/orders", headers=customer_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_log_carries_authenticated_user(self, lenient_client, signup, recorder, monkeypatch):
        user, headers = signup()
        monkeypatch.setattr(order_service, "list_orders", _explode)

        lenient_client.get("/orders", headers=headers)

        [(event, context)] = recorder.calls
        assert event == "Unhandled error"
        assert context["user_id"] == user["id"]
        assert context["method"] == "GET"
        assert context["path"] == "/orders"
        assert context["error_type"] == "RuntimeError"

    def test_anonymous_route_logs_without_user(self, lenient_client, recorder, monkeypatch):
        monkeypatch.setattr(ProductRepository, "search", _explode)

        response = lenient_client.get("/products")

        assert response.status_code == 500
        [(_, context)] = recorder.calls
        assert context["user_id"] is None
