"""Shared builders for storefront tests."""

import json

import pytest
from protean import current_domain

from storefront.catalogue.management import CreateProduct
from storefront.identity.registration import RegisterUser
from storefront.identity.requester import Requester


def register_user(name="Ada Lens", email="ada@example.com", password="shutter42", phone=None, is_admin=False):
    return current_domain.process(
        RegisterUser(name=name, email=email, password=password, phone=phone, is_admin=is_admin),
        asynchronous=False,
    )


def create_product(name="Mirrorless Body X100", price=1299.0, stock=5, **overrides):
    fields = {
        "name": name,
        "description": f"{name} description",
        "price": price,
        "brand": "Optika",
        "category": "Camera",
        "stock": stock,
        "images": json.dumps([]),
        "compatibility": json.dumps([]),
    }
    fields.update(overrides)
    return current_domain.process(CreateProduct(**fields), asynchronous=False)


@pytest.fixture()
def customer():
    return Requester(user_id=register_user(), is_admin=False)


@pytest.fixture()
def other_customer():
    return Requester(user_id=register_user(name="Bo Prism", email="bo@example.com"), is_admin=False)


@pytest.fixture()
def admin():
    user_id = register_user(name="Shop Owner", email="owner@example.com", is_admin=True)
    return Requester(user_id=user_id, is_admin=True)


@pytest.fixture()
def camera_id():
    return create_product()


@pytest.fixture()
def lens_id():
    return create_product(name="50mm f/1.8 Prime", price=199.5, stock=12, category="Lens")


@pytest.fixture()
def make_user():
    return register_user


@pytest.fixture()
def make_product():
    return create_product
