"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
and use the camelCase field names expected by the API's Pydantic schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["Camera", "Lens", "Accessory", "Lighting", "Tripod"]
BRANDS = ["Optika", "Glassworks", "Lumina", "Aperture Co"]
PAYMENT_METHODS = ["Bank Transfer", "Cash on Delivery", "Card on Delivery"]

# ---------- Identity ----------


def valid_email() -> str:
    """Generate unique emails with one @ and a dotted domain."""
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:6]}@{domain}"


def valid_phone() -> str:
    return f"+94 7{random.randint(0, 9)} {random.randint(100, 999)} {random.randint(1000, 9999)}"


def register_data() -> dict:
    """Generate RegisterRequest payload."""
    return {
        "name": fake.name()[:100],
        "email": valid_email(),
        "password": fake.password(length=12),
        "phone": valid_phone(),
    }


# ---------- Catalogue ----------


def product_data() -> dict:
    """Generate CreateProductRequest payload."""
    word = fake.word().capitalize()
    return {
        "name": f"{word} {random.choice(['X', 'Pro', 'Mark II', 'Lite'])} {random.randint(10, 99)}"[:255],
        "description": fake.sentence(nb_words=10),
        "longDescription": fake.paragraph(nb_sentences=4),
        "price": round(random.uniform(19.99, 2499.99), 2),
        "brand": random.choice(BRANDS),
        "category": random.choice(CATEGORIES),
        "stock": random.randint(0, 25),
        "images": [f"https://cdn.example.com/images/{uuid.uuid4().hex}.jpg"],
    }


def product_update_data() -> dict:
    """Generate a partial UpdateProductRequest payload."""
    return {
        "price": round(random.uniform(19.99, 2499.99), 2),
        "description": fake.sentence(nb_words=12),
    }


def search_params() -> dict:
    """Generate query parameters for GET /products."""
    params = {"page": 1, "limit": random.choice([10, 20])}
    choice = random.random()
    if choice < 0.4:
        params["category"] = random.choice(CATEGORIES)
    elif choice < 0.6:
        params["brand"] = random.choice(BRANDS)
    elif choice < 0.8:
        params["keyword"] = random.choice(["lens", "pro", "mark", "camera"])
    return params


# ---------- Cart & Orders ----------


def cart_item_data(product_id: str) -> dict:
    """Generate CartItemRequest payload."""
    return {"productId": product_id, "quantity": random.randint(1, 3)}


def checkout_data() -> dict:
    """Generate PlaceOrderRequest payload."""
    return {
        "shippingAddress": fake.address().replace("\n", ", "),
        "paymentMethod": random.choice(PAYMENT_METHODS),
        "phone": valid_phone(),
    }
