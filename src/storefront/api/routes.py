"""FastAPI routes for the Storefront: auth, users, products, compatibility, cart and orders."""

import json

from fastapi import APIRouter, Depends, HTTPException, Query
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.api.auth import get_requester, issue_token, require_admin
from storefront.api.schemas import (
    AuthResponse,
    CartItemRequest,
    CartResponse,
    CompatibilityResponse,
    CreateProductRequest,
    LoginRequest,
    OrderResponse,
    OrderStatusResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductDetailResponse,
    ProductListResponse,
    ProductSummaryResponse,
    RegisterRequest,
    StatusResponse,
    ToggleStockRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    UpdateProfileRequest,
    UserResponse,
)
from storefront.cart import service as cart_service
from storefront.cart.view import resolve_cart
from storefront.catalogue.management import CreateProduct, DeleteProduct, ToggleProductStock, UpdateProduct
from storefront.catalogue.product import Product
from storefront.catalogue.view import product_detail, product_summary, resolve_products
from storefront.identity.profile import AddFavorite, RemoveFavorite, UpdateProfile
from storefront.identity.registration import RegisterUser
from storefront.identity.requester import Requester
from storefront.identity.user import User
from storefront.identity.view import user_profile
from storefront.order import service as order_service
from storefront.order.view import resolve_order


def _auth_payload(user_id: str) -> dict:
    user = current_domain.repository_for(User).get(user_id)
    return {"token": issue_token(user), "user": user_profile(user)}


def _product(product_id: str) -> dict:
    return product_detail(current_domain.repository_for(Product).get(product_id))


def _favorites(user_id: str) -> list[dict]:
    user = current_domain.repository_for(User).get(user_id)
    return resolve_products(list(user.favorites or []))


# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest):
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
        phone=body.phone,
        is_admin=False,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return _auth_payload(user_id)


@auth_router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest):
    user = current_domain.repository_for(User).find_by_email(body.email)
    if user is None or not user.check_password(body.password):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return _auth_payload(str(user.id))


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.get("/profile", response_model=UserResponse)
async def get_profile(requester: Requester = Depends(get_requester)):
    return user_profile(current_domain.repository_for(User).get(requester.user_id))


@user_router.put("/profile", response_model=UserResponse)
async def update_profile(body: UpdateProfileRequest, requester: Requester = Depends(get_requester)):
    command = UpdateProfile(
        user_id=requester.user_id,
        name=body.name,
        phone=body.phone,
        address=body.address,
        password=body.password,
    )
    current_domain.process(command, asynchronous=False)
    return user_profile(current_domain.repository_for(User).get(requester.user_id))


@user_router.get("/favorites", response_model=list[ProductSummaryResponse])
async def list_favorites(requester: Requester = Depends(get_requester)):
    return _favorites(requester.user_id)


@user_router.post("/favorites/{product_id}", response_model=list[ProductSummaryResponse])
async def add_favorite(product_id: str, requester: Requester = Depends(get_requester)):
    current_domain.process(AddFavorite(user_id=requester.user_id, product_id=product_id), asynchronous=False)
    return _favorites(requester.user_id)


@user_router.delete("/favorites/{product_id}", response_model=list[ProductSummaryResponse])
async def remove_favorite(product_id: str, requester: Requester = Depends(get_requester)):
    current_domain.process(RemoveFavorite(user_id=requester.user_id, product_id=product_id), asynchronous=False)
    return _favorites(requester.user_id)


@user_router.post("/admins", status_code=201, response_model=UserResponse)
async def provision_admin(body: RegisterRequest, requester: Requester = Depends(require_admin)):
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
        phone=body.phone,
        is_admin=True,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return user_profile(current_domain.repository_for(User).get(user_id))


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    keyword: str | None = None,
    category: str | None = None,
    brand: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
):
    products, total = current_domain.repository_for(Product).search(
        keyword=keyword, category=category, brand=brand, page=page, limit=limit
    )
    return {
        "products": [product_summary(p) for p in products],
        "total": total,
        "page": page,
        "limit": limit,
    }


@product_router.get("/{product_id}", response_model=ProductDetailResponse)
async def get_product(product_id: str):
    return _product(product_id)


@product_router.post("", status_code=201, response_model=ProductDetailResponse)
async def create_product(body: CreateProductRequest, requester: Requester = Depends(require_admin)):
    command = CreateProduct(
        name=body.name,
        description=body.description,
        long_description=body.long_description,
        price=body.price,
        brand=body.brand,
        category=body.category,
        stock=body.stock,
        images=json.dumps(body.images),
        compatibility=json.dumps(body.compatibility),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _product(product_id)


@product_router.put("/{product_id}", response_model=ProductDetailResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    requester: Requester = Depends(require_admin),
):
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        long_description=body.long_description,
        price=body.price,
        brand=body.brand,
        category=body.category,
        stock=body.stock,
        images=json.dumps(body.images) if body.images is not None else None,
        compatibility=json.dumps(body.compatibility) if body.compatibility is not None else None,
    )
    current_domain.process(command, asynchronous=False)
    return _product(product_id)


@product_router.put("/{product_id}/stock", response_model=ProductDetailResponse)
async def toggle_product_stock(
    product_id: str,
    body: ToggleStockRequest | None = None,
    requester: Requester = Depends(require_admin),
):
    restock_quantity = body.restock_quantity if body is not None else 1
    command = ToggleProductStock(product_id=product_id, restock_quantity=restock_quantity)
    current_domain.process(command, asynchronous=False)
    return _product(product_id)


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, requester: Requester = Depends(require_admin)):
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Compatibility Router
# ---------------------------------------------------------------------------
compatibility_router = APIRouter(prefix="/compatibility", tags=["compatibility"])


@compatibility_router.get("", response_model=CompatibilityResponse)
async def check_compatibility(
    product1_id: str | None = Query(default=None, alias="product1Id"),
    product2_id: str | None = Query(default=None, alias="product2Id"),
):
    if not product1_id or not product2_id:
        raise ValidationError({"product_ids": ["Two product IDs required"]})

    compatible = current_domain.repository_for(Product).are_compatible(product1_id, product2_id)
    return {"compatible": compatible}


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(requester: Requester = Depends(get_requester)):
    return resolve_cart(cart_service.get_cart(requester))


@cart_router.post("", response_model=CartResponse)
async def upsert_cart_item(body: CartItemRequest, requester: Requester = Depends(get_requester)):
    cart = cart_service.upsert_item(requester, body.product_id, body.quantity)
    return resolve_cart(cart)


@cart_router.delete("/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, requester: Requester = Depends(get_requester)):
    return resolve_cart(cart_service.remove_item(requester, product_id))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest, requester: Requester = Depends(get_requester)):
    order = order_service.place_order(
        requester,
        shipping_address=body.shipping_address,
        payment_method=body.payment_method,
        phone=body.phone,
    )
    return {"order_id": order.order_number, "order": resolve_order(order)}


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(requester: Requester = Depends(get_requester)):
    return [resolve_order(order) for order in order_service.list_orders(requester)]


@order_router.get("/by-orderid/{order_number}", response_model=OrderResponse)
async def get_order_by_number(order_number: str, requester: Requester = Depends(get_requester)):
    return resolve_order(order_service.get_order_by_number(order_number, requester))


@order_router.put("/status/{order_number}", response_model=OrderStatusResponse)
async def update_order_status(
    order_number: str,
    body: UpdateOrderStatusRequest,
    requester: Requester = Depends(get_requester),
):
    order = order_service.change_status(order_number, body.status, requester)
    return {"message": "Order status updated", "order": resolve_order(order)}


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, requester: Requester = Depends(get_requester)):
    return resolve_order(order_service.get_order(order_id, requester))


routers = [auth_router, user_router, product_router, compatibility_router, cart_router, order_router]
