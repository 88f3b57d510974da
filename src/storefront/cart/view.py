"""Resolved cart: line items with their product details joined in."""

from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.catalogue.view import product_summary


def resolve_cart(cart: ShoppingCart | None) -> dict:
    """Render a cart for display. A missing cart renders as an empty one."""
    if cart is None:
        return {"id": None, "user_id": None, "items": [], "updated_at": None}

    products = current_domain.repository_for(Product).resolve(item.product_id for item in cart.items)
    return {
        "id": str(cart.id),
        "user_id": str(cart.user_id),
        "items": [
            {
                "product_id": str(item.product_id),
                "product": product_summary(products.get(str(item.product_id))),
                "quantity": item.quantity,
            }
            for item in cart.items
        ],
        "updated_at": cart.updated_at,
    }
