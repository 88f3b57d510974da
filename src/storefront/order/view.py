"""Resolved order: owner and product details joined into the snapshot."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.catalogue.view import product_summary
from storefront.identity.user import User
from storefront.order.order import Order


def _owner(user_id) -> dict | None:
    try:
        user = current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        return None
    return {"id": str(user.id), "name": user.name, "email": user.email, "phone": user.phone}


def resolve_order(order: Order) -> dict:
    """Render an order for display.

    Products deleted since checkout resolve to ``None``; the captured price
    and quantity are always present.
    """
    products = current_domain.repository_for(Product).resolve(item.product_id for item in order.items)
    return {
        "id": str(order.id),
        "order_id": order.order_number,
        "user": _owner(order.user_id),
        "items": [
            {
                "product_id": str(item.product_id),
                "product": product_summary(products.get(str(item.product_id))),
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in order.items
        ],
        "total_amount": order.total_amount,
        "shipping_address": order.shipping_address,
        "payment_method": order.payment_method,
        "phone": order.phone,
        "status": order.status,
        "created_at": order.created_at,
    }
