"""Cart operations on behalf of an authenticated requester.

A requester only ever touches their own cart, so every operation is keyed by
``requester.user_id``.
"""

from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart, ensure_positive_quantity
from storefront.cart.items import AddToCart, RemoveFromCart
from storefront.identity.requester import Requester


def get_cart(requester: Requester) -> ShoppingCart | None:
    """The requester's cart, or ``None`` if they have never added anything."""
    return current_domain.repository_for(ShoppingCart).for_user(requester.user_id)


def upsert_item(requester: Requester, product_id, quantity) -> ShoppingCart:
    ensure_positive_quantity(quantity)

    cart_id = current_domain.process(
        AddToCart(user_id=requester.user_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )
    return current_domain.repository_for(ShoppingCart).get(cart_id)


def remove_item(requester: Requester, product_id) -> ShoppingCart:
    cart_id = current_domain.process(
        RemoveFromCart(user_id=requester.user_id, product_id=product_id),
        asynchronous=False,
    )
    return current_domain.repository_for(ShoppingCart).get(cart_id)
