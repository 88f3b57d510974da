"""Order lifecycle operations on behalf of an authenticated requester.

Checkout is two writes: the order is stored first (``PlaceOrder``), then the
cart is emptied (``ClearCart``). A failure in the second write leaves a
placed order next to a still-full cart; it is logged and the order is
returned anyway.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.items import ClearCart
from storefront.exceptions import ForbiddenError, UnauthorizedError
from storefront.identity.requester import Requester
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def place_order(requester: Requester, shipping_address, payment_method, phone) -> Order:
    order_id = current_domain.process(
        PlaceOrder(
            user_id=requester.user_id,
            shipping_address=shipping_address,
            payment_method=payment_method,
            phone=phone,
        ),
        asynchronous=False,
    )
    order = current_domain.repository_for(Order).get(order_id)

    try:
        current_domain.process(ClearCart(user_id=requester.user_id), asynchronous=False)
    except Exception:
        logger.exception(
            "Cart clear failed after order placement",
            operation="clear_cart",
            user_id=str(requester.user_id),
            order_id=str(order.id),
            order_number=order.order_number,
        )

    return order


def list_orders(requester: Requester) -> list[Order]:
    return current_domain.repository_for(Order).for_user(requester.user_id)


def _authorize(order: Order, requester: Requester) -> Order:
    if not requester.can_access(order.user_id):
        raise UnauthorizedError()
    return order


def get_order(order_id, requester: Requester) -> Order:
    """Order by internal id; owner or admin only."""
    order = current_domain.repository_for(Order).get(order_id)
    return _authorize(order, requester)


def get_order_by_number(order_number, requester: Requester) -> Order:
    """Order by its human-facing number; owner or admin only."""
    order = current_domain.repository_for(Order).find_by_number(order_number)
    if order is None:
        raise ObjectNotFoundError({"_entity": f"Order `{order_number}` does not exist"})
    return _authorize(order, requester)


def change_status(order_number, status, requester: Requester) -> Order:
    if not requester.is_admin:
        raise ForbiddenError()

    order_id = current_domain.process(
        UpdateOrderStatus(order_number=order_number, status=status),
        asynchronous=False,
    )
    return current_domain.repository_for(Order).get(order_id)
