"""Order placement: the command and handler that turn a cart into an order.

The handler reads the cart but does not modify it. Clearing the cart is a
separate step (``ClearCart``) issued only after the order is stored, so a
failed order write never empties the cart.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.exceptions import EmptyCartError
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address = Text(required=True)
    payment_method = String(required=True, max_length=50)
    phone = String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = current_domain.repository_for(ShoppingCart).for_user(command.user_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError()

        # Price every line at the current catalogue price
        products = current_domain.repository_for(Product).resolve(item.product_id for item in cart.items)
        missing = [str(item.product_id) for item in cart.items if str(item.product_id) not in products]
        if missing:
            raise ValidationError({"items": [f"Products no longer available: {', '.join(missing)}"]})

        lines = [
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "price": products[str(item.product_id)].price,
            }
            for item in cart.items
        ]

        repo = current_domain.repository_for(Order)
        order = Order.place(
            order_number=repo.next_order_number(),
            user_id=command.user_id,
            lines=lines,
            shipping_address=command.shipping_address,
            payment_method=command.payment_method,
            phone=command.phone,
        )
        repo.add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=str(command.user_id),
            total_amount=order.total_amount,
            item_count=len(lines),
        )
        return str(order.id)
