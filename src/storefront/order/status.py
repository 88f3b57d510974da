"""Order status updates: command and handler.

Authorization (admins only) is checked by the caller before the command is
issued; the handler only overwrites the status.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_number = String(required=True, max_length=20)
    status = String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_by_number(command.order_number)
        if order is None:
            raise ObjectNotFoundError({"_entity": f"Order `{command.order_number}` does not exist"})

        previous_status = order.status
        order.change_status(command.status)
        repo.add(order)

        logger.info(
            "Order status changed",
            order_number=order.order_number,
            previous_status=previous_status,
            new_status=order.status,
        )
        return str(order.id)
