"""Order deletion (soft delete): command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from orders.domain import orders
from orders.order.order import Order
from orders.order.queries import get_order

logger = structlog.get_logger(__name__)


@orders.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)
    deleted_by = String(max_length=100)


@orders.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        order = get_order(command.order_id)
        order.soft_delete(deleted_by=command.deleted_by)
        current_domain.repository_for(Order).add(order)
        logger.info("Order deleted", order_id=str(order.id), order_number=order.order_number)
