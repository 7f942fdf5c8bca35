"""Order placement: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from orders.directory import get_customer_directory
from orders.domain import orders
from orders.order.lines import parse_item_entries, price_lines
from orders.order.order import Order

logger = structlog.get_logger(__name__)


@orders.command(part_of="Order")
class CreateOrder:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    notes = String(max_length=500)
    shipping_address = String(max_length=255)
    shipping_city = String(max_length=100)
    shipping_zip_code = String(max_length=20)
    shipping_country = String(max_length=100)
    created_by = String(max_length=100)


def _shipping_address(command):
    fields = {
        "address": command.shipping_address,
        "city": command.shipping_city,
        "zip_code": command.shipping_zip_code,
        "country": command.shipping_country,
    }
    return fields if any(fields.values()) else None


@orders.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        entries = parse_item_entries(command.items)

        customer = get_customer_directory().find(str(command.customer_id))
        if customer is None:
            raise ObjectNotFoundError(f"Customer with id {command.customer_id} was not found")

        order = Order.place(
            customer_id=customer.id,
            lines=price_lines(entries),
            notes=command.notes,
            shipping_address=_shipping_address(command),
            created_by=command.created_by,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order created",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(order.customer_id),
            total_amount=order.total_amount,
        )
        return str(order.id)
