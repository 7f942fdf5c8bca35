"""Order updates: status changes, notes and line edits in one command."""

from collections import Counter

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from orders.domain import orders
from orders.order.lines import parse_item_entries, price_lines
from orders.order.order import Order
from orders.order.queries import get_order

logger = structlog.get_logger(__name__)


@orders.command(part_of="Order")
class UpdateOrder:
    """Apply any combination of a status change, new notes and new lines.

    ``items`` is a JSON list; entries with an ``id`` update that line, entries
    without one add a line, and lines left out are removed. An empty or
    missing list leaves the lines untouched.
    """

    order_id = Identifier(required=True)
    status = String(max_length=20)
    notes = String(max_length=500)
    items = Text()
    changed_by = String(max_length=100)
    reason = String(max_length=255)
    comments = Text()


@orders.command_handler(part_of=Order)
class UpdateOrderHandler:
    @handle(UpdateOrder)
    def update_order(self, command):
        order = get_order(command.order_id)
        previous_status = order.status

        if command.status:
            order.change_status(
                command.status,
                changed_by=command.changed_by,
                reason=command.reason or "Order status updated",
                comments=command.comments,
            )

        order.update_notes(command.notes, updated_by=command.changed_by)

        if command.items and command.items.strip() not in ("", "[]"):
            entries = parse_item_entries(command.items)
            already_ordered = Counter()
            for item in order.items:
                already_ordered[str(item.product_id)] += item.quantity
            order.replace_items(price_lines(entries, already_ordered), updated_by=command.changed_by)

        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order updated",
            order_id=str(order.id),
            previous_status=previous_status,
            status=order.status,
            total_amount=order.total_amount,
        )
        return str(order.id)
