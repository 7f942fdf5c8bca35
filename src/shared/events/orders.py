"""Cross-domain event contracts for Order service events.

Consumed by the Product service (stock decrements) and the Logging service.
The source-of-truth events are in src/orders/order/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Float, Identifier, String, Text


class OrderCreated(BaseEvent):
    """An order was placed and priced."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    total_amount = Float(required=True)
    items = Text(required=True)  # JSON list of {product_id, quantity, unit_price}
    created_at = DateTime(required=True)


class OrderStatusUpdated(BaseEvent):
    """An order moved to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    updated_by = String()
    reason = String()
    updated_at = DateTime(required=True)
