"""Inbound cross-domain event handlers: the Logging service records activity.

Each upstream stream gets its own handler. Every handled event becomes an
Information entry whose correlation id is the event's message id and whose
properties hold the event payload.
"""

import json

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.config import get_settings
from shared.events.customers import CustomerRegistered
from shared.events.orders import OrderCreated, OrderStatusUpdated
from shared.events.products import ProductStockUpdated

from logstore.domain import logstore
from logstore.entry.log_entry import LogEntry, LogLevel
from logstore.entry.recording import RecordLogEntry

logger = structlog.get_logger(__name__)

# Register external events so Protean can deserialize them
logstore.register_external_event(CustomerRegistered, "Customers.CustomerRegistered.v1")
logstore.register_external_event(OrderCreated, "Orders.OrderCreated.v1")
logstore.register_external_event(OrderStatusUpdated, "Orders.OrderStatusUpdated.v1")
logstore.register_external_event(ProductStockUpdated, "Products.ProductStockUpdated.v1")


def _message_id(event):
    headers = getattr(getattr(event, "_metadata", None), "headers", None)
    message_id = getattr(headers, "id", None)
    return str(message_id) if message_id else None


def _payload(event):
    return json.dumps({k: v for k, v in event.to_dict().items() if not k.startswith("_")}, default=str)


def record_event(event, service_name, message, user_id=None):
    """Write one Information entry describing ``event``."""
    category = event.__class__.__name__
    current_domain.process(
        RecordLogEntry(
            level=LogLevel.INFORMATION.value,
            message=message,
            service_name=service_name,
            category=category,
            correlation_id=_message_id(event),
            user_id=str(user_id) if user_id else None,
            properties=_payload(event),
            application_version=get_settings().app_version,
        ),
        asynchronous=False,
    )
    logger.debug("Recorded event", service_name=service_name, category=category)


@logstore.event_handler(part_of=LogEntry, stream_category="customers::customer")
class CustomerActivityHandler:
    @handle(CustomerRegistered)
    def on_customer_registered(self, event: CustomerRegistered) -> None:
        record_event(
            event,
            "CustomerService",
            f"Customer registered: {event.email}",
            user_id=event.customer_id,
        )


@logstore.event_handler(part_of=LogEntry, stream_category="orders::order")
class OrderActivityHandler:
    @handle(OrderCreated)
    def on_order_created(self, event: OrderCreated) -> None:
        record_event(event, "OrderService", f"Order created: {event.order_id}", user_id=event.customer_id)

    @handle(OrderStatusUpdated)
    def on_order_status_updated(self, event: OrderStatusUpdated) -> None:
        record_event(
            event,
            "OrderService",
            f"Order status updated: {event.order_id} -> {event.new_status}",
            user_id=event.customer_id,
        )


@logstore.event_handler(part_of=LogEntry, stream_category="products::product")
class ProductActivityHandler:
    @handle(ProductStockUpdated)
    def on_product_stock_updated(self, event: ProductStockUpdated) -> None:
        record_event(event, "ProductService", f"Product stock updated: {event.product_id}")
