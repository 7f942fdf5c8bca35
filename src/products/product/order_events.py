"""Inbound cross-domain event handler: Products reacts to Order events.

OrderCreated decrements stock for every ordered item. Items that cannot be
applied (unknown product, insufficient stock) are checked up front, logged
and skipped, so the remaining items are still processed.
"""

import json

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.orders import OrderCreated, OrderStatusUpdated

from products.domain import products
from products.product.product import Product
from products.product.queries import get_product
from products.product.stock import UpdateStock

logger = structlog.get_logger(__name__)

# Register external events so Protean can deserialize them
products.register_external_event(OrderCreated, "Orders.OrderCreated.v1")
products.register_external_event(OrderStatusUpdated, "Orders.OrderStatusUpdated.v1")


@products.event_handler(part_of=Product, stream_category="orders::order")
class OrderStockEventHandler:
    """Keeps stock levels in line with placed orders."""

    @handle(OrderCreated)
    def on_order_created(self, event: OrderCreated) -> None:
        order_id = str(event.order_id)
        items = json.loads(event.items) if isinstance(event.items, str) else (event.items or [])
        logger.info("Decrementing stock for new order", order_id=order_id, item_count=len(items))

        requested = {}
        for item in items:
            product_id = str(item.get("product_id"))
            requested[product_id] = requested.get(product_id, 0) + int(item.get("quantity") or 0)

        # Every item shares one unit of work, so nothing below may raise
        for product_id, quantity in requested.items():
            problem = self._stock_problem(product_id, quantity)
            if problem:
                logger.warning(
                    "Failed to update stock for ordered item",
                    order_id=order_id,
                    product_id=product_id,
                    quantity=quantity,
                    error=problem,
                )
                continue

            current_domain.process(
                UpdateStock(
                    product_id=product_id,
                    quantity=-quantity,
                    reason=f"Order created: {order_id}",
                    external_reference=order_id,
                    order_id=order_id,
                ),
                asynchronous=False,
            )

    @staticmethod
    def _stock_problem(product_id, quantity):
        """Why this item cannot be decremented, or None when it can."""
        if quantity < 1:
            return f"Invalid quantity {quantity}"
        try:
            product = get_product(product_id)
        except ObjectNotFoundError as exc:
            return str(exc)
        if not product.has_sufficient_stock(quantity):
            return f"Insufficient stock. Available: {product.stock}, Requested: {quantity}"
        return None

    @handle(OrderStatusUpdated)
    def on_order_status_updated(self, event: OrderStatusUpdated) -> None:
        logger.info(
            "Order status changed",
            order_id=str(event.order_id),
            previous_status=event.previous_status,
            new_status=event.new_status,
        )
