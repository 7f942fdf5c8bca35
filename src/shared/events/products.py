"""Cross-domain event contracts for Product service events.

The source-of-truth events are in src/products/product/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, Integer, String


class ProductStockUpdated(BaseEvent):
    """A product's stock level changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    quantity = Integer(required=True)
    reason = String(required=True)
    order_id = String()
    updated_at = DateTime(required=True)
