"""Order bounded context: order placement and lifecycle.

Prices and availability come from the Product service and customer existence
from the Customer service, both reached through the ports in
``orders.directory``.
"""

import structlog
from protean.domain import Domain

orders = Domain(name="orders")

logger = structlog.get_logger(__name__)
