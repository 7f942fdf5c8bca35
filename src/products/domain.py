"""Product bounded context: catalog, pricing and stock levels.

Keeps the product catalog, an append-only stock movement ledger, and reacts
to Order service events by decrementing stock for ordered items.
"""

import structlog
from protean.domain import Domain

products = Domain(name="products")

logger = structlog.get_logger(__name__)
