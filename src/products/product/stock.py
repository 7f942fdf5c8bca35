"""Stock adjustments: command and handler.

Every adjustment writes the new level on the product and appends a
StockMovement in the same unit of work.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from products.domain import products
from products.product.product import Product
from products.product.queries import get_product
from products.product.stock_movement import StockMovement

logger = structlog.get_logger(__name__)


@products.command(part_of="Product")
class UpdateStock:
    """Move a product's stock by a signed quantity."""

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    reason: String(required=True, max_length=255)
    external_reference: String(max_length=100)
    user_id: String(max_length=50)
    order_id: String(max_length=50)


def apply_stock_change(product, quantity, reason, external_reference=None, user_id=None, order_id=None):
    """Adjust ``product`` and persist the matching ledger entry."""
    previous_stock, new_stock = product.adjust_stock(quantity, reason=reason, order_id=order_id)
    current_domain.repository_for(StockMovement).add(
        StockMovement.record(
            product_id=product.id,
            quantity=quantity,
            previous_stock=previous_stock,
            new_stock=new_stock,
            reason=reason,
            external_reference=external_reference,
            user_id=user_id,
        )
    )
    return new_stock


@products.command_handler(part_of=Product)
class UpdateStockHandler:
    @handle(UpdateStock)
    def update_stock(self, command):
        product = get_product(command.product_id)
        new_stock = apply_stock_change(
            product,
            command.quantity,
            reason=command.reason,
            external_reference=command.external_reference,
            user_id=command.user_id,
            order_id=command.order_id,
        )
        current_domain.repository_for(Product).add(product)

        logger.info(
            "Stock updated",
            product_id=str(product.id),
            quantity=command.quantity,
            new_stock=new_stock,
            reason=command.reason,
        )
        return new_stock
