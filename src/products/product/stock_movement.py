"""StockMovement aggregate: the append-only stock ledger."""

from datetime import datetime
from enum import Enum

from protean.fields import DateTime, Identifier, Integer, String

from products.domain import products


class MovementType(Enum):
    IN = "In"
    OUT = "Out"
    RESERVED = "Reserved"
    RELEASED = "Released"


@products.aggregate
class StockMovement:
    """A single change to a product's stock level.

    Records are only ever appended; ``previous_stock`` and ``new_stock``
    capture the level on both sides of the change.
    """

    product_id: Identifier(required=True)
    movement_type: String(required=True, choices=MovementType)
    quantity: Integer(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    reason: String(required=True, max_length=255)
    external_reference: String(max_length=100)
    user_id: String(max_length=50)
    comments: String(max_length=500)
    created_at: DateTime(default=datetime.now)

    @classmethod
    def record(cls, product_id, quantity, previous_stock, new_stock, reason, external_reference=None, user_id=None):
        return cls(
            product_id=product_id,
            movement_type=MovementType.IN.value if quantity > 0 else MovementType.OUT.value,
            quantity=quantity,
            previous_stock=previous_stock,
            new_stock=new_stock,
            reason=reason,
            external_reference=external_reference,
            user_id=user_id,
        )
