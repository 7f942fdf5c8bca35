"""Order aggregate with its line items and status history.

State Machine:
    PENDING → CONFIRMED → PROCESSING → SHIPPED → DELIVERED
    CANCELLED (from PENDING, CONFIRMED, PROCESSING)

Totals are derived from the lines: tax is 10% of the subtotal and shipping
is free above 100, otherwise a flat 10.
"""

import json
import uuid
from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from orders.domain import orders
from orders.order.events import OrderCreated, OrderDeleted, OrderItemsChanged, OrderStatusUpdated
from shared.errors import BusinessRuleError

MAX_ITEMS = 50
MAX_QUANTITY = 1000
TAX_RATE = 0.10
FREE_SHIPPING_THRESHOLD = 100.0
FLAT_SHIPPING_COST = 10.0


class OrderStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Lines can only be edited before the order enters fulfilment
_EDITABLE_STATES = {OrderStatus.PENDING, OrderStatus.CONFIRMED}

_UNDELETABLE_STATES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}


def generate_order_number(now=None):
    """``ORD-YYYYMMDD-XXXXXXXX`` with eight upper-case hex characters."""
    now = now or datetime.now()
    return f"ORD-{now:%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"


def _money(value):
    return round(value or 0.0, 2)


def _line_total(quantity, unit_price):
    return _money(quantity * unit_price)


def _charges_for(sub_total):
    """Return ``(tax_amount, shipping_cost, total_amount)`` for a subtotal."""
    tax_amount = _money(sub_total * TAX_RATE)
    shipping_cost = 0.0 if sub_total > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_COST
    return tax_amount, shipping_cost, _money(sub_total + tax_amount + shipping_cost)


@orders.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships to, captured when the order is placed."""

    address = String(max_length=255)
    city = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)


@orders.entity(part_of="Order")
class OrderItem:
    """One ordered product, priced from the catalog when it was added."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    product_sku = String(max_length=100)
    quantity = Integer(required=True, min_value=1, max_value=MAX_QUANTITY)
    unit_price = Float(required=True, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)
    notes = String(max_length=500)
    created_at = DateTime(default=datetime.now)
    updated_at = DateTime(default=datetime.now)


@orders.entity(part_of="Order")
class OrderStatusChange:
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
    changed_at = DateTime(default=datetime.now)
    changed_by = String(max_length=100)
    reason = String(max_length=255)
    comments = Text()


@orders.aggregate
class Order:
    """A customer's order.

    ``sub_total`` always equals the sum of the line totals and
    ``total_amount`` the subtotal plus tax and shipping. Both are recomputed
    whenever the lines change.
    """

    customer_id = Identifier(required=True)
    order_number = String(required=True, max_length=50)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    order_date = DateTime(default=datetime.now)
    sub_total = Float(default=0.0, min_value=0.0)
    tax_amount = Float(default=0.0, min_value=0.0)
    shipping_cost = Float(default=0.0, min_value=0.0)
    total_amount = Float(default=0.0, min_value=0.0)
    shipping_address = ValueObject(ShippingAddress)
    notes = String(max_length=500)
    items = HasMany(OrderItem)
    status_history = HasMany(OrderStatusChange)
    created_at = DateTime(default=datetime.now)
    updated_at = DateTime(default=datetime.now)
    created_by = String(max_length=100)
    updated_by = String(max_length=100)
    is_deleted = Boolean(default=False)
    deleted_at = DateTime()
    deleted_by = String(max_length=100)

    @invariant.post
    def must_have_between_one_and_fifty_items(self):
        count = len(self.items or [])
        if count < 1:
            raise ValidationError({"items": ["Order must have at least one item"]})
        if count > MAX_ITEMS:
            raise ValidationError({"items": [f"Order cannot have more than {MAX_ITEMS} items"]})

    @invariant.post
    def sub_total_must_match_items(self):
        expected = _money(sum(item.total_price for item in (self.items or [])))
        if _money(self.sub_total) != expected:
            raise ValidationError({"sub_total": ["Subtotal must equal the sum of the item totals"]})

    @invariant.post
    def total_must_add_up(self):
        expected = _money(self.sub_total + self.tax_amount + self.shipping_cost)
        if _money(self.total_amount) != expected:
            raise ValidationError({"total_amount": ["Total must equal subtotal plus tax and shipping"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, lines, notes=None, shipping_address=None, created_by=None):
        """Create a Pending order from priced ``lines``.

        Each line is a dict with product_id, product_name, product_sku,
        quantity and unit_price, plus optional notes. Prices are taken as
        given; lines carry no discount.
        """
        if not lines:
            raise ValidationError({"items": ["Order must have at least one item"]})
        if len(lines) > MAX_ITEMS:
            raise ValidationError({"items": [f"Order cannot have more than {MAX_ITEMS} items"]})

        now = datetime.now()
        items = [cls._build_item(line, now) for line in lines]
        sub_total = _money(sum(item.total_price for item in items))
        tax_amount, shipping_cost, total_amount = _charges_for(sub_total)

        order = cls(
            customer_id=customer_id,
            order_number=generate_order_number(now),
            status=OrderStatus.PENDING.value,
            order_date=now,
            sub_total=sub_total,
            tax_amount=tax_amount,
            shipping_cost=shipping_cost,
            total_amount=total_amount,
            shipping_address=ShippingAddress(**shipping_address) if shipping_address else None,
            notes=notes or None,
            items=items,
            created_at=now,
            updated_at=now,
            created_by=created_by,
        )

        order.raise_(
            OrderCreated(
                order_id=order.id,
                order_number=order.order_number,
                customer_id=order.customer_id,
                total_amount=order.total_amount,
                items=json.dumps(
                    [
                        {
                            "product_id": str(item.product_id),
                            "quantity": item.quantity,
                            "unit_price": item.unit_price,
                        }
                        for item in order.items
                    ]
                ),
                created_at=now,
            )
        )
        return order

    @staticmethod
    def _build_item(line, now):
        return OrderItem(
            product_id=line["product_id"],
            product_name=line["product_name"],
            product_sku=line.get("product_sku"),
            quantity=line["quantity"],
            unit_price=line["unit_price"],
            discount=0.0,
            total_price=_line_total(line["quantity"], line["unit_price"]),
            notes=line.get("notes"),
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def item_by_id(self, item_id):
        return next((i for i in (self.items or []) if str(i.id) == str(item_id)), None)

    @property
    def can_edit_items(self):
        return OrderStatus(self.status) in _EDITABLE_STATES

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def change_status(self, new_status, changed_by=None, reason=None, comments=None):
        """Move to ``new_status`` along the transition table.

        Requesting the current status again is a no-op.
        """
        try:
            target = OrderStatus(new_status)
        except ValueError as exc:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from exc

        current = OrderStatus(self.status)
        if target == current:
            return
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now()
        self.status = target.value
        self.add_status_history(
            OrderStatusChange(
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
                changed_by=changed_by,
                reason=reason,
                comments=comments,
            )
        )
        self.updated_at = now
        self.updated_by = changed_by

        self.raise_(
            OrderStatusUpdated(
                order_id=self.id,
                customer_id=self.customer_id,
                previous_status=current.value,
                new_status=target.value,
                updated_by=changed_by,
                reason=reason,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update_notes(self, notes, updated_by=None):
        """Replace the notes. Blank values leave them unchanged."""
        if not notes or not notes.strip():
            return
        self.notes = notes
        self.updated_at = datetime.now()
        self.updated_by = updated_by

    def replace_items(self, lines, updated_by=None):
        """Make the order's lines match ``lines``.

        A line carrying the id of an existing item updates that item, a line
        without an id adds a new item, and items not listed are removed.
        """
        if not self.can_edit_items:
            raise BusinessRuleError(f"Items cannot be changed on an order in status {self.status}")
        if not lines:
            raise ValidationError({"items": ["Order must have at least one item"]})
        if len(lines) > MAX_ITEMS:
            raise ValidationError({"items": [f"Order cannot have more than {MAX_ITEMS} items"]})

        kept_ids = set()
        for line in lines:
            item_id = line.get("id")
            if item_id is None:
                continue
            if self.item_by_id(item_id) is None:
                raise ValidationError({"items": [f"Order item {item_id} not found in order {self.id}"]})
            kept_ids.add(str(item_id))

        now = datetime.now()
        with atomic_change(self):
            for item in list(self.items or []):
                if str(item.id) not in kept_ids:
                    self.remove_items(item)

            for line in lines:
                if line.get("id") is None:
                    self.add_items(self._build_item(line, now))
                    continue
                item = self.item_by_id(line["id"])
                item.product_id = line["product_id"]
                item.product_name = line["product_name"]
                item.product_sku = line.get("product_sku")
                item.quantity = line["quantity"]
                item.unit_price = line["unit_price"]
                item.discount = 0.0
                item.total_price = _line_total(line["quantity"], line["unit_price"])
                item.updated_at = now

            self.sub_total = _money(sum(item.total_price for item in self.items))
            self.tax_amount, self.shipping_cost, self.total_amount = _charges_for(self.sub_total)
            self.updated_at = now
            self.updated_by = updated_by

        self.raise_(
            OrderItemsChanged(
                order_id=self.id,
                item_count=len(self.items),
                sub_total=self.sub_total,
                total_amount=self.total_amount,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------
    def soft_delete(self, deleted_by=None):
        if OrderStatus(self.status) in _UNDELETABLE_STATES:
            raise BusinessRuleError(f"Cannot delete order {self.order_number} in status {self.status}")

        now = datetime.now()
        self.is_deleted = True
        self.deleted_at = now
        self.deleted_by = deleted_by
        self.updated_at = now

        self.raise_(
            OrderDeleted(
                order_id=self.id,
                order_number=self.order_number,
                deleted_by=deleted_by,
                deleted_at=now,
            )
        )
