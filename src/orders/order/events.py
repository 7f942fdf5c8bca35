"""Domain events raised by the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from orders.domain import orders


@orders.event(part_of="Order")
class OrderCreated:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    total_amount = Float(required=True)
    items = Text(required=True)  # JSON list of {product_id, quantity, unit_price}
    created_at = DateTime(required=True)


@orders.event(part_of="Order")
class OrderStatusUpdated:
    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    updated_by = String()
    reason = String()
    updated_at = DateTime(required=True)


@orders.event(part_of="Order")
class OrderItemsChanged:
    """The order lines were replaced and the order repriced."""

    __version__ = 1

    order_id = Identifier(required=True)
    item_count = Integer(required=True)
    sub_total = Float(required=True)
    total_amount = Float(required=True)
    updated_at = DateTime(required=True)


@orders.event(part_of="Order")
class OrderDeleted:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    deleted_by = String()
    deleted_at = DateTime(required=True)
