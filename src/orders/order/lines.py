"""Turning requested order lines into priced lines.

Requested lines arrive as JSON (``[{product_id, quantity, ...}]``). Prices,
names and SKUs always come from the product catalog, never from the caller.
"""

import json
from collections import Counter

from protean.exceptions import ObjectNotFoundError, ValidationError

from orders.directory import get_product_catalog
from orders.order.order import MAX_ITEMS, MAX_QUANTITY
from shared.errors import BusinessRuleError


def parse_item_entries(raw):
    """Decode and validate requested lines."""
    try:
        entries = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError as exc:
        raise ValidationError({"items": ["Items must be a JSON list"]}) from exc

    if not isinstance(entries, list) or not entries:
        raise ValidationError({"items": ["Order must have at least one item"]})
    if len(entries) > MAX_ITEMS:
        raise ValidationError({"items": [f"Order cannot have more than {MAX_ITEMS} items"]})

    for entry in entries:
        if not entry.get("product_id"):
            raise ValidationError({"items": ["Each item requires a product_id"]})
        quantity = entry.get("quantity")
        if not isinstance(quantity, int) or isinstance(quantity, bool) or not 1 <= quantity <= MAX_QUANTITY:
            raise ValidationError({"items": [f"Quantity must be between 1 and {MAX_QUANTITY}"]})
    return entries


def price_lines(entries, already_ordered=None):
    """Resolve every entry against the catalog and check stock.

    ``already_ordered`` maps product ids to quantities the order already
    holds; only the increase over those is checked against stock.
    """
    catalog = get_product_catalog()
    products = catalog.find_many(entry["product_id"] for entry in entries)

    for product_id in dict.fromkeys(str(entry["product_id"]) for entry in entries):
        product = products.get(product_id)
        if product is None or not product.is_active:
            raise ObjectNotFoundError(f"Product with id {product_id} was not found")

    requested = Counter()
    for entry in entries:
        requested[str(entry["product_id"])] += entry["quantity"]

    already_ordered = already_ordered or {}
    for product_id, quantity in requested.items():
        increase = quantity - already_ordered.get(product_id, 0)
        product = products[product_id]
        if increase > 0 and product.stock < increase:
            raise BusinessRuleError(
                f"Insufficient stock for product {product.name}. Available: {product.stock}, Requested: {increase}"
            )

    lines = []
    for entry in entries:
        product = products[str(entry["product_id"])]
        lines.append(
            {
                "id": entry.get("id"),
                "product_id": product.id,
                "product_name": product.name,
                "product_sku": product.sku,
                "quantity": entry["quantity"],
                "unit_price": product.price,
                "notes": entry.get("notes"),
            }
        )
    return lines
