"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from products.domain import products


@products.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    sku: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    created_at: DateTime(required=True)


@products.event(part_of="Product")
class ProductUpdated:
    """Descriptive attributes of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    sku: String(required=True)
    category: String(required=True)
    is_active: String(required=True)
    updated_at: DateTime(required=True)


@products.event(part_of="Product")
class ProductPriceChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)
    reason: String()
    changed_at: DateTime(required=True)


@products.event(part_of="Product")
class ProductStockUpdated:
    """A product's stock level changed (manual adjustment or order fulfilment)."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    quantity: Integer(required=True)
    reason: String(required=True)
    order_id: String()
    updated_at: DateTime(required=True)


@products.event(part_of="Product")
class LowStockDetected:
    """Stock fell to or below the product's minimum level."""

    __version__ = 1

    product_id: Identifier(required=True)
    sku: String(required=True)
    current_stock: Integer(required=True)
    minimum_stock: Integer(required=True)
    detected_at: DateTime(required=True)


@products.event(part_of="Product")
class ProductDeleted:
    __version__ = 1

    product_id: Identifier(required=True)
    sku: String(required=True)
    deleted_at: DateTime(required=True)
