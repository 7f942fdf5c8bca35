"""Product detail, pricing and stock-level edits: command and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from products.domain import products
from products.product.product import Product
from products.product.queries import find_by_sku, get_product
from products.product.stock import apply_stock_change
from shared.errors import DuplicateEntityError


@products.command(part_of="Product")
class UpdateProduct:
    """Partially update a product. Omitted fields keep their current value."""

    product_id: Identifier(required=True)
    name: String(max_length=255)
    sku: String(max_length=100)
    price: Float(min_value=0.0)
    stock: Integer(min_value=0)
    minimum_stock: Integer(min_value=0)
    description: String(max_length=1000)
    category: String(max_length=100)
    brand: String(max_length=100)
    weight: Float(min_value=0.0)
    dimensions: String(max_length=50)
    image_url: String(max_length=500)
    tags: String(max_length=500)
    is_active: Boolean()
    user_id: String(max_length=50)
    reason: String(max_length=255)


@products.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        product = get_product(command.product_id)

        if command.sku and command.sku.strip().upper() != product.sku:
            existing = find_by_sku(command.sku)
            if existing is not None and existing.id != product.id:
                raise DuplicateEntityError(f"Product with SKU {command.sku.strip().upper()} already exists")

        product.update_details(
            name=command.name,
            sku=command.sku,
            description=command.description,
            category=command.category,
            brand=command.brand,
            weight=command.weight,
            dimensions=command.dimensions,
            image_url=command.image_url,
            tags=command.tags,
            minimum_stock=command.minimum_stock,
            is_active=command.is_active,
        )

        if command.price is not None:
            product.change_price(command.price, user_id=command.user_id, reason=command.reason)

        if command.stock is not None and command.stock != product.stock:
            apply_stock_change(
                product,
                command.stock - product.stock,
                reason=command.reason or "Manual stock update",
                user_id=command.user_id,
            )

        current_domain.repository_for(Product).add(product)
        return str(product.id)
