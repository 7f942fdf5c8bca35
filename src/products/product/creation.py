"""Product creation: command and handler."""

import structlog
from protean import handle
from protean.fields import Float, Integer, String
from protean.utils.globals import current_domain

from products.domain import products
from products.product.product import Product
from products.product.queries import find_by_sku
from products.product.stock_movement import StockMovement
from shared.errors import DuplicateEntityError

logger = structlog.get_logger(__name__)


@products.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    sku: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=100)
    stock: Integer(default=0, min_value=0)
    minimum_stock: Integer(default=0, min_value=0)
    description: String(max_length=1000)
    brand: String(max_length=100)
    weight: Float(min_value=0.0)
    dimensions: String(max_length=50)
    image_url: String(max_length=500)
    tags: String(max_length=500)
    user_id: String(max_length=50)


@products.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        if find_by_sku(command.sku) is not None:
            raise DuplicateEntityError(f"Product with SKU {command.sku.strip().upper()} already exists")

        product = Product.create(
            name=command.name,
            sku=command.sku,
            price=command.price,
            category=command.category,
            stock=command.stock or 0,
            minimum_stock=command.minimum_stock or 0,
            description=command.description,
            brand=command.brand,
            weight=command.weight,
            dimensions=command.dimensions,
            image_url=command.image_url,
            tags=command.tags,
        )
        current_domain.repository_for(Product).add(product)

        if product.stock > 0:
            current_domain.repository_for(StockMovement).add(
                StockMovement.record(
                    product_id=product.id,
                    quantity=product.stock,
                    previous_stock=0,
                    new_stock=product.stock,
                    reason="Initial stock",
                    user_id=command.user_id,
                )
            )

        logger.info("Product created", product_id=str(product.id), sku=product.sku)
        return str(product.id)
