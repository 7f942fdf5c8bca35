"""Product removal (soft delete): command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from products.domain import products
from products.product.product import Product
from products.product.queries import get_product


@products.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@products.command_handler(part_of=Product)
class DeleteProductHandler:
    @handle(DeleteProduct)
    def delete_product(self, command):
        product = get_product(command.product_id)
        product.soft_delete()
        current_domain.repository_for(Product).add(product)
