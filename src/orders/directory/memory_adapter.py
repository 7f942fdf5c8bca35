"""In-memory directory adapters for tests and local development.

Seed them with ``register()``; lookups of anything not registered return None.
"""

from orders.directory.port import CustomerDirectory, CustomerSnapshot, ProductCatalog, ProductSnapshot


class InMemoryCustomerDirectory(CustomerDirectory):
    def __init__(self):
        self._customers: dict[str, CustomerSnapshot] = {}

    def register(self, customer_id, email="customer@example.com", full_name="Test Customer", is_active=True):
        snapshot = CustomerSnapshot(id=str(customer_id), email=email, full_name=full_name, is_active=is_active)
        self._customers[snapshot.id] = snapshot
        return snapshot

    def find(self, customer_id):
        return self._customers.get(str(customer_id))


class InMemoryProductCatalog(ProductCatalog):
    def __init__(self):
        self._products: dict[str, ProductSnapshot] = {}

    def register(self, product_id, name, price, stock=100, sku=None, is_active=True):
        snapshot = ProductSnapshot(
            id=str(product_id),
            name=name,
            sku=sku or f"SKU-{str(product_id)[:8].upper()}",
            price=price,
            stock=stock,
            is_active=is_active,
        )
        self._products[snapshot.id] = snapshot
        return snapshot

    def find(self, product_id):
        return self._products.get(str(product_id))
