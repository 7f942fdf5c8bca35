"""Directory adapters that read a sibling domain hosted in the same process.

The lookup runs on a worker thread inside the other domain's context, so it
never joins the calling domain's unit of work.
"""

from concurrent.futures import ThreadPoolExecutor

from protean.domain import Domain
from protean.exceptions import ObjectNotFoundError

from orders.directory.port import CustomerDirectory, CustomerSnapshot, ProductCatalog, ProductSnapshot


class _DomainReader:
    def __init__(self, domain: Domain):
        self._domain = domain
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"{domain.name}-reader")

    def run(self, func, *args):
        def _in_context():
            with self._domain.domain_context():
                return func(*args)

        return self._executor.submit(_in_context).result()


class InProcessCustomerDirectory(CustomerDirectory):
    def __init__(self, domain: Domain):
        self._reader = _DomainReader(domain)

    @staticmethod
    def _lookup(customer_id):
        from customers.customer.queries import get_customer

        try:
            customer = get_customer(customer_id)
        except ObjectNotFoundError:
            return None
        return CustomerSnapshot(
            id=str(customer.id),
            email=customer.email,
            full_name=customer.full_name,
            is_active=customer.is_active,
        )

    def find(self, customer_id):
        return self._reader.run(self._lookup, str(customer_id))


class InProcessProductCatalog(ProductCatalog):
    def __init__(self, domain: Domain):
        self._reader = _DomainReader(domain)

    @staticmethod
    def _lookup(product_id):
        from products.product.queries import get_product

        try:
            product = get_product(product_id)
        except ObjectNotFoundError:
            return None
        return ProductSnapshot(
            id=str(product.id),
            name=product.name,
            sku=product.sku,
            price=product.price,
            stock=product.stock,
            is_active=product.is_active,
        )

    def find(self, product_id):
        return self._reader.run(self._lookup, str(product_id))
