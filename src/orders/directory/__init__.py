"""Customer and product lookup factory.

Provides get_/set_/reset_ functions to swap implementations:
- HttpCustomerDirectory / HttpProductCatalog when the service URLs are configured
- InMemoryCustomerDirectory / InMemoryProductCatalog otherwise
"""

from orders.directory.http_adapter import HttpCustomerDirectory, HttpProductCatalog
from orders.directory.memory_adapter import InMemoryCustomerDirectory, InMemoryProductCatalog
from orders.directory.port import CustomerDirectory, ProductCatalog
from shared.config import get_settings

_current_directory: CustomerDirectory | None = None
_current_catalog: ProductCatalog | None = None


def get_customer_directory() -> CustomerDirectory:
    """Return the active customer directory, building the configured default."""
    global _current_directory
    if _current_directory is None:
        settings = get_settings()
        if settings.customer_service_url:
            _current_directory = HttpCustomerDirectory(
                settings.customer_service_url, timeout=settings.service_timeout_seconds
            )
        else:
            _current_directory = InMemoryCustomerDirectory()
    return _current_directory


def set_customer_directory(directory: CustomerDirectory) -> None:
    global _current_directory
    _current_directory = directory


def reset_customer_directory() -> None:
    global _current_directory
    _current_directory = None


def get_product_catalog() -> ProductCatalog:
    """Return the active product catalog, building the configured default."""
    global _current_catalog
    if _current_catalog is None:
        settings = get_settings()
        if settings.product_service_url:
            _current_catalog = HttpProductCatalog(settings.product_service_url, timeout=settings.service_timeout_seconds)
        else:
            _current_catalog = InMemoryProductCatalog()
    return _current_catalog


def set_product_catalog(catalog: ProductCatalog) -> None:
    global _current_catalog
    _current_catalog = catalog


def reset_product_catalog() -> None:
    global _current_catalog
    _current_catalog = None
