import os

import pytest


@pytest.fixture(scope="session")
def _orders_domain(request):
    """Initialize the orders domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from orders.domain import orders

    orders.init()
    return orders


@pytest.fixture(scope="session", autouse=True)
def setup_db(_orders_domain):
    from shared.db import drop_db, setup_db

    setup_db(_orders_domain)

    yield

    drop_db(_orders_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_orders_domain):
    """Push domain context before each test, cleanup after."""
    from orders.directory import reset_customer_directory, reset_product_catalog

    ctx = _orders_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()

    reset_customer_directory()
    reset_product_catalog()


@pytest.fixture()
def customer_directory():
    from orders.directory import set_customer_directory
    from orders.directory.memory_adapter import InMemoryCustomerDirectory

    directory = InMemoryCustomerDirectory()
    set_customer_directory(directory)
    return directory


@pytest.fixture()
def product_catalog():
    from orders.directory import set_product_catalog
    from orders.directory.memory_adapter import InMemoryProductCatalog

    catalog = InMemoryProductCatalog()
    set_product_catalog(catalog)
    return catalog


@pytest.fixture()
def customer(customer_directory):
    return customer_directory.register("7d1f4e2a-0c55-4d8e-9f8a-1b2c3d4e5f60", email="ana@example.com", full_name="Ana Lopez")


@pytest.fixture()
def laptop(product_catalog):
    return product_catalog.register(
        "11111111-1111-4111-8111-111111111111", name="Laptop Dell XPS 13", price=1299.99, stock=25, sku="DELL-XPS13-001"
    )


@pytest.fixture()
def mouse(product_catalog):
    return product_catalog.register(
        "22222222-2222-4222-8222-222222222222", name="Mouse Logitech MX", price=25.50, stock=3, sku="LOGI-MX-001"
    )
