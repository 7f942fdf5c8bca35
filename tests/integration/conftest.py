"""Fixtures for end-to-end tests against the combined FastAPI application.

Importing ``app`` initializes all four domains and wires the Order service to
read customers and products in-process.
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="session")
def application():
    from app import app

    return app


@pytest.fixture(scope="session", autouse=True)
def setup_databases(application):
    from customers.domain import customers
    from logstore.domain import logstore
    from orders.domain import orders
    from products.domain import products
    from shared.db import drop_db, setup_db

    domains = (customers, orders, products, logstore)
    for domain in domains:
        setup_db(domain)

    yield domains

    for domain in domains:
        drop_db(domain)


@pytest.fixture(autouse=True)
def in_process_directory(setup_databases):
    """Point the Order service at the in-process Customer and Product domains."""
    from customers.domain import customers
    from orders.directory import (
        reset_customer_directory,
        reset_product_catalog,
        set_customer_directory,
        set_product_catalog,
    )
    from orders.directory.inprocess_adapter import InProcessCustomerDirectory, InProcessProductCatalog
    from products.domain import products

    set_customer_directory(InProcessCustomerDirectory(customers))
    set_product_catalog(InProcessProductCatalog(products))

    yield

    reset_customer_directory()
    reset_product_catalog()


@pytest.fixture(autouse=True)
def reset_data(setup_databases):
    yield

    for domain in setup_databases:
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()
            for _, broker in domain.brokers.items():
                broker._data_reset()
            domain.event_store.store._data_reset()


@pytest.fixture()
def client(application):
    return TestClient(application)
