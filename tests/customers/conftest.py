import os

import pytest


@pytest.fixture(scope="session")
def _customers_domain(request):
    """Initialize the customers domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from customers.domain import customers

    customers.init()
    return customers


@pytest.fixture(scope="session", autouse=True)
def setup_db(_customers_domain):
    from shared.db import drop_db, setup_db

    setup_db(_customers_domain)

    yield

    drop_db(_customers_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_customers_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _customers_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
