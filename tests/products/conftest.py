import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def products_bed():
    from products.domain import products

    bed = DomainFixture(products)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(products_bed):
    with products_bed.domain_context():
        yield
