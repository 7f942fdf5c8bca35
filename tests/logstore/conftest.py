import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def logstore_bed():
    from logstore.domain import logstore

    bed = DomainFixture(logstore)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(logstore_bed):
    with logstore_bed.domain_context():
        yield


@pytest.fixture()
def record():
    """Record a log entry through the command and return its id."""
    from logstore.entry.recording import RecordLogEntry
    from protean import current_domain

    def _record(**overrides):
        values = {
            "level": "Information",
            "message": "Something happened",
            "service_name": "OrderService",
            "category": "Orders",
        }
        values.update(overrides)
        return current_domain.process(RecordLogEntry(**values), asynchronous=False)

    return _record
