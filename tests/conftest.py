import os
from pathlib import Path

import pytest

# bcrypt's minimum cost keeps password hashing fast under test
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
# Console only; no rotating files under test
os.environ.setdefault("LOG_DIR", "")


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the configuration overlay before any domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture()
def auth_headers():
    """Bearer header for an authenticated caller."""
    from shared.security import create_access_token

    issued = create_access_token(
        user_id="0b6f7c1e-3c1d-4c33-9a57-4f3c1f0f2b10",
        email="staff@example.com",
        full_name="Staff Member",
        roles=["admin"],
    )
    return {"Authorization": f"Bearer {issued.token}"}
