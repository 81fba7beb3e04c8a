"""Root conftest: shared test configuration and fixtures."""

import os

# Settings are read at import time, so configure them before anything
# from the package is imported.
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from lending_registry_api.app.core.clock import FixedClock, sequential_ids  # noqa: E402
from lending_registry_api.app.core.store import LendingStore, init_store  # noqa: E402
from lending_registry_api.app.main import create_app  # noqa: E402

ISSUE_DAY = date(2024, 3, 1)


@pytest.fixture
def clock():
    return FixedClock(ISSUE_DAY)


@pytest.fixture
def store(clock):
    """A seeded store with a pinned clock and predictable transaction ids."""
    return init_store(LendingStore(clock=clock, id_factory=sequential_ids()))


@pytest.fixture
def empty_store(clock):
    return LendingStore(clock=clock, id_factory=sequential_ids())


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


def login(client, principal_id="S001", secret="student123"):
    response = client.post(
        "/api/v1/principals/login",
        json={"principal_id": principal_id, "secret": secret},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def student_headers(client):
    return login(client)


@pytest.fixture
def admin_headers(client):
    return login(client, "A001", "admin123")
