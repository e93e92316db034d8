"""
- Provide a fresh in-memory GameStore per test (seeded rng so hints are predictable)
- Override the API's get_store dependency so routes use that store
- Provide a client fixture (TestClient(app)) that already has the override applied
- Never touch the network: random.org calls fail fast unless a test fakes them
"""
import os
import random

import pytest
import requests

from fastapi.testclient import TestClient

# Keep test runs quiet and fast regardless of a developer's local .env
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("RANDOM_BACKOFF", "0")

from mastermind import random_client
from mastermind.main import app, get_store
from mastermind.store import GameStore


@pytest.fixture(autouse=True)
def _no_network(monkeypatch):
    """Any real HTTP call during tests is a bug; make it look like a network failure."""
    def _offline(*args, **kwargs):
        raise requests.ConnectionError("network disabled in tests")

    monkeypatch.setattr(random_client.requests, "get", _offline)
    monkeypatch.setattr(random_client.time, "sleep", lambda seconds: None)


@pytest.fixture
def store() -> GameStore:
    return GameStore(rng=random.Random(1234))


@pytest.fixture(autouse=True)
def override_dep(store):
    """Force the app to use our test store for every request."""
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    # This client talks to the FastAPI app in-process.
    return TestClient(app)
