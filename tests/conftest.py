"""
Shared fixtures for the JobTrack test suite.

MongoDB is replaced by mongomock-motor and outbound HTTP by an
httpx.MockTransport, so no test touches the network.
"""

import os

# Set before importing jobtrack so config picks them up
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DATABASE_NAME", "jobtrack_test")

import httpx
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from jobtrack import database
from jobtrack.main import app
from jobtrack.utils.http import get_http_client


@pytest.fixture
def db(monkeypatch):
    """Fresh in-memory database per test."""
    mock_db = AsyncMongoMockClient()["jobtrack_test"]
    monkeypatch.setattr(database, "db", mock_db)
    return mock_db


@pytest.fixture
def client(db):
    """FastAPI test client. Startup is not run, so no real Mongo connection."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def alice():
    return {"X-User-Id": "user-alice"}


@pytest.fixture
def bob():
    return {"X-User-Id": "user-bob"}


@pytest.fixture
def job_payload():
    return {
        "companyName": "Acme",
        "jobTitle": "Engineer",
        "location": "Berlin",
        "salaryMin": 60000,
        "salaryMax": 80000,
        "applicationDate": "2024-03-15",
        "notes": "Applied through the careers page",
    }


@pytest.fixture
def mock_http():
    """
    Route outbound HTTP through a handler chosen by the test.

    Usage: `mock_http(handler)` where handler takes an httpx.Request and
    returns an httpx.Response. Returns the list of requests seen.
    """
    seen = []

    def install(handler):
        def record(request):
            seen.append(request)
            return handler(request)

        async def override():
            async with httpx.AsyncClient(transport=httpx.MockTransport(record)) as http:
                yield http

        app.dependency_overrides[get_http_client] = override
        return seen

    yield install
    app.dependency_overrides.pop(get_http_client, None)
