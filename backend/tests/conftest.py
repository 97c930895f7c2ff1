"""
NoteKeeper Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── clock: Deterministic millisecond clock (increments by 1 per call)
    ├── store: Empty NoteStore driven by `clock`
    ├── seeded_store: NoteStore holding the three sample notes
    ├── note_service: NoteService over `store`
    └── test_client / seeded_client: HTTPX AsyncClient for endpoint testing
"""

import itertools
import os

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SEED_SAMPLE_NOTES"] = "false"
os.environ["STRICT_NOT_FOUND"] = "true"
os.environ["SEARCH_MODE"] = "exact"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from notekeeper.seed import seed_sample_notes
from notekeeper.services.note_service import NoteService
from notekeeper.store import NoteStore

CLOCK_START = 1_700_000_000_000


@pytest.fixture
def clock():
    """
    Provides a fake clock for NoteStore.

    Every call returns the previous value + 1, so timestamps are predictable
    and strictly increasing within a test.
    """
    counter = itertools.count(CLOCK_START)
    return lambda: next(counter)


@pytest.fixture
def store(clock):
    return NoteStore(clock=clock)


@pytest.fixture
def seeded_store(clock):
    """Store preloaded with sample notes 1-3 (notes 2 and 3 are tagged)."""
    return seed_sample_notes(NoteStore(clock=clock))


@pytest.fixture
def note_service(store):
    return NoteService(store)


async def _client_for(store: NoteStore):
    from notekeeper.main import create_app

    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def test_client(store):
    """
    Provides an async HTTP test client bound to an app serving `store`.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async for client in _client_for(store):
        yield client


@pytest_asyncio.fixture
async def seeded_client(seeded_store):
    """Like test_client, but the app serves the sample notes."""
    async for client in _client_for(seeded_store):
        yield client
