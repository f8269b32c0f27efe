"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient

from bookshelf.config import APISettings
from bookshelf.main import create_app
from bookshelf.store import BookStore


class FakeClock:
    """Clock that advances one second on every reading."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        moment = self.current
        self.current += timedelta(seconds=1)
        return moment


@pytest.fixture
def clock():
    """Deterministic clock starting at 2024-01-01T00:00:00Z."""
    return FakeClock(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def id_generator():
    """Sequential book id generator."""
    counter = count(1)
    return lambda: f"book-{next(counter)}"


@pytest.fixture
def store(id_generator, clock):
    """Empty book store with deterministic ids and timestamps."""
    return BookStore(id_generator=id_generator, clock=clock)


@pytest.fixture
def settings():
    """API settings isolated from the environment."""
    return APISettings(_env_file=None)


@pytest.fixture
def app(store, settings):
    """Application serving the test store."""
    return create_app(store=store, settings=settings)


@pytest.fixture
def client(app):
    """Create test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_book_payload():
    """Sample request body for a partially read book."""
    return {
        "name": "War and Peace",
        "year": 1869,
        "author": "Leo Tolstoy",
        "summary": "Napoleonic wars through the eyes of five families",
        "publisher": "The Russian Messenger",
        "pageCount": 1225,
        "readPage": 300,
        "reading": True
    }
