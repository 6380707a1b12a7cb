"""
Shared fixtures.

Everything runs against the in-memory store unless a test needs real
files, in which case it uses pytest's tmp_path.
"""

import pytest

from fitcrm.core.clients.ids import TimestampIdGenerator
from fitcrm.core.clients.models import ClientCandidate
from fitcrm.infrastructure.storage.client import MockKeyValueStore
from fitcrm.infrastructure.storage.repository import ClientRepository


class FrozenClock:
    """A clock that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def store() -> MockKeyValueStore:
    return MockKeyValueStore()


@pytest.fixture
def repository(store, frozen_clock) -> ClientRepository:
    """Repository whose clock never advances, to force id collisions."""
    return ClientRepository(store, id_generator=TimestampIdGenerator(clock=frozen_clock))


@pytest.fixture
def jane() -> ClientCandidate:
    """The minimal valid client."""
    return ClientCandidate(
        full_name="Jane Doe",
        email="jane@example.com",
        start_date="2024-01-01",
    )


@pytest.fixture
def marcus() -> ClientCandidate:
    """A client with every optional field filled in."""
    return ClientCandidate(
        full_name="Marcus Webb",
        email="marcus.webb@example.org",
        start_date="2024-03-15",
        age=42,
        gender="Male",
        phone="555-0142",
        fitness_goal="Run a sub-4 hour marathon",
    )
