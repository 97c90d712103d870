"""Shared fixtures for ladder tests."""

import pytest

from ladder.recorder import MatchRecorder
from ladder.store import MemoryBackend, RatingStore


@pytest.fixture
def backend() -> MemoryBackend:
    """Create an empty in-memory backend."""
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend) -> RatingStore:
    """Create a store seeded with the default players."""
    return RatingStore(backend)


@pytest.fixture
def recorder(store: RatingStore) -> MatchRecorder:
    """Create a recorder on the seeded store."""
    return MatchRecorder(store)
