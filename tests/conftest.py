"""Pytest configuration and fixtures for snake arcade tests."""

import random
from datetime import datetime

import pytest

from snake_arcade.session import Session
from snake_arcade.storage import MemoryStore, PersistenceStore

FIXED_NOW = datetime(2024, 3, 9, 14, 5, 30)


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def backend():
    return MemoryStore()


@pytest.fixture
def store(backend):
    """PersistenceStore over an in-memory backend with a frozen clock."""
    return PersistenceStore(backend, clock=lambda: FIXED_NOW)


@pytest.fixture
def session(store, seeded_rng):
    return Session(store, rng=seeded_rng)
