"""
Shared fixtures: stores, settings and a ledger engine with predictable PINs.
"""

import logging
import random

import pytest

from card_ledger.core.config import Settings
from card_ledger.services.card_generator import CardGenerator
from card_ledger.services.ledger import LedgerEngine
from card_ledger.store.memory import InMemoryAccountStore
from card_ledger.store.sql import open_store

FIRST_CARD = "4000000000000010"
SECOND_CARD = "4000000000000028"


class FixedRandom(random.Random):
    """Random source that always draws the same number."""

    def __init__(self, value: int):
        super().__init__()
        self.value = value

    def randrange(self, *args, **kwargs):
        return self.value


@pytest.fixture
def settings():
    """Settings with defaults only, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def sql_store():
    """SQLAlchemy store on a fresh in-memory SQLite database."""
    store = open_store("sqlite://")
    yield store
    store.close()


@pytest.fixture
def memory_store():
    return InMemoryAccountStore()


@pytest.fixture(params=["sql", "memory"])
def store(request):
    """Each store implementation in turn."""
    if request.param == "sql":
        return request.getfixturevalue("sql_store")
    return request.getfixturevalue("memory_store")


@pytest.fixture
def generator():
    """Card generator whose PINs are always 1234."""
    return CardGenerator(rng=FixedRandom(1234))


@pytest.fixture
def ledger(store, generator, settings):
    return LedgerEngine(store, generator=generator, settings=settings)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo setup_logging() calls made by a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
