"""Root conftest — shared fixtures for the qtrack test suite.

Invariants:
    - Every test gets a fresh InMemoryStore and a FixedClock at T0
    - Stored references are produced by the store, never constructed by hand
    - Settings cache is cleared around each test so env overrides never leak
"""

import pytest

from qtrack.config import get_settings
from qtrack.core import database as database_rules
from qtrack.core import task_lifecycle, task_queue
from qtrack.core.member import create_member
from qtrack.infrastructure.clock import FixedClock
from qtrack.infrastructure.memory_store import InMemoryStore
from tests.support import T0


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FixedClock(T0)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def member(store):
    return store.add(create_member("alice01", "hash$abc", "Alice", "Asia/Seoul"))


@pytest.fixture
def other_member(store):
    return store.add(create_member("bobby02", "hash$def", "Bob", "UTC"))


@pytest.fixture
def database(store, member):
    return store.add(database_rules.create_database("Work", None, member))


@pytest.fixture
def queue(store, database):
    return store.add(task_queue.create_queue("Inbox", None, database))


@pytest.fixture
def other_queue(store, database):
    return store.add(task_queue.create_queue("Later", None, database))


@pytest.fixture
def stored_task(store, queue):
    return store.add(task_lifecycle.create_task("Write report", queue))
