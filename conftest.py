import os

# cheap hashes for tests; must be set before config is imported
os.environ.setdefault("LIBRARY_BCRYPT_ROUNDS", "4")

import pytest

from db import Store
from exceptions import StoreError
from repository import MemberRepository
from service import MemberService


class RecordingStore(Store):
    """Real store that also remembers every write statement it ran."""

    def __init__(self, db_file):
        super().__init__(db_file)
        self.writes = []

    def execute_non_query(self, sql, params=None):
        self.writes.append((sql, dict(params or {})))
        return super().execute_non_query(sql, params)

    def execute_insert(self, sql, params=None):
        self.writes.append((sql, dict(params or {})))
        return super().execute_insert(sql, params)


class FailingStore(Store):
    """Every statement fails the way an unreachable database would."""

    def __init__(self):
        super().__init__("unused.db")
        self.calls = 0

    def execute_query(self, sql, params=None):
        self.calls += 1
        raise StoreError("database is unavailable")

    def execute_non_query(self, sql, params=None):
        self.calls += 1
        raise StoreError("database is unavailable")

    def execute_insert(self, sql, params=None):
        self.calls += 1
        raise StoreError("database is unavailable")


@pytest.fixture
def store(tmp_path):
    """Fresh database file with the members table, writes recorded."""
    s = RecordingStore(tmp_path / "members.db")
    s.init_db()
    s.writes.clear()
    return s


@pytest.fixture
def repo(store):
    return MemberRepository(store)


@pytest.fixture
def service(repo):
    return MemberService(repo)


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def john(service):
    return service.register("John", "Doe", "john@example.com", "password123", 1)
