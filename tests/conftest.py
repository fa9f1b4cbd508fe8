"""Shared test fixtures for the ConnectPro test suite."""

import os
import pytest
from unittest.mock import AsyncMock, MagicMock

# Ensure settings can be imported without real env vars
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")

from config.constants import Role  # noqa: E402
from profiles.errors import ProfileExists  # noqa: E402
from profiles.models import Session  # noqa: E402


# ── Database Pool Mock ──


class FakeRecord(dict):
    """Mimics asyncpg.Record: supports both dict-style and attribute access."""
    def __getattr__(self, key):
        try:
            return self[key]
        except KeyError:
            raise AttributeError(key)


class FakeConnection:
    """Mock asyncpg connection with configurable return values."""

    def __init__(self):
        self.execute_results: list[str] = ["UPDATE 1"]
        self.fetch_results: list[list[dict]] = [[]]
        self.fetchrow_result: dict | None = None
        self.fetchval_result = None
        self.error: Exception | None = None
        self._execute_calls: list[tuple] = []
        self._fetch_calls: list[tuple] = []
        self._fetchrow_calls: list[tuple] = []
        self._fetchval_calls: list[tuple] = []

    def _maybe_raise(self):
        if self.error is not None:
            raise self.error

    async def execute(self, query, *args):
        self._execute_calls.append((query, args))
        self._maybe_raise()
        return self.execute_results[0] if self.execute_results else "UPDATE 0"

    async def fetch(self, query, *args):
        self._fetch_calls.append((query, args))
        self._maybe_raise()
        result = self.fetch_results.pop(0) if self.fetch_results else []
        return [FakeRecord(r) for r in result]

    async def fetchrow(self, query, *args):
        self._fetchrow_calls.append((query, args))
        self._maybe_raise()
        return FakeRecord(self.fetchrow_result) if self.fetchrow_result else None

    async def fetchval(self, query, *args):
        self._fetchval_calls.append((query, args))
        self._maybe_raise()
        return self.fetchval_result

    def transaction(self):
        return FakeTransaction()


class FakeTransaction:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakePool:
    """Mock asyncpg.Pool that yields a FakeConnection."""

    def __init__(self):
        self.conn = FakeConnection()

    def acquire(self):
        return FakePoolContext(self.conn)


class FakePoolContext:
    def __init__(self, conn):
        self.conn = conn

    async def __aenter__(self):
        return self.conn

    async def __aexit__(self, *args):
        pass


@pytest.fixture
def fake_pool():
    """Provide a mock database pool."""
    return FakePool()


@pytest.fixture
def fake_conn(fake_pool):
    """Direct access to the underlying FakeConnection."""
    return fake_pool.conn


# ── Collaborator fakes ──


class FakeIdentity:
    """Identity provider returning a fixed session."""

    def __init__(self, session: Session | None = None):
        self.session = session
        self.calls = 0

    async def get_current_user(self):
        self.calls += 1
        return self.session


class FakeProfileStore:
    """In-memory profile store keyed by (role, user_id)."""

    def __init__(self):
        self.records: dict[tuple[Role, str], dict] = {}
        self.calls: list[tuple] = []
        self.error: Exception | None = None

    def put(self, role: Role, user_id: str, **fields) -> dict:
        record = {"id": len(self.records) + 1, "user_id": user_id, **fields}
        self.records[(role, user_id)] = record
        return record

    async def exists(self, role, user_id):
        self.calls.append(("exists", role, user_id))
        if self.error:
            raise self.error
        return (role, user_id) in self.records

    async def fetch(self, role, user_id):
        self.calls.append(("fetch", role, user_id))
        if self.error:
            raise self.error
        return self.records.get((role, user_id))

    async def create(self, role, user_id, fields):
        self.calls.append(("create", role, user_id))
        if (role, user_id) in self.records:
            raise ProfileExists(f"{role.value} profile already exists")
        return self.put(role, user_id, **fields)

    async def update(self, role, user_id, fields):
        self.calls.append(("update", role, user_id))
        record = self.records.get((role, user_id))
        if record is None:
            return None
        record.update(fields)
        return record


@pytest.fixture
def user_session():
    return Session(user_id="u1", email="u1@example.com")


@pytest.fixture
def fake_identity(user_session):
    """Identity provider for a logged-in user."""
    return FakeIdentity(user_session)


@pytest.fixture
def fake_store():
    return FakeProfileStore()


# ── Web app ──


@pytest.fixture
def mock_auth_client():
    """Mock SupabaseAuthClient with all calls as AsyncMock."""
    client = MagicMock()
    client.sign_in = AsyncMock(return_value={
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "user": {"id": "u1", "email": "u1@example.com"},
    })
    client.sign_up = AsyncMock(return_value={"id": "u1", "email": "u1@example.com"})
    client.sign_out = AsyncMock(return_value=None)
    client.get_user = AsyncMock(return_value={"id": "u1", "email": "u1@example.com"})
    client.refresh = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def app(fake_identity, fake_store, mock_auth_client):
    from web.app import create_app
    return create_app(
        identity=fake_identity,
        profile_store=fake_store,
        auth_client=mock_auth_client,
    )


@pytest.fixture
def client(app):
    return app.test_client()
