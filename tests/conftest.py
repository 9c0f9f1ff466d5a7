"""
Shared fixtures: fake OpenAI clients, throwaway stores and databases.
"""
import os
import sys
from types import SimpleNamespace

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config  # noqa: E402
import database  # noqa: E402
from gateway import DelegationGateway  # noqa: E402
from local_store import LocalHistoryStore  # noqa: E402


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    def __init__(self, completions):
        self.chat = SimpleNamespace(completions=completions)
        self.closed = False

    async def close(self):
        self.closed = True


class FakeClientFactory:
    """Stands in for AsyncOpenAI; remembers every client it built."""

    def __init__(self, content=None, error=None):
        self.completions = FakeCompletions(content, error)
        self.clients = []
        self.kwargs = []

    def __call__(self, **kwargs):
        self.kwargs.append(kwargs)
        client = FakeClient(self.completions)
        self.clients.append(client)
        return client

    @property
    def calls(self):
        return self.completions.calls


@pytest.fixture(autouse=True)
def no_default_key(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", None)


@pytest.fixture
def fake_openai():
    """Build a gateway whose client returns the given content or raises the given error."""
    def _make(content=None, error=None):
        factory = FakeClientFactory(content, error)
        return DelegationGateway(model="test-model", timeout=5, client_factory=factory), factory
    return _make


@pytest.fixture
def store(tmp_path):
    return LocalHistoryStore(str(tmp_path / "history"), "user-1")


@pytest.fixture
def local_store_dir(tmp_path, monkeypatch):
    path = tmp_path / "local"
    monkeypatch.setattr(config, "LOCAL_STORE_DIR", str(path))
    return path


@pytest.fixture
def test_engine(tmp_path, monkeypatch):
    """Point the database module at a fresh SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(
        database, "SessionLocal", sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    )
    return engine


@pytest_asyncio.fixture
async def db(test_engine):
    await database.init_database()
    yield database
    await test_engine.dispose()
