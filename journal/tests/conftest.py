"""
Test fixtures - file-backed SQLite per test, in-memory backend, HTTP client
"""
from datetime import date

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from journal.database import build_engine, create_tables
from journal.main import app
from journal.api.dependencies import get_journal_service
from journal.models.day_record import DayRecord, FoodEntry
from journal.services.journal_service import JournalService
from journal.services.kv_backend import InMemoryKeyValueBackend, SQLKeyValueBackend
from journal.services.record_store import RecordStore
from journal.utils.helpers import epoch_millis, storage_key

TODAY = date(2024, 3, 20)


@pytest_asyncio.fixture()
async def session_factory(tmp_path):
    """Fresh SQLite database file for each test"""
    engine = build_engine(f"sqlite:///{tmp_path / 'journal.db'}")
    await create_tables(engine)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture()
def sql_backend(session_factory):
    return SQLKeyValueBackend(session_factory)


@pytest.fixture()
def sql_store(sql_backend):
    return RecordStore(sql_backend, cache_enabled=False)


@pytest.fixture()
def memory_backend():
    return InMemoryKeyValueBackend()


@pytest.fixture()
def store(memory_backend):
    return RecordStore(memory_backend, cache_enabled=False)


@pytest.fixture()
def today():
    return TODAY


@pytest.fixture()
def service(store):
    return JournalService(store, clock=lambda: TODAY)


@pytest.fixture()
def make_record():
    """Build a DayRecord from a mood and a list of (food name, hour) pairs"""

    def _make(day: date, mood=None, foods=(), **kwargs) -> DayRecord:
        entries = [
            FoodEntry(id=f"{day.isoformat()}-{i}", name=name, time=epoch_millis(day, hour, 0))
            for i, (name, hour) in enumerate(foods)
        ]
        return DayRecord(food_entries=entries, mood_rating=mood, **kwargs)

    return _make


@pytest.fixture()
def seed(store, make_record):
    """Save records straight into the store: await seed({day: {"mood": 8, ...}})"""

    async def _seed(days: dict) -> None:
        for day, fields in days.items():
            assert await store.put(storage_key(day), make_record(day, **fields))

    return _seed


@pytest_asyncio.fixture()
async def client(sql_store):
    """httpx AsyncClient bound to the FastAPI app, backed by the test database"""
    test_service = JournalService(sql_store, clock=lambda: TODAY)
    app.dependency_overrides[get_journal_service] = lambda: test_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()
