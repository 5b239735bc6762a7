"""
FastAPI dependencies - one shared journal service per process
"""
from functools import lru_cache

from journal.config import get_settings
from journal.database import AsyncSessionLocal
from journal.services.journal_service import JournalService
from journal.services.kv_backend import InMemoryKeyValueBackend, KeyValueBackend, SQLKeyValueBackend
from journal.services.record_store import RecordStore


def build_backend(kind: str) -> KeyValueBackend:
    if kind == "sql":
        return SQLKeyValueBackend(AsyncSessionLocal)
    if kind == "memory":
        return InMemoryKeyValueBackend()
    raise ValueError(f"Unknown STORAGE_BACKEND: {kind!r} (expected 'sql' or 'memory')")


@lru_cache()
def get_journal_service() -> JournalService:
    settings = get_settings()
    store = RecordStore(build_backend(settings.STORAGE_BACKEND), settings.RECORD_CACHE_ENABLED)
    return JournalService(store)
