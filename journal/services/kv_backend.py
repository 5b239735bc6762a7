"""
Key-value persistence backends for the record store.

The store only needs four primitives: read one key, read many keys, write one
key and list keys by prefix. Values are opaque strings. Every backend raises
BackendError for I/O failures; callers above the store never see them.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from journal.models.stored_value import StoredValue
from journal.utils.errors import BackendError


class KeyValueBackend(ABC):
    """Opaque string-to-string storage"""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def get_items(self, keys: Iterable[str]) -> dict[str, str]:
        ...

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def get_all_keys(self, prefix: str = "") -> set[str]:
        ...


class SQLKeyValueBackend(KeyValueBackend):
    """Backend over the key_value_store table, one transaction per call"""

    # Stay well under SQLite's bound-parameter limit
    BATCH_SIZE = 500

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get_item(self, key: str) -> Optional[str]:
        try:
            async with self.session_factory() as session:
                row = await session.get(StoredValue, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to read {key}: {e}", key=key) from e

    async def get_items(self, keys: Iterable[str]) -> dict[str, str]:
        keys = list(dict.fromkeys(keys))
        found: dict[str, str] = {}
        try:
            async with self.session_factory() as session:
                for i in range(0, len(keys), self.BATCH_SIZE):
                    batch = keys[i:i + self.BATCH_SIZE]
                    result = await session.execute(
                        select(StoredValue.key, StoredValue.value).where(StoredValue.key.in_(batch))
                    )
                    found.update({key: value for key, value in result})
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to read {len(keys)} keys: {e}") from e
        return found

    async def set_item(self, key: str, value: str) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    row = await session.get(StoredValue, key)
                    if row:
                        row.value = value
                    else:
                        session.add(StoredValue(key=key, value=value))
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to write {key}: {e}", key=key) from e

    async def get_all_keys(self, prefix: str = "") -> set[str]:
        query = select(StoredValue.key)
        if prefix:
            query = query.where(StoredValue.key.startswith(prefix, autoescape=True))
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return set(result.scalars().all())
        except SQLAlchemyError as e:
            raise BackendError(f"Failed to list keys with prefix {prefix!r}: {e}") from e


class InMemoryKeyValueBackend(KeyValueBackend):
    """Process-local backend, nothing survives a restart"""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = asyncio.Lock()

    async def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def get_items(self, keys: Iterable[str]) -> dict[str, str]:
        return {key: self._data[key] for key in keys if key in self._data}

    async def set_item(self, key: str, value: str) -> None:
        async with self._lock:
            self._data[key] = value

    async def get_all_keys(self, prefix: str = "") -> set[str]:
        return {key for key in self._data if key.startswith(prefix)}
