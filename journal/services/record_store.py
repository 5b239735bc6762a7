"""
Record store - durable mapping from a date key to a DayRecord.

Reads fail softly: a missing key, an unreadable value and a backend error all
come back as None (or are skipped in bulk reads) and are logged. Writes report
success as a boolean. Writes to the same key are serialized so concurrent
saves of one day cannot interleave.
"""
import asyncio
import json
from collections import defaultdict
from typing import Iterable, Optional

from pydantic import ValidationError

from journal.config import get_settings
from journal.models.day_record import DayRecord, RECORD_VERSION
from journal.services.kv_backend import KeyValueBackend
from journal.utils.errors import BackendError, RecordParseError
from journal.utils.helpers import safe_json_parse
from journal.utils.logger import get_logger

logger = get_logger(__name__)


def encode_record(record: DayRecord) -> str:
    """Serialize a record to its stored JSON form (deterministic)"""
    payload = record.model_dump(mode="json", by_alias=True)
    payload["version"] = RECORD_VERSION
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def decode_record(key: str, raw: str) -> DayRecord:
    """Parse a stored value, accepting the unversioned legacy layout"""
    payload = safe_json_parse(raw)
    if not isinstance(payload, dict):
        raise RecordParseError(f"Stored value for {key} is not a JSON object", key=key)

    version = payload.pop("version", None)
    if version is not None and version != RECORD_VERSION:
        logger.debug(f"Reading {key} written with record version {version}")

    # Legacy writers stored 0 / null for "no rating"
    if not payload.get("moodRating"):
        payload["moodRating"] = None
    for field in ("workoutNote", "moodNote"):
        if payload.get(field) is None:
            payload.pop(field, None)
    if payload.get("foodEntries") is None:
        payload.pop("foodEntries", None)

    try:
        return DayRecord.model_validate(payload)
    except ValidationError as e:
        raise RecordParseError(f"Stored value for {key} is malformed: {e}", key=key) from e


class RecordStore:
    """get / put / list over a key-value backend, with an optional cache"""

    def __init__(self, backend: KeyValueBackend, cache_enabled: Optional[bool] = None):
        self.backend = backend
        if cache_enabled is None:
            cache_enabled = get_settings().RECORD_CACHE_ENABLED
        self.cache_enabled = cache_enabled
        self._cache: dict[str, DayRecord] = {}
        self._write_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def get(self, key: str) -> Optional[DayRecord]:
        """Load the record stored under key, or None"""
        try:
            return await self.fetch(key)
        except BackendError as e:
            logger.error(f"Backend read failed for {key}: {e.message}")
        except RecordParseError as e:
            logger.warning(e.message)
        return None

    async def fetch(self, key: str) -> Optional[DayRecord]:
        """Like get, but raises BackendError / RecordParseError instead of hiding them.

        Used by read-modify-write edits, which must not mistake an unreadable
        day for an empty one.
        """
        if self.cache_enabled and key in self._cache:
            return self._cache[key].model_copy(deep=True)

        raw = await self.backend.get_item(key)
        if raw is None:
            return None
        record = decode_record(key, raw)
        self._remember(key, record)
        return record.model_copy(deep=True)

    async def get_many(self, keys: Iterable[str]) -> dict[str, DayRecord]:
        """Load every readable record among keys; the rest are left out"""
        keys = list(dict.fromkeys(keys))
        records: dict[str, DayRecord] = {}
        missing = []
        for key in keys:
            if self.cache_enabled and key in self._cache:
                records[key] = self._cache[key].model_copy(deep=True)
            else:
                missing.append(key)
        if not missing:
            return records

        try:
            raw_values = await self.backend.get_items(missing)
        except BackendError as e:
            logger.error(f"Backend bulk read failed: {e.message}")
            return records

        for key, raw in raw_values.items():
            try:
                record = decode_record(key, raw)
            except RecordParseError as e:
                logger.warning(e.message)
                continue
            self._remember(key, record)
            records[key] = record.model_copy(deep=True)
        return records

    async def put(self, key: str, record: DayRecord) -> bool:
        """Persist the full record under key, replacing what was there"""
        value = encode_record(record)
        async with self._write_locks[key]:
            try:
                await self.backend.set_item(key, value)
            except BackendError as e:
                logger.error(f"Backend write failed for {key}: {e.message}")
                # Next read goes back to the backend
                self._cache.pop(key, None)
                return False
            self._remember(key, record)
        return True

    async def list_keys(self, prefix: str) -> set[str]:
        """Every stored key starting with prefix, in no particular order"""
        try:
            return await self.backend.get_all_keys(prefix)
        except BackendError as e:
            logger.error(f"Backend key listing failed: {e.message}")
            return set()

    def _remember(self, key: str, record: DayRecord) -> None:
        if self.cache_enabled:
            self._cache[key] = record.model_copy(deep=True)
