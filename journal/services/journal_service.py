"""
Journal service - the interface the app screens call into.

Nothing here raises to the caller: reads fall back to defaults, writes report
a boolean or a WriteResult carrying an ErrorCode.
"""
import asyncio
import uuid
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from journal.models.analytics import DailySeriesPoint, FoodMoodStat, MonthSeries, MoodTrend, SortBy
from journal.models.day_record import DayRecord, FoodEntry
from journal.services.chart_series import ChartSeriesBuilder
from journal.services.food_mood import FoodMoodCorrelator
from journal.services.month_view import MonthChartView
from journal.services.mood_trend import MoodTrendAnalyzer
from journal.services.record_store import RecordStore
from journal.utils.errors import (
    ErrorCode,
    JournalError,
    RecordNotFoundError,
)
from journal.utils.helpers import epoch_millis, storage_key
from journal.utils.helpers import today as local_today
from journal.utils.logger import get_logger
from journal.utils.validators import (
    validate_food_name,
    validate_mood_rating,
    validate_time_of_day,
)

logger = get_logger(__name__)


@dataclass
class WriteResult:
    ok: bool
    record: Optional[DayRecord] = None
    error: Optional[ErrorCode] = None
    message: Optional[str] = None

    @classmethod
    def failed(cls, error: JournalError) -> "WriteResult":
        return cls(ok=False, error=error.code, message=error.message)


class JournalService:

    def __init__(self, store: RecordStore, clock: Callable[[], date] = local_today):
        self.store = store
        self.clock = clock
        self.trend_analyzer = MoodTrendAnalyzer(store)
        self.series_builder = ChartSeriesBuilder(store)
        self.correlator = FoodMoodCorrelator(store)
        self._edit_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    # --- Day records ---

    async def load_day(self, day: date) -> DayRecord:
        """The day's record, or an empty one when nothing readable is stored"""
        record = await self.store.get(storage_key(day))
        return record if record is not None else DayRecord()

    async def save_day(self, day: date, record: Union[DayRecord, Mapping[str, Any]]) -> bool:
        """Replace the day's record; False when rejected or not persisted"""
        return (await self.write_day(day, record)).ok

    async def write_day(self, day: date, record: Union[DayRecord, Mapping[str, Any]]) -> WriteResult:
        """Replace the day's record, reporting why a write was refused.

        Records are validated again even when already built, since fields
        assigned after construction bypass the model validators.
        """
        key = storage_key(day)
        payload = record.model_dump() if isinstance(record, DayRecord) else record
        try:
            validated = DayRecord.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Rejected record for {key}: {e}")
            return WriteResult(ok=False, error=ErrorCode.INVALID_INPUT, message=str(e))

        if not await self.store.put(key, validated):
            return WriteResult(
                ok=False,
                error=ErrorCode.BACKEND_FAILURE,
                message=f"Could not save {key}",
            )
        return WriteResult(ok=True, record=validated)

    # --- Analytics ---

    async def get_month_trend(self, reference: Optional[date] = None) -> MoodTrend:
        return await self.trend_analyzer.analyze(reference or self.clock())

    async def get_month_series(self, month: date) -> list[DailySeriesPoint]:
        return await self.series_builder.build(month)

    async def get_month_view(self, month: date, today: Optional[date] = None) -> MonthSeries:
        return await self.series_builder.build_month(month, today or self.clock())

    async def get_food_correlations(
        self,
        search: Optional[str] = None,
        sort_by: SortBy = SortBy.SCORE,
    ) -> list[FoodMoodStat]:
        return await self.correlator.query(search, sort_by)

    def month_chart_view(self, selected_month: Optional[date] = None) -> MonthChartView:
        return MonthChartView(self.series_builder, clock=self.clock, selected_month=selected_month)

    # --- Day editing ---

    async def add_food_entry(
        self,
        day: date,
        name: str,
        hour: Optional[int] = None,
        minute: Optional[int] = None,
    ) -> WriteResult:
        """Log a food at hour:minute on day (now's time of day when omitted)"""
        def change(record: DayRecord) -> DayRecord:
            entry = FoodEntry(
                id=uuid.uuid4().hex,
                name=validate_food_name(name),
                time=self._entry_time(day, hour, minute),
            )
            return record.model_copy(update={"food_entries": [*record.food_entries, entry]})

        return await self._edit(day, change)

    async def update_food_entry(
        self,
        day: date,
        entry_id: str,
        name: str,
        hour: int,
        minute: int,
    ) -> WriteResult:
        def change(record: DayRecord) -> DayRecord:
            if record.find_entry(entry_id) is None:
                raise RecordNotFoundError(f"No food entry {entry_id} on {day}", key=entry_id)
            updated = FoodEntry(
                id=entry_id,
                name=validate_food_name(name),
                time=self._entry_time(day, hour, minute),
            )
            entries = [updated if e.id == entry_id else e for e in record.food_entries]
            return record.model_copy(update={"food_entries": entries})

        return await self._edit(day, change)

    async def delete_food_entry(self, day: date, entry_id: str) -> WriteResult:
        def change(record: DayRecord) -> DayRecord:
            if record.find_entry(entry_id) is None:
                raise RecordNotFoundError(f"No food entry {entry_id} on {day}", key=entry_id)
            entries = [e for e in record.food_entries if e.id != entry_id]
            return record.model_copy(update={"food_entries": entries})

        return await self._edit(day, change)

    async def set_workout(self, day: date, done: bool, note: str = "") -> WriteResult:
        return await self._edit(
            day,
            lambda record: record.model_copy(update={"workout_done": done, "workout_note": note}),
        )

    async def set_mood(self, day: date, rating: Optional[int], note: Optional[str] = None) -> WriteResult:
        def change(record: DayRecord) -> DayRecord:
            update = {"mood_rating": validate_mood_rating(rating)}
            if note is not None:
                update["mood_note"] = note
            return record.model_copy(update=update)

        return await self._edit(day, change)

    # --- Helpers ---

    def _entry_time(self, day: date, hour: Optional[int], minute: Optional[int]) -> int:
        if hour is None or minute is None:
            now = datetime.now()
            hour = now.hour if hour is None else hour
            minute = now.minute if minute is None else minute
        validate_time_of_day(hour, minute)
        return epoch_millis(day, hour, minute)

    async def _edit(self, day: date, change: Callable[[DayRecord], DayRecord]) -> WriteResult:
        """Read-modify-write one day under its edit lock"""
        key = storage_key(day)
        async with self._edit_locks[key]:
            try:
                current = await self.store.fetch(key) or DayRecord()
                # model_copy skips validation; re-validate the edited record
                updated = DayRecord.model_validate(change(current).model_dump())
            except JournalError as e:
                logger.warning(f"Edit of {key} failed: {e.message}")
                return WriteResult.failed(e)
            except ValidationError as e:
                logger.warning(f"Edit of {key} rejected: {e}")
                return WriteResult(ok=False, error=ErrorCode.INVALID_INPUT, message=str(e))

            if not await self.store.put(key, updated):
                return WriteResult(
                    ok=False,
                    error=ErrorCode.BACKEND_FAILURE,
                    message=f"Could not save {key}",
                )
            return WriteResult(ok=True, record=updated)
