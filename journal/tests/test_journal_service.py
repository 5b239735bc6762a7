"""
Journal service tests - the interface used by the app screens
"""
from datetime import date, datetime
from unittest.mock import AsyncMock, patch

from journal.models.analytics import SortBy, Trend
from journal.models.day_record import DayRecord, FoodEntry
from journal.utils.errors import BackendError, ErrorCode
from journal.utils.helpers import storage_key

DAY = date(2024, 3, 5)


class TestLoadAndSave:

    async def test_missing_day_loads_defaults(self, service):
        record = await service.load_day(DAY)
        assert record == DayRecord()
        assert record.is_empty

    async def test_save_then_load(self, service, make_record):
        record = make_record(DAY, mood=7, foods=[("Eggs", 8), ("Rice", 13)], workout_done=True, workout_note="gym")
        assert await service.save_day(DAY, record)
        assert await service.load_day(DAY) == record

    async def test_save_from_mapping(self, service):
        assert await service.save_day(DAY, {"moodRating": 4, "moodNote": "tired"})
        loaded = await service.load_day(DAY)
        assert loaded.mood_rating == 4
        assert loaded.mood_note == "tired"

    async def test_invalid_mapping_is_rejected_before_storage(self, service, memory_backend):
        assert await service.save_day(DAY, {"moodRating": 11}) is False
        assert await memory_backend.get_item(storage_key(DAY)) is None

    async def test_mood_assigned_after_construction_is_rejected(self, service, memory_backend):
        record = DayRecord(mood_rating=5)
        record.mood_rating = 42

        result = await service.write_day(DAY, record)

        assert not result.ok
        assert result.error == ErrorCode.INVALID_INPUT
        assert await service.save_day(DAY, record) is False
        assert await memory_backend.get_item(storage_key(DAY)) is None

    async def test_entry_appended_out_of_order_is_stored_sorted(self, service, memory_backend):
        record = DayRecord(food_entries=[FoodEntry(id="late", name="Dinner", time=2000)])
        record.food_entries.append(FoodEntry(id="early", name="Breakfast", time=1000))

        result = await service.write_day(DAY, record)

        assert result.ok
        assert [e.id for e in result.record.food_entries] == ["early", "late"]
        assert await service.load_day(DAY) == result.record
        raw = await memory_backend.get_item(storage_key(DAY))
        assert raw.index('"early"') < raw.index('"late"')

    async def test_string_numbers_are_not_coerced(self, service, memory_backend):
        mood_as_text = {"moodRating": "7"}
        time_as_text = {"foodEntries": [{"id": "x", "name": "Tea", "time": "1000"}]}

        for payload in (mood_as_text, time_as_text):
            result = await service.write_day(DAY, payload)
            assert result.error == ErrorCode.INVALID_INPUT
        assert await memory_backend.get_item(storage_key(DAY)) is None

    async def test_save_twice_stores_same_value(self, service, memory_backend, make_record):
        record = make_record(DAY, mood=6, foods=[("Tea", 9)])
        await service.save_day(DAY, record)
        first = await memory_backend.get_item(storage_key(DAY))
        await service.save_day(DAY, record)
        assert await memory_backend.get_item(storage_key(DAY)) == first

    async def test_save_failure_leaves_other_days_alone(self, service, memory_backend, make_record):
        other = date(2024, 3, 4)
        await service.save_day(other, make_record(other, mood=5))
        with patch.object(memory_backend, "set_item", new_callable=AsyncMock) as mock:
            mock.side_effect = BackendError("full")
            assert await service.save_day(DAY, make_record(DAY, mood=9)) is False
        assert (await service.load_day(other)).mood_rating == 5
        assert (await service.load_day(DAY)).is_empty


class TestFoodEntries:

    async def test_add_keeps_entries_in_time_order(self, service):
        await service.add_food_entry(DAY, "Dinner", 19, 30)
        result = await service.add_food_entry(DAY, "Breakfast", 7, 5)

        assert result.ok
        names = [e.name for e in result.record.food_entries]
        assert names == ["Breakfast", "Dinner"]
        first = datetime.fromtimestamp(result.record.food_entries[0].time / 1000)
        assert (first.date(), first.hour, first.minute) == (DAY, 7, 5)
        assert await service.load_day(DAY) == result.record

    async def test_add_without_time_uses_now(self, service):
        result = await service.add_food_entry(DAY, "Snack")
        assert result.ok
        logged = datetime.fromtimestamp(result.record.food_entries[0].time / 1000)
        assert logged.date() == DAY

    async def test_entry_ids_are_unique(self, service):
        await service.add_food_entry(DAY, "Apple", 10, 0)
        result = await service.add_food_entry(DAY, "Apple", 10, 0)
        ids = [e.id for e in result.record.food_entries]
        assert len(set(ids)) == 2

    async def test_blank_name_rejected(self, service):
        result = await service.add_food_entry(DAY, "  ", 10, 0)
        assert not result.ok
        assert result.error == ErrorCode.INVALID_INPUT
        assert result.message == "Please enter a food name"
        assert (await service.load_day(DAY)).is_empty

    async def test_invalid_time_rejected(self, service):
        result = await service.add_food_entry(DAY, "Toast", 24, 0)
        assert result.error == ErrorCode.INVALID_INPUT
        assert result.message == "Please enter valid time"

    async def test_update_entry(self, service):
        added = await service.add_food_entry(DAY, "Pizza", 12, 0)
        entry_id = added.record.food_entries[0].id

        result = await service.update_food_entry(DAY, entry_id, "Calzone", 20, 15)

        assert result.ok
        entry = result.record.food_entries[0]
        assert (entry.id, entry.name) == (entry_id, "Calzone")

    async def test_update_unknown_entry(self, service):
        result = await service.update_food_entry(DAY, "nope", "Calzone", 20, 15)
        assert result.error == ErrorCode.NOT_FOUND

    async def test_delete_entry(self, service):
        keep = await service.add_food_entry(DAY, "Soup", 12, 0)
        drop = await service.add_food_entry(DAY, "Cake", 16, 0)
        cake_id = [e.id for e in drop.record.food_entries if e.name == "Cake"][0]

        result = await service.delete_food_entry(DAY, cake_id)

        assert result.ok
        assert result.record.food_entries == keep.record.food_entries
        assert (await service.delete_food_entry(DAY, cake_id)).error == ErrorCode.NOT_FOUND

    async def test_edit_refuses_to_overwrite_unreadable_day(self, service, memory_backend):
        await memory_backend.set_item(storage_key(DAY), "{corrupt")

        result = await service.add_food_entry(DAY, "Toast", 8, 0)

        assert result.error == ErrorCode.PARSE_FAILURE
        assert await memory_backend.get_item(storage_key(DAY)) == "{corrupt"

    async def test_edit_reports_backend_failure(self, service, memory_backend):
        with patch.object(memory_backend, "set_item", new_callable=AsyncMock) as mock:
            mock.side_effect = BackendError("full")
            result = await service.set_workout(DAY, True)
        assert result.error == ErrorCode.BACKEND_FAILURE


class TestWorkoutAndMood:

    async def test_set_workout(self, service):
        result = await service.set_workout(DAY, True, "5k run")
        assert result.ok
        loaded = await service.load_day(DAY)
        assert loaded.workout_done
        assert loaded.workout_note == "5k run"

    async def test_set_mood_keeps_note_unless_given(self, service):
        await service.set_mood(DAY, 6, "meh")
        result = await service.set_mood(DAY, 8)
        assert result.record.mood_rating == 8
        assert result.record.mood_note == "meh"

    async def test_mood_out_of_range_rejected(self, service):
        await service.set_mood(DAY, 6)
        result = await service.set_mood(DAY, 11)
        assert result.error == ErrorCode.INVALID_INPUT
        assert (await service.load_day(DAY)).mood_rating == 6

    async def test_clear_mood(self, service):
        await service.set_mood(DAY, 6)
        result = await service.set_mood(DAY, None)
        assert result.ok
        assert result.record.mood_rating is None


class TestAnalyticsFacade:

    async def test_trend_defaults_to_today(self, service, seed):
        await seed({date(2024, 3, 1): {"mood": 8}, date(2024, 2, 1): {"mood": 5}})
        trend = await service.get_month_trend()
        assert trend.trend == Trend.UP

    async def test_series_and_view(self, service, seed):
        await seed({date(2024, 2, 14): {"mood": 9}})
        points = await service.get_month_series(date(2024, 2, 1))
        assert len(points) == 29
        assert points[13].score == 9

        view = await service.get_month_view(date(2024, 2, 1))
        assert view.has_data
        assert not view.is_current_month

    async def test_food_correlations(self, service):
        await service.add_food_entry(DAY, "Pizza", 12, 0)
        await service.set_mood(DAY, 8)
        other = date(2024, 3, 6)
        await service.add_food_entry(other, "pizza", 12, 0)
        await service.add_food_entry(other, "Salad", 18, 0)
        await service.set_mood(other, 4)

        stats = await service.get_food_correlations(sort_by=SortBy.NAME)

        assert [(s.display_name, s.occurrences, s.average_score) for s in stats] == [
            ("Pizza", 2, 6.0),
            ("Salad", 1, 4.0),
        ]

    async def test_chart_view_navigation(self, service):
        view = service.month_chart_view()
        assert await view.next() is False
        assert await view.previous()
        assert view.selected_month == date(2024, 2, 1)
