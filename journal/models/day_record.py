"""
Day record model - one journal page per calendar day
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from journal.utils.validators import (
    validate_entry_time,
    validate_food_name,
    validate_mood_rating,
)

# Bumped whenever the stored JSON layout changes
RECORD_VERSION = 1


class FoodEntry(BaseModel):
    """A single food intake event"""
    id: str = Field(min_length=1)
    name: str
    time: int = Field(strict=True)  # epoch milliseconds

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_food_name(value)

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: int) -> int:
        return validate_entry_time(value)


class DayRecord(BaseModel):
    """Food, workout and mood logged for one day.

    Serialized with camelCase field names (foodEntries, workoutDone,
    workoutNote, moodRating, moodNote). Food entries are always kept sorted
    by time.
    """
    food_entries: list[FoodEntry] = Field(default_factory=list)
    workout_done: bool = False
    workout_note: str = ""
    mood_rating: Optional[int] = Field(default=None, strict=True)
    mood_note: str = ""

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("mood_rating")
    @classmethod
    def _check_mood(cls, value: Optional[int]) -> Optional[int]:
        return validate_mood_rating(value)

    @model_validator(mode="after")
    def _order_entries(self) -> "DayRecord":
        ids = [entry.id for entry in self.food_entries]
        if len(ids) != len(set(ids)):
            raise ValueError("Food entry ids must be unique within a day")
        self.food_entries = sorted(self.food_entries, key=lambda entry: entry.time)
        return self

    @property
    def is_empty(self) -> bool:
        return not (
            self.food_entries
            or self.workout_done
            or self.workout_note
            or self.mood_rating
            or self.mood_note
        )

    def find_entry(self, entry_id: str) -> Optional[FoodEntry]:
        for entry in self.food_entries:
            if entry.id == entry_id:
                return entry
        return None
