"""
Input validation utilities
"""
from typing import Optional

from journal.utils.errors import InvalidInputError

MOOD_MIN = 1
MOOD_MAX = 10


def validate_mood_rating(rating: Optional[int]) -> Optional[int]:
    """Validate a mood rating is unset or an integer in [1, 10]"""
    if rating is None:
        return None
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidInputError(f"Mood rating must be an integer, got {rating!r}")
    if not MOOD_MIN <= rating <= MOOD_MAX:
        raise InvalidInputError(f"Mood rating must be between {MOOD_MIN} and {MOOD_MAX}, got {rating}")
    return rating


def validate_food_name(name: str) -> str:
    """Validate a food name is not blank"""
    if not isinstance(name, str) or not name.strip():
        raise InvalidInputError("Please enter a food name")
    return name


def validate_entry_time(time_ms: int) -> int:
    """Validate an epoch-millis timestamp"""
    if isinstance(time_ms, bool) or not isinstance(time_ms, int) or time_ms < 0:
        raise InvalidInputError(f"Malformed entry time: {time_ms!r}")
    return time_ms


def validate_time_of_day(hour: int, minute: int) -> tuple[int, int]:
    """Validate hour/minute entered for a food entry"""
    valid = (
        isinstance(hour, int) and not isinstance(hour, bool) and 0 <= hour <= 23
        and isinstance(minute, int) and not isinstance(minute, bool) and 0 <= minute <= 59
    )
    if not valid:
        raise InvalidInputError("Please enter valid time")
    return hour, minute
