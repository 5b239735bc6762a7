"""
General helper utilities
"""
import json
from datetime import date, datetime, time
from typing import Any, Optional

from journal.config import get_settings

DATE_KEY_FORMAT = "%Y-%m-%d"


def today() -> date:
    """Current date in the local calendar"""
    return date.today()


def date_key(day: date) -> str:
    """Canonical yyyy-MM-dd key of a calendar day"""
    return day.strftime(DATE_KEY_FORMAT)


def storage_key(day: date) -> str:
    """Backend key under which the day's record is stored"""
    return f"{get_settings().DAY_KEY_PREFIX}{date_key(day)}"


def parse_date_key(value: str) -> Optional[date]:
    """Parse a yyyy-MM-dd string (optionally carrying the storage prefix)"""
    prefix = get_settings().DAY_KEY_PREFIX
    if value.startswith(prefix):
        value = value[len(prefix):]
    try:
        return datetime.strptime(value, DATE_KEY_FORMAT).date()
    except ValueError:
        return None


def epoch_millis(day: date, hour: int, minute: int) -> int:
    """Local timestamp of hour:minute on day, in epoch milliseconds"""
    moment = datetime.combine(day, time(hour, minute))
    return int(moment.timestamp() * 1000)


def format_average(value: Optional[float]) -> str:
    """Format an average for display, one decimal place"""
    if value is None:
        return "-"
    return f"{value:.1f}"


def display_food_name(name_lower: str) -> str:
    """Presentable form of a lower-cased food name"""
    return name_lower[:1].upper() + name_lower[1:]


def safe_json_parse(text: str, default: Any = None) -> Any:
    """Safely parse JSON string"""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return default
