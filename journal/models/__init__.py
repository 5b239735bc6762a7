from journal.models.stored_value import StoredValue
from journal.models.day_record import DayRecord, FoodEntry, RECORD_VERSION
from journal.models.analytics import (
    DailySeriesPoint,
    FoodMoodStat,
    MonthlyAverage,
    MonthSeries,
    MoodTrend,
    SortBy,
    Trend,
)

__all__ = [
    "StoredValue",
    "DayRecord",
    "FoodEntry",
    "RECORD_VERSION",
    "DailySeriesPoint",
    "FoodMoodStat",
    "MonthlyAverage",
    "MonthSeries",
    "MoodTrend",
    "SortBy",
    "Trend",
]
