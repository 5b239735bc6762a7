"""
Derived analytics models - computed on demand, never stored
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, computed_field
from pydantic.alias_generators import to_camel

from journal.utils.helpers import display_food_name, format_average


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    SAME = "same"


class SortBy(str, Enum):
    NAME = "name"
    SCORE = "score"


class AnalyticsModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class MonthlyAverage(AnalyticsModel):
    """Average mood over the rated days of a date range"""
    average: Optional[float] = None
    sample_count: int = 0


class MoodTrend(AnalyticsModel):
    current: MonthlyAverage
    previous: MonthlyAverage
    trend: Optional[Trend] = None

    @computed_field(alias="currentAverage")
    @property
    def current_average(self) -> Optional[float]:
        return self.current.average

    @computed_field(alias="previousAverage")
    @property
    def previous_average(self) -> Optional[float]:
        return self.previous.average

    @computed_field(alias="currentDisplay")
    @property
    def current_display(self) -> str:
        return format_average(self.current.average)

    @computed_field(alias="previousDisplay")
    @property
    def previous_display(self) -> str:
        return format_average(self.previous.average)


class DailySeriesPoint(AnalyticsModel):
    day_of_month: str  # "01".."31"
    score: int  # 0 means no mood logged that day


class MonthSeries(AnalyticsModel):
    """Chart data for one month plus the display metadata around it"""
    month: str  # yyyy-MM
    label: str  # e.g. "March 2024"
    points: list[DailySeriesPoint]
    y_axis_min: int
    y_axis_max: int
    has_data: bool
    is_current_month: bool


class FoodMoodStat(AnalyticsModel):
    food_name_lower: str
    total_score: int = 0
    occurrences: int = 0
    average_score: float = 0.0

    @computed_field(alias="displayName")
    @property
    def display_name(self) -> str:
        return display_food_name(self.food_name_lower)

    @computed_field(alias="scoreBand")
    @property
    def score_band(self) -> str:
        if self.average_score >= 7:
            return "high"
        if self.average_score >= 5:
            return "medium"
        return "low"

    def add(self, score: int) -> None:
        self.total_score += score
        self.occurrences += 1
        self.average_score = self.total_score / self.occurrences
