"""
Chart series builder - one mood point per day of a month
"""
import math
from datetime import date

from journal.models.analytics import DailySeriesPoint, MonthSeries
from journal.services.record_store import RecordStore
from journal.utils.date_range import days_between, month_bounds, same_month
from journal.utils.helpers import storage_key
from journal.utils.validators import MOOD_MAX, MOOD_MIN

NO_DATA = 0


def plotted_points(points: list[DailySeriesPoint]) -> list[DailySeriesPoint]:
    """Points that carry a rating; the 0 sentinels are never drawn"""
    return [p for p in points if p.score != NO_DATA]


def axis_bounds(points: list[DailySeriesPoint]) -> tuple[int, int]:
    """Y-axis range for the rated points, padded by one and kept inside [1, 10]"""
    scores = [p.score for p in plotted_points(points)]
    low = min(scores) if scores else MOOD_MIN
    high = max(scores) if scores else MOOD_MAX
    return max(MOOD_MIN, math.floor(low - 1)), min(MOOD_MAX, math.ceil(high + 1))


class ChartSeriesBuilder:

    def __init__(self, store: RecordStore):
        self.store = store

    async def build(self, month: date) -> list[DailySeriesPoint]:
        """Every day of month's calendar month, score 0 where nothing was rated"""
        first, last = month_bounds(month)
        days = days_between(first, last)
        records = await self.store.get_many(storage_key(day) for day in days)

        points = []
        for day in days:
            record = records.get(storage_key(day))
            score = record.mood_rating if record and record.mood_rating else NO_DATA
            points.append(DailySeriesPoint(day_of_month=day.strftime("%d"), score=score))
        return points

    async def build_month(self, month: date, today: date) -> MonthSeries:
        points = await self.build(month)
        y_min, y_max = axis_bounds(points)
        return MonthSeries(
            month=month.strftime("%Y-%m"),
            label=month.strftime("%B %Y"),
            points=points,
            y_axis_min=y_min,
            y_axis_max=y_max,
            has_data=bool(plotted_points(points)),
            is_current_month=same_month(month, today),
        )
