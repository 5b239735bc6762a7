"""
Mood trend analyzer - this month's average mood against last month's
"""
from datetime import date
from typing import Optional

from journal.models.analytics import MonthlyAverage, MoodTrend, Trend
from journal.services.record_store import RecordStore
from journal.utils.date_range import days_between, month_bounds, previous_month_bounds
from journal.utils.helpers import storage_key


async def average_mood(store: RecordStore, start: date, end: date) -> MonthlyAverage:
    """Average rating over the rated days between start and end, inclusive"""
    keys = [storage_key(day) for day in days_between(start, end)]
    records = await store.get_many(keys)
    ratings = [r.mood_rating for r in records.values() if r.mood_rating]
    if not ratings:
        return MonthlyAverage(average=None, sample_count=0)
    return MonthlyAverage(average=sum(ratings) / len(ratings), sample_count=len(ratings))


def classify_trend(current: Optional[float], previous: Optional[float]) -> Optional[Trend]:
    """Direction of change; None unless both averages exist"""
    if current is None or previous is None:
        return None
    if current > previous:
        return Trend.UP
    if current < previous:
        return Trend.DOWN
    return Trend.SAME


class MoodTrendAnalyzer:

    def __init__(self, store: RecordStore):
        self.store = store

    async def analyze(self, reference: date) -> MoodTrend:
        """Compare reference's month (up to reference) with the full previous month"""
        month_start, month_end = month_bounds(reference)
        current = await average_mood(self.store, month_start, min(month_end, reference))

        prev_start, prev_end = previous_month_bounds(reference)
        previous = await average_mood(self.store, prev_start, prev_end)

        return MoodTrend(
            current=current,
            previous=previous,
            trend=classify_trend(current.average, previous.average),
        )
