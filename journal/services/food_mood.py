"""
Food-mood correlator - average mood of the days each food was eaten.

Every stored day is scanned on each request. A day counts once per food
entry, so the same food logged three times on a day rated 8 adds three
occurrences of 8 to that food.
"""
from typing import Optional

from journal.config import get_settings
from journal.models.analytics import FoodMoodStat, SortBy
from journal.services.record_store import RecordStore
from journal.utils.helpers import parse_date_key


def filter_and_sort(
    stats: dict[str, FoodMoodStat],
    search: Optional[str] = None,
    sort_by: SortBy = SortBy.SCORE,
) -> list[FoodMoodStat]:
    """Case-insensitive substring filter, then sort by name or by best average"""
    needle = (search or "").lower()
    selected = [stat for name, stat in stats.items() if needle in name]
    if sort_by == SortBy.NAME:
        return sorted(selected, key=lambda s: s.food_name_lower)
    return sorted(selected, key=lambda s: (-s.average_score, s.food_name_lower))


class FoodMoodCorrelator:

    def __init__(self, store: RecordStore, key_prefix: Optional[str] = None):
        self.store = store
        self.key_prefix = key_prefix or get_settings().DAY_KEY_PREFIX

    async def correlate(self) -> dict[str, FoodMoodStat]:
        """Per lower-cased food name: total mood, occurrences and average"""
        keys = await self.store.list_keys(self.key_prefix)
        # Other values may share the prefix; only dated keys are days
        keys = {key for key in keys if parse_date_key(key[len(self.key_prefix):]) is not None}
        records = await self.store.get_many(keys)

        stats: dict[str, FoodMoodStat] = {}
        for record in records.values():
            if not record.mood_rating or not record.food_entries:
                continue
            for entry in record.food_entries:
                name = entry.name.lower()
                if name not in stats:
                    stats[name] = FoodMoodStat(food_name_lower=name)
                stats[name].add(record.mood_rating)
        return stats

    async def query(
        self,
        search: Optional[str] = None,
        sort_by: SortBy = SortBy.SCORE,
    ) -> list[FoodMoodStat]:
        return filter_and_sort(await self.correlate(), search, sort_by)
