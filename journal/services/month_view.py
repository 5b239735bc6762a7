"""
Month chart view - which month the mood chart shows, and keeping it fresh.

Navigation never goes past the current calendar month. Loads can overlap when
the month changes quickly; only the most recently requested load may update
the view, older responses are dropped when they arrive.
"""
import itertools
from datetime import date
from typing import Callable, Optional

from journal.models.analytics import MonthSeries
from journal.services.chart_series import ChartSeriesBuilder
from journal.utils.date_range import add_months, is_after_month, same_month
from journal.utils.helpers import today as local_today
from journal.utils.logger import get_logger

logger = get_logger(__name__)


class LatestRequestTracker:
    """Hands out increasing tokens; only the newest one is current"""

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest = 0

    def begin(self) -> int:
        self._latest = next(self._counter)
        return self._latest

    def is_latest(self, token: int) -> bool:
        return token == self._latest


class MonthChartView:

    def __init__(
        self,
        builder: ChartSeriesBuilder,
        clock: Callable[[], date] = local_today,
        selected_month: Optional[date] = None,
    ):
        self.builder = builder
        self.clock = clock
        self.selected_month = (selected_month or clock()).replace(day=1)
        self.series: Optional[MonthSeries] = None
        self.tracker = LatestRequestTracker()

    @property
    def is_current_month(self) -> bool:
        return same_month(self.selected_month, self.clock())

    def can_go_next(self) -> bool:
        return not is_after_month(add_months(self.selected_month, 1), self.clock())

    async def refresh(self) -> bool:
        """Reload the selected month; False if a newer load overtook this one"""
        return await self.show(self.selected_month)

    async def show(self, month: date) -> bool:
        """Select month and load its series

        Returns False (state untouched) for months after the current one, and
        when a newer request was issued before this one completed.
        """
        if is_after_month(month, self.clock()):
            logger.info(f"Refusing to show future month {month:%Y-%m}")
            return False

        token = self.tracker.begin()
        series = await self.builder.build_month(month, self.clock())
        if not self.tracker.is_latest(token):
            logger.debug(f"Dropping stale chart response for {month:%Y-%m}")
            return False

        self.selected_month = month.replace(day=1)
        self.series = series
        return True

    async def previous(self) -> bool:
        return await self.show(add_months(self.selected_month, -1))

    async def next(self) -> bool:
        if not self.can_go_next():
            return False
        return await self.show(add_months(self.selected_month, 1))
