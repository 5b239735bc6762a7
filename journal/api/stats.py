"""
Statistics API endpoints - mood trend, monthly chart and food-mood correlation
"""
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from journal.api.dependencies import get_journal_service
from journal.models.analytics import FoodMoodStat, MonthSeries, MoodTrend, SortBy
from journal.services.journal_service import JournalService
from journal.utils.date_range import is_after_month

router = APIRouter()


def _parse_month(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid month {value!r}, expected YYYY-MM")


@router.get("/trend", response_model=MoodTrend)
async def get_trend(
    reference: Optional[date] = None,
    service: JournalService = Depends(get_journal_service),
):
    """This month's average mood (up to the reference date) against last month's"""
    return await service.get_month_trend(reference)


@router.get("/series", response_model=MonthSeries)
async def get_series(
    month: Optional[str] = None,
    service: JournalService = Depends(get_journal_service),
):
    """Daily mood points for a month (defaults to the current one)"""
    today = service.clock()
    target = _parse_month(month) if month else today.replace(day=1)
    if is_after_month(target, today):
        raise HTTPException(status_code=400, detail="Cannot show a month after the current one")
    return await service.get_month_view(target, today)


@router.get("/foods", response_model=List[FoodMoodStat])
async def get_foods(
    search: Optional[str] = None,
    sort_by: SortBy = SortBy.SCORE,
    service: JournalService = Depends(get_journal_service),
):
    """Average mood per food across the whole journal"""
    return await service.get_food_correlations(search, sort_by)
