"""
Day record API endpoints - read and edit one day of the journal
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from journal.api.dependencies import get_journal_service
from journal.models.day_record import DayRecord
from journal.services.journal_service import JournalService, WriteResult
from journal.utils.errors import ErrorCode

router = APIRouter()

STATUS_BY_ERROR = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.PARSE_FAILURE: 409,
    ErrorCode.BACKEND_FAILURE: 503,
}


# --- Pydantic Schemas ---

class FoodEntryCreate(BaseModel):
    name: str
    hour: Optional[int] = Field(default=None, ge=0, le=23)
    minute: Optional[int] = Field(default=None, ge=0, le=59)


class FoodEntryUpdate(BaseModel):
    name: str
    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)


class WorkoutUpdate(BaseModel):
    done: bool
    note: str = ""


class MoodUpdate(BaseModel):
    rating: Optional[int] = Field(default=None, ge=1, le=10)
    note: Optional[str] = None


# --- Helper ---

def _unwrap(result: WriteResult) -> DayRecord:
    if not result.ok:
        status = STATUS_BY_ERROR.get(result.error, 500)
        raise HTTPException(status_code=status, detail=result.message)
    return result.record


# --- Endpoints ---

@router.get("/{day}", response_model=DayRecord)
async def get_day(day: date, service: JournalService = Depends(get_journal_service)):
    """Get a day's record (empty record if nothing logged)"""
    return await service.load_day(day)


@router.put("/{day}", response_model=DayRecord)
async def put_day(
    day: date,
    record: DayRecord,
    service: JournalService = Depends(get_journal_service),
):
    """Replace a day's record"""
    return _unwrap(await service.write_day(day, record))


@router.post("/{day}/food", response_model=DayRecord)
async def add_food(
    day: date,
    data: FoodEntryCreate,
    service: JournalService = Depends(get_journal_service),
):
    return _unwrap(await service.add_food_entry(day, data.name, data.hour, data.minute))


@router.patch("/{day}/food/{entry_id}", response_model=DayRecord)
async def update_food(
    day: date,
    entry_id: str,
    data: FoodEntryUpdate,
    service: JournalService = Depends(get_journal_service),
):
    return _unwrap(await service.update_food_entry(day, entry_id, data.name, data.hour, data.minute))


@router.delete("/{day}/food/{entry_id}", response_model=DayRecord)
async def delete_food(
    day: date,
    entry_id: str,
    service: JournalService = Depends(get_journal_service),
):
    return _unwrap(await service.delete_food_entry(day, entry_id))


@router.put("/{day}/workout", response_model=DayRecord)
async def put_workout(
    day: date,
    data: WorkoutUpdate,
    service: JournalService = Depends(get_journal_service),
):
    return _unwrap(await service.set_workout(day, data.done, data.note))


@router.put("/{day}/mood", response_model=DayRecord)
async def put_mood(
    day: date,
    data: MoodUpdate,
    service: JournalService = Depends(get_journal_service),
):
    return _unwrap(await service.set_mood(day, data.rating, data.note))
