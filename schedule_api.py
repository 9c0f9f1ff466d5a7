# schedule_api.py
"""
Workout calendar endpoints: scheduled sessions, completion and streaks
"""
from fastapi import APIRouter, HTTPException, Depends, Query
from pydantic import Field
from datetime import date as Date
from typing import List, Optional

import database
from dependencies import get_local_store
from errors import InvalidInput, PersistenceFailure
from history import ScheduleHistory
from local_store import LocalHistoryStore
from models import CamelModel, ScheduleItem, ScheduleRecord, ScheduleSummary, WorkoutType

router = APIRouter(prefix="/api/schedule", tags=["Schedule"])


class ScheduleItemCreate(CamelModel):
    date: Date
    type: WorkoutType = WorkoutType.STRENGTH
    title: str
    duration_minutes: int = Field(60, ge=0)
    notes: str = ""


def get_schedule(store: LocalHistoryStore = Depends(get_local_store)) -> ScheduleHistory:
    return ScheduleHistory(store)


@router.post("/{user_id}/items", response_model=ScheduleItem)
async def create_item(item: ScheduleItemCreate, schedule: ScheduleHistory = Depends(get_schedule)):
    """Schedule a session on a calendar date"""
    try:
        return schedule.add_item(
            item_date=item.date,
            title=item.title,
            type=item.type,
            duration_minutes=item.duration_minutes,
            notes=item.notes,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{user_id}/items", response_model=List[ScheduleItem])
async def list_items(date: Optional[Date] = None, schedule: ScheduleHistory = Depends(get_schedule)):
    """List sessions, optionally for a single date"""
    try:
        return schedule.list_items(date)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.patch("/{user_id}/items/{item_id}/toggle", response_model=ScheduleItem)
async def toggle_item(item_id: str, schedule: ScheduleHistory = Depends(get_schedule)):
    """Flip the completed flag"""
    try:
        item = schedule.toggle_complete(item_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    if item is None:
        raise HTTPException(status_code=404, detail="Scheduled session not found")
    return item


@router.delete("/{user_id}/items/{item_id}")
async def delete_item(item_id: str, schedule: ScheduleHistory = Depends(get_schedule)):
    try:
        deleted = schedule.delete_item(item_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Scheduled session not found")
    return {"message": "Scheduled session deleted successfully"}


@router.get("/{user_id}/summary", response_model=ScheduleSummary)
async def get_summary(reference_date: Optional[Date] = None, schedule: ScheduleHistory = Depends(get_schedule)):
    """Completed and total sessions plus the current streak"""
    try:
        return schedule.summary(reference_date)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{user_id}/upcoming", response_model=List[ScheduleItem])
async def get_upcoming(
    reference_date: Optional[Date] = None,
    limit: int = Query(5, ge=1, le=50),
    schedule: ScheduleHistory = Depends(get_schedule),
):
    """Next incomplete sessions, soonest first"""
    try:
        return schedule.upcoming(reference_date, limit)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.put("/{user_id}/remote/{schedule_date}", response_model=ScheduleRecord)
async def save_remote_schedule(user_id: str, schedule_date: Date, schedule: ScheduleHistory = Depends(get_schedule)):
    """Upsert the locally scheduled sessions for one date into the remote table"""
    try:
        items = schedule.list_items(schedule_date)
        return await database.upsert_schedule(user_id, schedule_date, items)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{user_id}/remote", response_model=List[ScheduleRecord])
async def list_remote_schedules(user_id: str, start_date: Optional[Date] = None, end_date: Optional[Date] = None):
    try:
        return await database.list_schedules(user_id, start_date, end_date)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
