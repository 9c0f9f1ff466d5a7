# journal_api.py
"""
Daily journal endpoints with AI or local analysis
"""
from fastapi import APIRouter, HTTPException, Depends
from pydantic import Field
from datetime import date as Date
from typing import List, Optional
import uuid

import database
from dependencies import get_gateway, get_local_store, resolve_credential
from errors import InvalidInput, PersistenceFailure
from gateway import DelegationGateway
from history import JournalHistory
from journal_analyzer import JournalAnalyzer
from local_store import LocalHistoryStore
from models import AIAnalysis, CamelModel, JournalEntry, JournalRecord, Mood, WeeklyAggregate

router = APIRouter(prefix="/api/journal", tags=["Journal"])


class JournalEntryCreate(CamelModel):
    content: str
    mood: Mood = Mood.NEUTRAL
    workout_done: bool = False
    sleep_hours: float = Field(7, ge=0, le=24)
    water_intake: float = Field(8, ge=0, le=20)
    date: Optional[Date] = None


def get_journal(
    store: LocalHistoryStore = Depends(get_local_store),
    gateway: DelegationGateway = Depends(get_gateway),
) -> JournalHistory:
    return JournalHistory(store, JournalAnalyzer(gateway))


@router.post("/analyze", response_model=AIAnalysis)
async def analyze_entry(
    entry: JournalEntryCreate,
    credential: Optional[str] = Depends(resolve_credential),
    gateway: DelegationGateway = Depends(get_gateway),
):
    """Analyze an entry without storing it"""
    journal_entry = JournalEntry(
        id=uuid.uuid4().hex,
        date=entry.date or Date.today(),
        **entry.model_dump(exclude={"date"}),
    )
    return await JournalAnalyzer(gateway).analyze(journal_entry, credential)


@router.post("/{user_id}/entries", response_model=JournalEntry)
async def create_entry(
    entry: JournalEntryCreate,
    journal: JournalHistory = Depends(get_journal),
    credential: Optional[str] = Depends(resolve_credential),
):
    """Create, analyze and store a journal entry"""
    try:
        return await journal.add_entry(
            content=entry.content,
            mood=entry.mood,
            workout_done=entry.workout_done,
            sleep_hours=entry.sleep_hours,
            water_intake=entry.water_intake,
            credential=credential,
            entry_date=entry.date,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{user_id}/entries", response_model=List[JournalEntry])
async def list_entries(journal: JournalHistory = Depends(get_journal)):
    """Get journal history, newest first"""
    try:
        return journal.list_entries()
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{user_id}/entries/{entry_id}", response_model=JournalEntry)
async def get_entry(entry_id: str, journal: JournalHistory = Depends(get_journal)):
    try:
        entry = journal.get_entry(entry_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    if entry is None:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    return entry


@router.delete("/{user_id}/entries/{entry_id}")
async def delete_entry(entry_id: str, journal: JournalHistory = Depends(get_journal)):
    """Delete a journal entry"""
    try:
        deleted = journal.delete_entry(entry_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    return {"message": "Journal entry deleted successfully"}


@router.get("/{user_id}/stats", response_model=WeeklyAggregate)
async def weekly_stats(reference_date: Optional[Date] = None, journal: JournalHistory = Depends(get_journal)):
    """Averages over the last seven days"""
    try:
        return journal.weekly_stats(reference_date)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.put("/{user_id}/remote", response_model=JournalRecord)
async def save_remote_entry(user_id: str, entry: JournalEntry):
    """Upsert an entry into the remote journal table (one per date)"""
    try:
        return await database.upsert_journal_entry(user_id, entry)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{user_id}/remote", response_model=List[JournalRecord])
async def list_remote_entries(user_id: str, limit: int = 30):
    try:
        return await database.list_journal_entries(user_id, limit)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{user_id}/remote/{entry_date}", response_model=JournalRecord)
async def get_remote_entry(user_id: str, entry_date: Date):
    """The remote entry for one date"""
    try:
        entry = await database.get_journal_entry(user_id, entry_date)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    if entry is None:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    return entry
