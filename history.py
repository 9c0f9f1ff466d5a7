"""
Journal and schedule operations over the local history store.
"""
import logging
import uuid
from datetime import date
from typing import List, Optional

import config
from errors import InvalidInput
from journal_analyzer import JournalAnalyzer
from local_store import LocalHistoryStore
from metrics import compute_weekly_aggregate, summarize_schedule
from models import (
    JournalEntry,
    Mood,
    ScheduleItem,
    ScheduleSummary,
    WeeklyAggregate,
    WorkoutType,
)

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class JournalHistory:
    """Daily journal entries with their attached analysis."""

    def __init__(self, store: LocalHistoryStore, analyzer: Optional[JournalAnalyzer] = None) -> None:
        self.entries = store.collection(config.JOURNAL_COLLECTION)
        self.analyzer = analyzer or JournalAnalyzer()

    async def add_entry(
        self,
        content: str,
        mood: Mood = Mood.NEUTRAL,
        workout_done: bool = False,
        sleep_hours: float = 7,
        water_intake: float = 8,
        credential: Optional[str] = None,
        entry_date: Optional[date] = None,
    ) -> JournalEntry:
        """Analyze and store a new entry.

        An existing entry for the same date is replaced, matching the
        one-entry-per-date rule of the remote journal table.
        """
        if not content or not content.strip():
            raise InvalidInput("Please write something about your day")

        entry = JournalEntry(
            id=_new_id(),
            date=entry_date or date.today(),
            content=content,
            mood=mood,
            workout_done=workout_done,
            sleep_hours=sleep_hours,
            water_intake=water_intake,
        )
        analysis = await self.analyzer.analyze(entry, credential)
        entry = entry.model_copy(update={"ai_analysis": analysis})

        items = [item for item in self.entries.list() if item.get("date") != entry.date.isoformat()]
        items.append(entry.model_dump(mode="json"))
        self.entries.replace_all(items)
        logger.info("Stored journal entry %s for %s", entry.id, entry.date)
        return entry

    def list_entries(self) -> List[JournalEntry]:
        """Newest first."""
        return [JournalEntry.model_validate(item) for item in reversed(self.entries.list())]

    def get_entry(self, entry_id: str) -> Optional[JournalEntry]:
        item = self.entries.get(entry_id)
        return JournalEntry.model_validate(item) if item else None

    def delete_entry(self, entry_id: str) -> bool:
        return self.entries.remove(entry_id)

    def weekly_stats(self, reference_date: Optional[date] = None) -> WeeklyAggregate:
        return compute_weekly_aggregate(self.list_entries(), reference_date)


class ScheduleHistory:
    """Planned sessions on calendar dates."""

    def __init__(self, store: LocalHistoryStore) -> None:
        self.items = store.collection(config.SCHEDULE_COLLECTION)

    def add_item(
        self,
        item_date: date,
        title: str,
        type: WorkoutType = WorkoutType.STRENGTH,
        duration_minutes: int = 60,
        notes: str = "",
    ) -> ScheduleItem:
        if not title or not title.strip():
            raise InvalidInput("A scheduled session needs a title")
        item = ScheduleItem(
            id=_new_id(),
            date=item_date,
            type=type,
            title=title,
            duration_minutes=duration_minutes,
            notes=notes,
        )
        self.items.append(item.model_dump(mode="json"))
        return item

    def list_items(self, item_date: Optional[date] = None) -> List[ScheduleItem]:
        items = [ScheduleItem.model_validate(item) for item in self.items.list()]
        if item_date is not None:
            items = [item for item in items if item.date == item_date]
        return items

    def toggle_complete(self, item_id: str) -> Optional[ScheduleItem]:
        current = self.items.get(item_id)
        if current is None:
            return None
        updated = self.items.update(item_id, {"completed": not current.get("completed", False)})
        return ScheduleItem.model_validate(updated)

    def delete_item(self, item_id: str) -> bool:
        return self.items.remove(item_id)

    def summary(self, reference_date: Optional[date] = None) -> ScheduleSummary:
        return summarize_schedule(self.list_items(), reference_date)

    def upcoming(self, reference_date: Optional[date] = None, limit: int = 5) -> List[ScheduleItem]:
        """Incomplete sessions on or after reference_date, soonest first."""
        today = reference_date or date.today()
        pending = [item for item in self.list_items() if not item.completed and item.date >= today]
        return sorted(pending, key=lambda item: item.date)[:limit]
