from datetime import date, timedelta

import pytest

import database
from errors import PersistenceFailure
from journal_analyzer import local_analysis
from metrics import compute_bmi
from models import (
    FitnessLevel,
    Goal,
    JournalEntry,
    Mood,
    ScheduleItem,
    UnitSystem,
    WorkoutPlanRecord,
)
from workout_generator import build_local_plan

DAY = date(2024, 6, 15)


def plan_record(user_id="user-1", goal=Goal.LOSE):
    bmi = compute_bmi(175, 70, UnitSystem.METRIC)
    plan = build_local_plan(bmi, goal, FitnessLevel.BEGINNER)
    return WorkoutPlanRecord(
        **plan.model_dump(),
        user_id=user_id,
        bmi_value=bmi.value,
        goal=goal,
        fitness_level=FitnessLevel.BEGINNER,
    )


def journal_entry(content="Felt strong", entry_date=DAY, **kwargs):
    entry = JournalEntry(id="local-id", date=entry_date, content=content, **kwargs)
    return entry.model_copy(update={"ai_analysis": local_analysis(entry)})


@pytest.mark.asyncio
async def test_save_and_list_plans(db):
    saved = await db.save_workout_plan(plan_record(goal=Goal.LOSE))
    second = await db.save_workout_plan(plan_record(goal=Goal.GAIN))
    await db.save_workout_plan(plan_record(user_id="someone-else"))

    assert saved.id
    assert saved.created_at is not None
    assert saved.exercises == plan_record().exercises

    plans = await db.list_workout_plans("user-1")
    assert {p.id for p in plans} == {saved.id, second.id}
    assert all(p.user_id == "user-1" for p in plans)

    latest = await db.get_latest_workout_plan("user-1")
    assert latest.id == plans[0].id


@pytest.mark.asyncio
async def test_latest_plan_none_for_new_user(db):
    assert await db.get_latest_workout_plan("nobody") is None


@pytest.mark.asyncio
async def test_delete_plan(db):
    saved = await db.save_workout_plan(plan_record())

    assert await db.delete_workout_plan(saved.id) is True
    assert await db.delete_workout_plan(saved.id) is False
    assert await db.delete_workout_plan("not-a-uuid") is False
    assert await db.list_workout_plans("user-1") == []


@pytest.mark.asyncio
async def test_journal_upsert_by_date(db):
    first = await db.upsert_journal_entry("user-1", journal_entry("morning"))
    second = await db.upsert_journal_entry("user-1", journal_entry("evening", mood=Mood.GREAT))

    assert first.id == second.id
    entries = await db.list_journal_entries("user-1")
    assert len(entries) == 1
    assert entries[0].content == "evening"
    assert entries[0].mood is Mood.GREAT
    assert entries[0].ai_analysis == local_analysis(journal_entry("evening", mood=Mood.GREAT))


@pytest.mark.asyncio
async def test_journal_list_newest_first_with_limit(db):
    for offset in range(5):
        await db.upsert_journal_entry("user-1", journal_entry(f"day {offset}", DAY - timedelta(days=offset)))

    entries = await db.list_journal_entries("user-1", limit=3)
    assert [e.date for e in entries] == [DAY, DAY - timedelta(days=1), DAY - timedelta(days=2)]


@pytest.mark.asyncio
async def test_get_journal_entry(db):
    await db.upsert_journal_entry("user-1", journal_entry())
    found = await db.get_journal_entry("user-1", DAY)
    assert found.content == "Felt strong"
    assert await db.get_journal_entry("user-1", DAY - timedelta(days=1)) is None
    assert await db.get_journal_entry("user-2", DAY) is None


@pytest.mark.asyncio
async def test_schedule_upsert_and_range(db):
    items = [ScheduleItem(id="a", date=DAY, title="Legs")]
    created = await db.upsert_schedule("user-1", DAY, items)
    updated = await db.upsert_schedule("user-1", DAY, items + [ScheduleItem(id="b", date=DAY, title="Core")])
    await db.upsert_schedule("user-1", DAY - timedelta(days=10), [])

    assert created.id == updated.id
    assert [i.title for i in updated.items] == ["Legs", "Core"]

    in_range = await db.list_schedules("user-1", DAY - timedelta(days=7), DAY)
    assert [s.date for s in in_range] == [DAY]
    everything = await db.list_schedules("user-1")
    assert [s.date for s in everything] == [DAY, DAY - timedelta(days=10)]


@pytest.mark.asyncio
async def test_errors_become_persistence_failures(test_engine):
    # Tables were never created.
    with pytest.raises(PersistenceFailure):
        await database.list_workout_plans("user-1")
