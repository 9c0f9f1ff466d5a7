"""
Remote persistence for workout plans, journal entries and schedules.
"""
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import Column, String, Float, Integer, Boolean, Date, JSON, TIMESTAMP, Uuid, UniqueConstraint, select, delete
from config import DATABASE_URL
from errors import PersistenceFailure
from models import WorkoutPlanRecord, JournalEntry, JournalRecord, ScheduleItem, ScheduleRecord
from datetime import date, datetime, timezone
from typing import List, Optional
import logging
import uuid

logger = logging.getLogger(__name__)

# SQLAlchemy setup
Base = declarative_base()
engine = create_async_engine(DATABASE_URL, echo=False)
SessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def _utcnow():
    return datetime.now(timezone.utc)


class WorkoutPlanRow(Base):
    """Saved workout plans. Created or deleted, never updated."""
    __tablename__ = "workout_plans"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(String, nullable=False)
    bmi_category = Column(String(50), nullable=False)
    bmi_value = Column(Float, nullable=False)
    goal = Column(String(20), nullable=False)
    fitness_level = Column(String(20), nullable=False)
    exercises = Column(JSON, nullable=False)
    tips = Column(JSON, nullable=False)
    weekly_schedule = Column(JSON, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), default=_utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), default=_utcnow, onupdate=_utcnow)


class JournalRow(Base):
    """One journal entry per user and date."""
    __tablename__ = "journal_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    date = Column(Date, nullable=False)
    content = Column(String, nullable=False)
    mood = Column(String(20), nullable=False)
    workout_done = Column(Boolean, default=False)
    sleep_hours = Column(Float, default=0.0)
    water_intake = Column(Float, default=0.0)
    ai_analysis = Column(JSON, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), default=_utcnow)

    __table_args__ = (
        UniqueConstraint('user_id', 'date', name='journal_entries_user_id_date_unique'),
    )


class ScheduleRow(Base):
    """Scheduled sessions for one user and date."""
    __tablename__ = "schedules"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    date = Column(Date, nullable=False)
    items = Column(JSON, nullable=False, default=list)
    version = Column(Integer, default=0)
    created_at = Column(TIMESTAMP(timezone=True), default=_utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        UniqueConstraint('user_id', 'date', name='schedules_user_id_date_unique'),
    )


def _plan_record(row: WorkoutPlanRow) -> WorkoutPlanRecord:
    return WorkoutPlanRecord(
        id=str(row.id),
        user_id=row.user_id,
        title=row.title,
        description=row.description,
        bmi_category=row.bmi_category,
        bmi_value=row.bmi_value,
        goal=row.goal,
        fitness_level=row.fitness_level,
        exercises=row.exercises,
        tips=row.tips,
        weekly_schedule=row.weekly_schedule,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _journal_record(row: JournalRow) -> JournalRecord:
    return JournalRecord(
        id=str(row.id),
        user_id=row.user_id,
        date=row.date,
        content=row.content,
        mood=row.mood,
        workout_done=row.workout_done,
        sleep_hours=row.sleep_hours,
        water_intake=row.water_intake,
        ai_analysis=row.ai_analysis,
        created_at=row.created_at,
    )


def _schedule_record(row: ScheduleRow) -> ScheduleRecord:
    return ScheduleRecord(
        id=str(row.id),
        user_id=row.user_id,
        date=row.date,
        items=row.items or [],
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


async def init_database():
    """Create tables if they do not exist yet."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as e:
        logger.exception("Database initialization failed")
        raise PersistenceFailure(f"could not initialize database: {e}") from e


# Workout plans

async def save_workout_plan(record: WorkoutPlanRecord) -> WorkoutPlanRecord:
    """Insert a plan and return it with its id and timestamps."""
    async with SessionLocal() as session:
        try:
            row = WorkoutPlanRow(
                id=uuid.uuid4(),
                user_id=record.user_id,
                title=record.title,
                description=record.description,
                bmi_category=record.bmi_category,
                bmi_value=record.bmi_value,
                goal=record.goal.value,
                fitness_level=record.fitness_level.value,
                exercises=[e.model_dump(mode="json", by_alias=True) for e in record.exercises],
                tips=list(record.tips),
                weekly_schedule=[d.model_dump(mode="json", by_alias=True) for d in record.weekly_schedule],
            )
            session.add(row)
            await session.commit()
            await session.refresh(row)
            logger.info("Saved workout plan %s for user %s", row.id, record.user_id)
            return _plan_record(row)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception("Error saving workout plan for user %s", record.user_id)
            raise PersistenceFailure(f"could not save workout plan: {e}") from e


async def list_workout_plans(user_id: str) -> List[WorkoutPlanRecord]:
    """All saved plans for a user, newest first."""
    try:
        async with SessionLocal() as session:
            result = await session.execute(
                select(WorkoutPlanRow)
                .where(WorkoutPlanRow.user_id == user_id)
                .order_by(WorkoutPlanRow.created_at.desc())
            )
            return [_plan_record(row) for row in result.scalars().all()]
    except SQLAlchemyError as e:
        logger.exception("Error listing workout plans for user %s", user_id)
        raise PersistenceFailure(f"could not list workout plans: {e}") from e


async def get_latest_workout_plan(user_id: str) -> Optional[WorkoutPlanRecord]:
    plans = await list_workout_plans(user_id)
    return plans[0] if plans else None


async def delete_workout_plan(plan_id: str) -> bool:
    """Delete a plan by id. Returns False when nothing matched."""
    try:
        plan_uuid = uuid.UUID(plan_id)
    except ValueError:
        return False

    async with SessionLocal() as session:
        try:
            result = await session.execute(delete(WorkoutPlanRow).where(WorkoutPlanRow.id == plan_uuid))
            await session.commit()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception("Error deleting workout plan %s", plan_id)
            raise PersistenceFailure(f"could not delete workout plan: {e}") from e


# Journal

async def upsert_journal_entry(user_id: str, entry: JournalEntry) -> JournalRecord:
    """Insert or replace the user's entry for entry.date."""
    analysis = entry.ai_analysis.model_dump(mode="json", by_alias=True) if entry.ai_analysis else None
    async with SessionLocal() as session:
        try:
            result = await session.execute(
                select(JournalRow).where(JournalRow.user_id == user_id, JournalRow.date == entry.date)
            )
            row = result.scalars().first()
            if row is None:
                row = JournalRow(id=uuid.uuid4(), user_id=user_id, date=entry.date)
                session.add(row)
            row.content = entry.content
            row.mood = entry.mood.value
            row.workout_done = entry.workout_done
            row.sleep_hours = entry.sleep_hours
            row.water_intake = entry.water_intake
            row.ai_analysis = analysis
            await session.commit()
            await session.refresh(row)
            return _journal_record(row)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception("Error saving journal entry for user %s", user_id)
            raise PersistenceFailure(f"could not save journal entry: {e}") from e


async def list_journal_entries(user_id: str, limit: int = 30) -> List[JournalRecord]:
    """Most recent entries first."""
    try:
        async with SessionLocal() as session:
            result = await session.execute(
                select(JournalRow)
                .where(JournalRow.user_id == user_id)
                .order_by(JournalRow.date.desc())
                .limit(limit)
            )
            return [_journal_record(row) for row in result.scalars().all()]
    except SQLAlchemyError as e:
        logger.exception("Error listing journal entries for user %s", user_id)
        raise PersistenceFailure(f"could not list journal entries: {e}") from e


async def get_journal_entry(user_id: str, entry_date: date) -> Optional[JournalRecord]:
    try:
        async with SessionLocal() as session:
            result = await session.execute(
                select(JournalRow).where(JournalRow.user_id == user_id, JournalRow.date == entry_date)
            )
            row = result.scalars().first()
            return _journal_record(row) if row else None
    except SQLAlchemyError as e:
        logger.exception("Error fetching journal entry for user %s", user_id)
        raise PersistenceFailure(f"could not fetch journal entry: {e}") from e


# Schedules

async def upsert_schedule(user_id: str, schedule_date: date, items: List[ScheduleItem]) -> ScheduleRecord:
    """Insert or replace the user's scheduled sessions for one date."""
    payload = [item.model_dump(mode="json", by_alias=True) for item in items]
    async with SessionLocal() as session:
        try:
            result = await session.execute(
                select(ScheduleRow).where(ScheduleRow.user_id == user_id, ScheduleRow.date == schedule_date)
            )
            row = result.scalars().first()
            if row is None:
                row = ScheduleRow(id=uuid.uuid4(), user_id=user_id, date=schedule_date, version=0)
                session.add(row)
            else:
                row.version = (row.version or 0) + 1
            row.items = payload
            await session.commit()
            await session.refresh(row)
            return _schedule_record(row)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception("Error saving schedule for user %s", user_id)
            raise PersistenceFailure(f"could not save schedule: {e}") from e


async def list_schedules(user_id: str, start_date: Optional[date] = None,
                         end_date: Optional[date] = None) -> List[ScheduleRecord]:
    """Schedules in an optional date range, newest date first."""
    query = select(ScheduleRow).where(ScheduleRow.user_id == user_id)
    if start_date:
        query = query.where(ScheduleRow.date >= start_date)
    if end_date:
        query = query.where(ScheduleRow.date <= end_date)
    try:
        async with SessionLocal() as session:
            result = await session.execute(query.order_by(ScheduleRow.date.desc()))
            return [_schedule_record(row) for row in result.scalars().all()]
    except SQLAlchemyError as e:
        logger.exception("Error listing schedules for user %s", user_id)
        raise PersistenceFailure(f"could not list schedules: {e}") from e
