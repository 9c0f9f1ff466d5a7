"""
Pydantic models for the workout, journal and schedule domain.

These models double as the response contracts enforced on the generation
service, so they are the single source of truth for the JSON shapes.
"""
from datetime import date as Date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class Goal(str, Enum):
    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class FitnessLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class BMICategory(str, Enum):
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Mood(str, Enum):
    GREAT = "great"
    GOOD = "good"
    NEUTRAL = "neutral"
    BAD = "bad"
    TERRIBLE = "terrible"


class WorkoutType(str, Enum):
    CARDIO = "cardio"
    STRENGTH = "strength"
    FLEXIBILITY = "flexibility"
    REST = "rest"
    HIIT = "hiit"


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BiometricInput(CamelModel):
    height_value: float
    weight_value: float
    unit_system: UnitSystem = UnitSystem.METRIC
    goal: Goal = Goal.MAINTAIN
    fitness_level: FitnessLevel = FitnessLevel.BEGINNER


class BMIResult(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    value: float = Field(..., gt=0)
    category: BMICategory


# Workout contract

class Exercise(CamelModel):
    name: str
    sets: int = Field(..., ge=1, le=20)
    reps: str
    rest_seconds: int = Field(..., ge=0, le=600)
    target_muscle: str
    difficulty: FitnessLevel


class DayPlan(CamelModel):
    day: str
    focus: str
    exercises: List[str]


class WorkoutPlan(CamelModel):
    title: str
    description: str
    bmi_category: str
    exercises: List[Exercise] = Field(..., min_length=1)
    tips: List[str]
    weekly_schedule: List[DayPlan]

    @field_validator('weekly_schedule')
    @classmethod
    def covers_every_weekday(cls, v):
        days = [d.day.strip().capitalize() for d in v]
        if len(days) != 7 or set(days) != set(WEEKDAYS):
            raise ValueError("weeklySchedule must contain each weekday exactly once")
        return v


# Journal contract

class AIAnalysis(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    summary: str
    positives: List[str]
    improvements: List[str]
    recommendations: List[str]
    overall_score: int = Field(..., ge=0, le=100)


class JournalEntry(CamelModel):
    id: str
    date: Date
    content: str
    mood: Mood = Mood.NEUTRAL
    workout_done: bool = False
    sleep_hours: float = Field(7, ge=0, le=24)
    water_intake: float = Field(8, ge=0, le=20)
    ai_analysis: Optional[AIAnalysis] = None


class WeeklyAggregate(CamelModel):
    avg_sleep: float
    avg_water: float
    workout_days: int
    avg_score: float
    total_entries: int


# Schedule

class ScheduleItem(CamelModel):
    id: str
    date: Date
    type: WorkoutType = WorkoutType.STRENGTH
    title: str
    duration_minutes: int = Field(60, ge=0)
    completed: bool = False
    notes: str = ""


class ScheduleSummary(CamelModel):
    completed: int
    total: int
    streak: int


# Stored records

class WorkoutPlanRecord(WorkoutPlan):
    id: Optional[str] = None
    user_id: str
    bmi_value: float
    goal: Goal
    fitness_level: FitnessLevel
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JournalRecord(JournalEntry):
    user_id: str
    created_at: Optional[datetime] = None


class ScheduleRecord(CamelModel):
    id: Optional[str] = None
    user_id: str
    date: Date
    items: List[ScheduleItem] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
