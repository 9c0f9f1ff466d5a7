"""
Numeric derivations feeding the generators: BMI, streaks and weekly aggregates.
"""
import math
from datetime import date, timedelta
from typing import Iterable, Optional

from models import (
    BMICategory,
    BMIResult,
    JournalEntry,
    ScheduleItem,
    ScheduleSummary,
    UnitSystem,
    WeeklyAggregate,
)


def _positive_number(raw) -> Optional[float]:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def categorize(bmi: float) -> BMICategory:
    """Bucket a BMI value into the four standard categories."""
    if bmi < 18.5:
        return BMICategory.UNDERWEIGHT
    if bmi < 25:
        return BMICategory.NORMAL
    if bmi < 30:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


def compute_bmi(height, weight, unit_system: UnitSystem) -> Optional[BMIResult]:
    """
    Calculate BMI from height and weight.

    Metric expects centimeters and kilograms, imperial expects inches and pounds.
    The value is rounded half-up to one decimal place.

    Returns None if either value is missing, unparsable or not positive.

    Examples:
        >>> compute_bmi(175, 70, UnitSystem.METRIC).value
        22.9
        >>> compute_bmi(69, 154, UnitSystem.IMPERIAL).value
        22.7
    """
    h = _positive_number(height)
    w = _positive_number(weight)
    if h is None or w is None:
        return None

    try:
        if UnitSystem(unit_system) is UnitSystem.METRIC:
            height_m = h / 100
            bmi = w / (height_m ** 2)
        else:
            bmi = 703 * w / (h ** 2)
        value = math.floor(bmi * 10 + 0.5) / 10
    except (ZeroDivisionError, OverflowError):
        # Extreme inputs underflow to zero or overflow to infinity
        return None
    if value <= 0:
        return None
    return BMIResult(value=value, category=categorize(value))


def compute_streak(completed_dates: Iterable[date], reference_date: Optional[date] = None,
                   window_days: int = 30) -> int:
    """Count consecutive completed days walking back from reference_date.

    A missing reference day does not break the streak; any earlier gap does.
    """
    completed = set(completed_dates)
    today = reference_date or date.today()
    streak = 0
    for offset in range(window_days):
        if today - timedelta(days=offset) in completed:
            streak += 1
        elif offset > 0:
            break
    return streak


def compute_weekly_aggregate(entries: Iterable[JournalEntry], reference_date: Optional[date] = None,
                             window_days: int = 7) -> WeeklyAggregate:
    """Average sleep, water and score over entries inside the window."""
    since = (reference_date or date.today()) - timedelta(days=window_days)
    week_entries = [e for e in entries if e.date >= since]
    count = max(len(week_entries), 1)

    return WeeklyAggregate(
        avg_sleep=sum(e.sleep_hours for e in week_entries) / count,
        avg_water=sum(e.water_intake for e in week_entries) / count,
        workout_days=sum(1 for e in week_entries if e.workout_done),
        avg_score=sum(e.ai_analysis.overall_score if e.ai_analysis else 0 for e in week_entries) / count,
        total_entries=len(week_entries),
    )


def summarize_schedule(items: Iterable[ScheduleItem], reference_date: Optional[date] = None) -> ScheduleSummary:
    """Completed/total counts plus the current streak of completed days."""
    items = list(items)
    completed_dates = {item.date for item in items if item.completed}
    return ScheduleSummary(
        completed=sum(1 for item in items if item.completed),
        total=len(items),
        streak=compute_streak(completed_dates, reference_date),
    )
