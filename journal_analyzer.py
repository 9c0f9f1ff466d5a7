"""
Journal entry analysis: AI delegation first, deterministic heuristic fallback.
"""
import logging
from typing import Optional

import config
from errors import DelegationFailure
from gateway import DelegationGateway
from models import AIAnalysis, JournalEntry, Mood

logger = logging.getLogger(__name__)

BASE_SCORE = 50


def _num(value: float) -> str:
    """Render 8.0 as '8' and 7.5 as '7.5'."""
    return f"{value:g}"


def build_journal_prompt(entry: JournalEntry) -> str:
    return f"""Analyze this fitness journal entry and provide feedback:

Entry: "{entry.content}"
Mood: {entry.mood.value}
Workout completed: {'Yes' if entry.workout_done else 'No'}
Sleep: {_num(entry.sleep_hours)} hours
Water intake: {_num(entry.water_intake)} glasses

Respond with JSON:
{{
  "summary": "Brief summary of the day",
  "positives": ["positive1", "positive2"],
  "improvements": ["area to improve 1"],
  "recommendations": ["actionable recommendation 1", "recommendation 2"],
  "overallScore": 85
}}"""


def local_analysis(entry: JournalEntry) -> AIAnalysis:
    """Score an entry with fixed rules. Output order follows rule order."""
    positives = []
    improvements = []
    recommendations = []
    score = BASE_SCORE
    sleep = _num(entry.sleep_hours)
    water = _num(entry.water_intake)

    # Workout
    if entry.workout_done:
        positives.append("Great job completing your workout today!")
        score += 15
    else:
        improvements.append("Try to fit in a workout tomorrow, even if it's just a short one")
        recommendations.append("Schedule your workout at a specific time to build consistency")

    # Sleep
    if 7 <= entry.sleep_hours <= 9:
        positives.append(f"Excellent sleep duration ({sleep} hours) - optimal for recovery")
        score += 10
    elif entry.sleep_hours < 7:
        improvements.append(f"Sleep of {sleep} hours is below optimal. Aim for 7-9 hours")
        recommendations.append("Try going to bed 30 minutes earlier tonight")
    else:
        improvements.append("Sleeping more than 9 hours might indicate fatigue - check your routine")

    # Hydration
    if entry.water_intake >= 8:
        positives.append(f"Great hydration with {water} glasses of water")
        score += 10
    else:
        improvements.append(f"Water intake of {water} glasses is below recommended 8 glasses")
        recommendations.append("Keep a water bottle at your desk as a reminder to drink more")

    # Mood
    if entry.mood in (Mood.GREAT, Mood.GOOD):
        positives.append("Positive mood is a great indicator of overall well-being")
        score += 10
    elif entry.mood in (Mood.BAD, Mood.TERRIBLE):
        recommendations.append("Consider a short walk or meditation to help improve your mood")
        recommendations.append("Reach out to a friend or family member if you're feeling down")

    # Engagement
    if len(entry.content) > 100:
        positives.append("Detailed journaling helps with self-reflection and mindfulness")
        score += 5
    else:
        recommendations.append("Try adding more detail to your entries for better self-reflection")

    if not recommendations:
        recommendations.append("Keep up the great work! Consistency is key to achieving your goals")
    if not positives:
        positives.append("Every day is a step forward in your fitness journey")

    workout = "You completed your workout." if entry.workout_done else "Rest day."
    return AIAnalysis(
        summary=f"Today was a {entry.mood.value} day. {workout} Sleep: {sleep}h, Hydration: {water} glasses.",
        positives=positives,
        improvements=improvements,
        recommendations=recommendations,
        overall_score=max(0, min(100, score)),
    )


class JournalAnalyzer:
    """Produce an AIAnalysis for a JournalEntry."""

    def __init__(self, gateway: Optional[DelegationGateway] = None) -> None:
        self.gateway = gateway or DelegationGateway()

    async def analyze(self, entry: JournalEntry, credential: Optional[str] = None) -> AIAnalysis:
        if credential:
            try:
                return await self.gateway.request(
                    config.JOURNAL_SYSTEM_PROMPT,
                    build_journal_prompt(entry),
                    AIAnalysis,
                    credential,
                    max_tokens=config.JOURNAL_MAX_TOKENS,
                )
            except DelegationFailure as e:
                logger.warning("AI journal analysis failed (%s), using local analysis", e)

        return local_analysis(entry)
