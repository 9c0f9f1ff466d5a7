"""
Workout plan generation: AI delegation first, goal template fallback.
"""
import logging
from typing import Optional

import config
from errors import DelegationFailure, InvalidInput
from gateway import DelegationGateway
from metrics import compute_bmi
from models import (
    BiometricInput,
    BMIResult,
    DayPlan,
    Exercise,
    FitnessLevel,
    Goal,
    WorkoutPlan,
)
from plan_templates import PLAN_TEMPLATES

logger = logging.getLogger(__name__)


def build_plan_prompt(bmi: BMIResult, goal: Goal, fitness_level: FitnessLevel) -> str:
    """User prompt embedding BMI, category, goal and level plus the JSON shape."""
    category = bmi.category.label
    level = fitness_level.value
    return f"""Generate a personalized workout plan for someone with:
- BMI: {bmi.value} ({category})
- Goal: {config.GOAL_LABELS[goal.value]}
- Fitness Level: {level}

Respond with a JSON object containing:
{{
  "title": "Plan name",
  "description": "Brief description",
  "bmiCategory": "{category}",
  "exercises": [{{"name": "Exercise", "sets": 3, "reps": "10-12", "restSeconds": 60, "targetMuscle": "Muscle", "difficulty": "{level}"}}],
  "tips": ["tip1", "tip2"],
  "weeklySchedule": [{{"day": "Monday", "focus": "Focus area", "exercises": ["ex1", "ex2"]}}]
}}
The weeklySchedule must list all seven days from Monday to Sunday."""


def build_local_plan(bmi: BMIResult, goal: Goal, fitness_level: FitnessLevel) -> WorkoutPlan:
    """Fill the fixed template for the goal with the computed BMI and level."""
    template = PLAN_TEMPLATES[goal]
    category = bmi.category.label

    return WorkoutPlan(
        title=template["title"],
        description=template["description"].format(bmi=bmi.value, category=category),
        bmi_category=category,
        exercises=[
            Exercise(
                name=name,
                sets=sets,
                reps=reps,
                rest_seconds=rest,
                target_muscle=muscle,
                difficulty=fitness_level,
            )
            for name, sets, reps, rest, muscle in template["exercises"]
        ],
        tips=list(template["tips"]),
        weekly_schedule=[
            DayPlan(day=day, focus=focus, exercises=list(exercises))
            for day, focus, exercises in template["weekly_schedule"]
        ],
    )


class PlanGenerator:
    """Produce a WorkoutPlan for a BiometricInput."""

    def __init__(self, gateway: Optional[DelegationGateway] = None) -> None:
        self.gateway = gateway or DelegationGateway()

    async def generate_plan(self, biometrics: BiometricInput, credential: Optional[str] = None) -> WorkoutPlan:
        bmi = compute_bmi(biometrics.height_value, biometrics.weight_value, biometrics.unit_system)
        if bmi is None:
            raise InvalidInput("Please enter valid height and weight")
        return await self.generate_for_bmi(bmi, biometrics.goal, biometrics.fitness_level, credential)

    async def generate_for_bmi(self, bmi: BMIResult, goal: Goal, fitness_level: FitnessLevel,
                               credential: Optional[str] = None) -> WorkoutPlan:
        if credential:
            try:
                return await self.gateway.request(
                    config.PLAN_SYSTEM_PROMPT,
                    build_plan_prompt(bmi, goal, fitness_level),
                    WorkoutPlan,
                    credential,
                    max_tokens=config.PLAN_MAX_TOKENS,
                )
            except DelegationFailure as e:
                logger.warning("AI plan generation failed (%s), falling back to local plan", e)

        return build_local_plan(bmi, goal, fitness_level)
