# workout_api.py
"""
Workout plan generation and saved plan endpoints
"""
from fastapi import APIRouter, HTTPException, Depends
from pydantic import Field
from typing import List, Optional
import logging

import database
from dependencies import get_gateway, resolve_credential
from errors import InvalidInput, PersistenceFailure
from gateway import DelegationGateway
from metrics import categorize, compute_bmi
from models import BiometricInput, BMIResult, CamelModel, FitnessLevel, Goal, WorkoutPlan, WorkoutPlanRecord
from workout_generator import PlanGenerator

logger = logging.getLogger(__name__)

# Initialize router
workout_router = APIRouter(prefix="/api/workout", tags=["workout"])


class GeneratePlanResponse(CamelModel):
    bmi: BMIResult
    plan: WorkoutPlan


class SavePlanRequest(CamelModel):
    user_id: str
    bmi_value: float = Field(..., gt=0)
    goal: Goal
    fitness_level: FitnessLevel
    plan: WorkoutPlan


@workout_router.post("/generate", response_model=GeneratePlanResponse)
async def generate_workout_plan(
    biometrics: BiometricInput,
    credential: Optional[str] = Depends(resolve_credential),
    gateway: DelegationGateway = Depends(get_gateway),
):
    """
    Calculate BMI and generate a personalized plan
    """
    try:
        plan = await PlanGenerator(gateway).generate_plan(biometrics, credential)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    bmi = compute_bmi(biometrics.height_value, biometrics.weight_value, biometrics.unit_system)
    logger.info("Generated '%s' for BMI %s (%s)", plan.title, bmi.value, biometrics.goal.value)
    return GeneratePlanResponse(bmi=bmi, plan=plan)


@workout_router.post("/plans", response_model=WorkoutPlanRecord)
async def save_plan(request: SavePlanRequest):
    """
    Save a generated plan for a user
    """
    record = WorkoutPlanRecord(
        **request.plan.model_dump(exclude={"bmi_category"}),
        bmi_category=categorize(request.bmi_value).label,
        user_id=request.user_id,
        bmi_value=request.bmi_value,
        goal=request.goal,
        fitness_level=request.fitness_level,
    )
    try:
        return await database.save_workout_plan(record)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=f"Failed to save workout plan. Please try again. ({e})")


@workout_router.get("/plans/{user_id}", response_model=List[WorkoutPlanRecord])
async def get_plans(user_id: str):
    """
    Get saved plans for a user, newest first
    """
    try:
        return await database.list_workout_plans(user_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@workout_router.get("/plans/{user_id}/latest", response_model=WorkoutPlanRecord)
async def get_latest_plan(user_id: str):
    try:
        plan = await database.get_latest_workout_plan(user_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    if plan is None:
        raise HTTPException(status_code=404, detail="No saved workout plans")
    return plan


@workout_router.delete("/plans/{plan_id}")
async def delete_plan(plan_id: str):
    """
    Delete a saved plan
    """
    try:
        deleted = await database.delete_workout_plan(plan_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Workout plan not found")
    return {"message": "Workout plan deleted successfully"}
