"""
Workout sessions: start, complete, list.

Starting and completing require a caller identity; only the caller that
started a workout may complete it.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from app.database import get_session
from app.services import workout_ledger
from app.utils.caller import get_caller_id
from app.utils.results import unwrap_or_raise

router = APIRouter()


class WorkoutStart(BaseModel):
    group: str


class WorkoutEnd(BaseModel):
    calories: int


class WorkoutSessionResponse(BaseModel):
    id: str
    user_id: str
    started_at: datetime
    finished_at: Optional[datetime] = None
    calories: int
    muscle_group: str

    model_config = ConfigDict(from_attributes=True)


@router.get("/muscle-groups", response_model=List[str])
def list_muscle_groups():
    """Recognized muscle groups, sorted"""
    return sorted(workout_ledger.MUSCLE_GROUPS)


@router.post("/workouts", response_model=WorkoutSessionResponse, status_code=201)
def start_workout(
    payload: WorkoutStart,
    caller_id: str = Depends(get_caller_id),
    session: Session = Depends(get_session),
):
    """Start a workout for the caller"""
    return unwrap_or_raise(workout_ledger.start_workout(session, caller_id, payload.group))


@router.get("/workouts", response_model=List[WorkoutSessionResponse])
def list_workouts(session: Session = Depends(get_session)):
    """List all workouts"""
    return workout_ledger.list_workouts(session)


@router.get("/workouts/{workout_id}", response_model=WorkoutSessionResponse)
def get_workout(workout_id: str, session: Session = Depends(get_session)):
    """Get a workout by ID"""
    return unwrap_or_raise(workout_ledger.get_workout(session, workout_id))


@router.post("/workouts/{workout_id}/end", response_model=WorkoutSessionResponse)
def end_workout(
    workout_id: str,
    payload: WorkoutEnd,
    caller_id: str = Depends(get_caller_id),
    session: Session = Depends(get_session),
):
    """Complete a workout started by the caller"""
    return unwrap_or_raise(workout_ledger.end_workout(session, caller_id, workout_id, payload.calories))
