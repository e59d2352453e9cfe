from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from app.database import get_session
from app.routes.workouts import WorkoutSessionResponse
from app.services import user_store, workout_ledger
from app.utils.caller import get_caller_id
from app.utils.results import unwrap_or_raise

router = APIRouter()


class UserCreate(BaseModel):
    name: str


class UserResponse(BaseModel):
    id: str
    name: str
    created_at: datetime
    session_ids: List[str]

    model_config = ConfigDict(from_attributes=True)


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(
    user_data: UserCreate,
    caller_id: str = Depends(get_caller_id),
    session: Session = Depends(get_session),
):
    """Create the caller's user profile"""
    return unwrap_or_raise(user_store.create_user(session, caller_id, user_data.name))


@router.get("/users", response_model=List[UserResponse])
def list_users(session: Session = Depends(get_session)):
    """List all users"""
    return user_store.get_all_users(session)


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: str, session: Session = Depends(get_session)):
    """Get a user by ID"""
    return unwrap_or_raise(user_store.get_user_by_id(session, user_id))


@router.get("/users/{user_id}/workouts", response_model=List[WorkoutSessionResponse])
def list_user_workouts(user_id: str, session: Session = Depends(get_session)):
    """List the workouts a user has started, oldest first"""
    return unwrap_or_raise(workout_ledger.list_user_workouts(session, user_id))


@router.delete("/users/me", response_model=UserResponse)
def delete_user(
    caller_id: str = Depends(get_caller_id),
    session: Session = Depends(get_session),
):
    """Delete the caller's profile and all of its workouts"""
    return unwrap_or_raise(user_store.delete_user(session, caller_id))
