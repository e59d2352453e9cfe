"""
Workout ledger: start, complete and enumerate workout sessions.

A session can only be started by a caller that has a user profile, and only
the caller that started it may complete it. Starting a session writes the
session and appends its id to the owner's session_ids in one transaction.
Completion is one-way: a completed session cannot be completed again.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Union

from sqlmodel import Session, select

from app.models.user import User
from app.models.workout_session import WorkoutSession
from app.services.errors import (
    AuthenticationFail,
    InvalidPayload,
    MuscleGroupDoesNotExist,
    UserDoesNotExist,
    WorkoutAlreadyCompleted,
    WorkoutDoesNotExist,
    is_blank,
)
from app.services.transaction import atomic

logger = logging.getLogger(__name__)

MUSCLE_GROUPS = ("shoulders", "back", "chest", "legs", "cardio")

# Largest value the calories INTEGER column can hold
MAX_CALORIES = 2**63 - 1


def new_workout_id() -> str:
    return str(uuid.uuid4())


def snapshot_workout(workout: WorkoutSession) -> WorkoutSession:
    """Detached copy of a stored workout session."""
    return WorkoutSession(**workout.model_dump())


def start_workout(
    session: Session,
    caller_id: str,
    group: str,
    id_factory: Callable[[], str] = new_workout_id,
) -> Union[WorkoutSession, UserDoesNotExist, InvalidPayload, MuscleGroupDoesNotExist]:
    """
    Start a workout session for the caller.

    The group is matched case-insensitively against MUSCLE_GROUPS and stored
    lower-cased.

    Returns:
        The new WorkoutSession (finished_at None, calories 0)
        UserDoesNotExist if the caller has no profile
        InvalidPayload("group") if group is empty or whitespace
        MuscleGroupDoesNotExist if group is not recognized
    """
    with atomic(session, "start_workout"):
        user = session.get(User, caller_id)
        if user is None:
            return UserDoesNotExist(id=caller_id)
        if is_blank(group):
            return InvalidPayload(field="group")

        muscle_group = group.strip().lower()
        if muscle_group not in MUSCLE_GROUPS:
            return MuscleGroupDoesNotExist(value=group, recognized=list(MUSCLE_GROUPS))

        workout = WorkoutSession(
            id=id_factory(),
            user_id=caller_id,
            started_at=datetime.now(timezone.utc),
            muscle_group=muscle_group,
        )
        session.add(workout)

        # Reassign rather than append in place so the JSON column is flagged dirty
        user.session_ids = [*user.session_ids, workout.id]
        session.add(user)
        started = snapshot_workout(workout)

    logger.info("User %s started %s workout %s", caller_id, muscle_group, started.id)
    return started


def end_workout(
    session: Session,
    caller_id: str,
    workout_id: str,
    calories: int,
) -> Union[WorkoutSession, WorkoutDoesNotExist, AuthenticationFail, InvalidPayload, WorkoutAlreadyCompleted]:
    """
    Complete a workout session owned by the caller.

    Checks run in order: existence, ownership, calories, completion state.

    Returns:
        The updated WorkoutSession
        WorkoutDoesNotExist if no session has workout_id
        AuthenticationFail if the caller did not start the session
        InvalidPayload("calories") if calories is not an integer in 1..MAX_CALORIES
        WorkoutAlreadyCompleted if the session was already completed
    """
    with atomic(session, "end_workout"):
        workout = session.get(WorkoutSession, workout_id)
        if workout is None:
            return WorkoutDoesNotExist(id=workout_id)
        if workout.user_id != caller_id:
            logger.warning("Caller %s tried to end workout %s owned by %s", caller_id, workout_id, workout.user_id)
            return AuthenticationFail(caller_id=caller_id)
        if isinstance(calories, bool) or not isinstance(calories, int) or not 0 < calories <= MAX_CALORIES:
            return InvalidPayload(field="calories")
        if workout.is_completed:
            return WorkoutAlreadyCompleted(id=workout_id)

        workout.finished_at = datetime.now(timezone.utc)
        workout.calories = calories
        session.add(workout)
        ended = snapshot_workout(workout)

    logger.info("User %s ended workout %s (%d kcal)", caller_id, workout_id, calories)
    return ended


def get_workout(session: Session, workout_id: str) -> Union[WorkoutSession, WorkoutDoesNotExist]:
    """Get a workout session by ID"""
    workout = session.get(WorkoutSession, workout_id)
    if workout is None:
        return WorkoutDoesNotExist(id=workout_id)
    return snapshot_workout(workout)


def list_workouts(session: Session) -> List[WorkoutSession]:
    """List all workout sessions"""
    return [snapshot_workout(w) for w in session.exec(select(WorkoutSession)).all()]


def list_user_workouts(session: Session, user_id: str) -> Union[List[WorkoutSession], UserDoesNotExist]:
    """Workouts referenced by a user's session_ids, in the order they were started."""
    user = session.get(User, user_id)
    if user is None:
        return UserDoesNotExist(id=user_id)

    workouts = []
    for workout_id in user.session_ids:
        workout = session.get(WorkoutSession, workout_id)
        if workout is not None:
            workouts.append(snapshot_workout(workout))
    return workouts


def remove_workouts(session: Session, workout_ids: Iterable[str]) -> int:
    """
    Delete the given workout sessions, skipping ids that are already gone.

    Must be called inside an open `atomic` block; nothing is committed here.

    Returns:
        Number of sessions actually removed
    """
    removed = 0
    for workout_id in workout_ids:
        workout = session.get(WorkoutSession, workout_id)
        if workout is None:
            logger.warning("Workout %s listed on its owner but missing from the ledger; skipping", workout_id)
            continue
        session.delete(workout)
        removed += 1
    return removed
