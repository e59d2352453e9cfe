"""
User store: one profile per caller identity.

Creation, lookup, listing and deletion of users. Deleting a user cascades into
the workout ledger, removing every session listed in the user's session_ids
before the user record itself goes.
"""

import logging
from typing import List, Union

from sqlmodel import Session, select

from app.models.user import User
from app.services.errors import InvalidPayload, UserAlreadyExists, UserDoesNotExist, is_blank
from app.services.transaction import atomic
from app.services.workout_ledger import remove_workouts

logger = logging.getLogger(__name__)


def snapshot_user(user: User) -> User:
    """Detached copy of a stored user; edits to it never reach the store."""
    return User(**user.model_dump())


def create_user(session: Session, caller_id: str, name: str) -> Union[User, UserAlreadyExists, InvalidPayload]:
    """
    Create the caller's user profile.

    Returns:
        The new User (id == caller_id, empty session_ids)
        UserAlreadyExists if the caller already has a profile
        InvalidPayload("name") if name is empty or whitespace
    """
    with atomic(session, "create_user"):
        if session.get(User, caller_id) is not None:
            return UserAlreadyExists(id=caller_id)
        if is_blank(name):
            return InvalidPayload(field="name")

        user = User(id=caller_id, name=name, session_ids=[])
        session.add(user)
        created = snapshot_user(user)

    logger.info("Created user %s", caller_id)
    return created


def get_user_by_id(session: Session, user_id: str) -> Union[User, UserDoesNotExist]:
    """Get a user by ID"""
    user = session.get(User, user_id)
    if user is None:
        return UserDoesNotExist(id=user_id)
    return snapshot_user(user)


def get_all_users(session: Session) -> List[User]:
    """List all users"""
    return [snapshot_user(u) for u in session.exec(select(User)).all()]


def delete_user(session: Session, caller_id: str) -> Union[User, UserDoesNotExist]:
    """
    Delete the caller's profile and every workout it lists.

    Workout ids that are already missing from the ledger are skipped; the
    cascade is best-effort cleanup and never fails the deletion.

    Returns:
        Snapshot of the user as it was before deletion
        UserDoesNotExist if the caller has no profile
    """
    with atomic(session, "delete_user"):
        user = session.get(User, caller_id)
        if user is None:
            return UserDoesNotExist(id=caller_id)

        deleted = snapshot_user(user)
        removed = remove_workouts(session, deleted.session_ids)
        session.delete(user)

    logger.info("Deleted user %s and %d workout(s)", caller_id, removed)
    return deleted
