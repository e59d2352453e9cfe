from app.models.user import User
from app.models.workout_session import WorkoutSession

__all__ = [
    "User",
    "WorkoutSession",
]
