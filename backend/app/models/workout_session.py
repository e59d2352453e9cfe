from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class WorkoutSession(SQLModel, table=True):
    """A single workout, started and later completed by the same caller."""

    __tablename__ = "workout_sessions"

    id: str = Field(primary_key=True)
    user_id: str = Field(index=True)  # Owner; no FK, the user table is keyed independently
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = Field(default=None)  # None until completed
    calories: int = Field(default=0)
    muscle_group: str  # shoulders|back|chest|legs|cardio

    @property
    def is_completed(self) -> bool:
        return self.finished_at is not None
