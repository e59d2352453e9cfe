from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON
from sqlmodel import Column, Field, SQLModel


class User(SQLModel, table=True):
    """One profile per caller identity."""

    __tablename__ = "users"

    id: str = Field(primary_key=True)  # Caller identity, opaque
    name: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    # Workout ids in start order; append-only until the user is deleted
    session_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
