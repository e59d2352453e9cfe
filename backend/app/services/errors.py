"""
Ledger error taxonomy.

Every failure the user store and workout ledger can report is one of the
tagged values below. Service functions return them instead of raising, so the
caller decides what each kind means (the HTTP layer maps them to status
codes via `status_code`).
"""

from typing import ClassVar, List, Literal

from pydantic import BaseModel


class LedgerError(BaseModel):
    """Base for all tagged ledger errors"""

    status_code: ClassVar[int] = 400

    @property
    def message(self) -> str:
        return self.kind

    def to_detail(self) -> dict:
        return {**self.model_dump(), "message": self.message}


class UserDoesNotExist(LedgerError):
    status_code: ClassVar[int] = 404

    kind: Literal["UserDoesNotExist"] = "UserDoesNotExist"
    id: str

    @property
    def message(self) -> str:
        return f"User '{self.id}' does not exist"


class UserAlreadyExists(LedgerError):
    status_code: ClassVar[int] = 409

    kind: Literal["UserAlreadyExists"] = "UserAlreadyExists"
    id: str

    @property
    def message(self) -> str:
        return f"User '{self.id}' already exists"


class WorkoutDoesNotExist(LedgerError):
    status_code: ClassVar[int] = 404

    kind: Literal["WorkoutDoesNotExist"] = "WorkoutDoesNotExist"
    id: str

    @property
    def message(self) -> str:
        return f"Workout '{self.id}' does not exist"


class WorkoutAlreadyCompleted(LedgerError):
    status_code: ClassVar[int] = 409

    kind: Literal["WorkoutAlreadyCompleted"] = "WorkoutAlreadyCompleted"
    id: str

    @property
    def message(self) -> str:
        return f"Workout '{self.id}' has already been completed"


class MuscleGroupDoesNotExist(LedgerError):
    status_code: ClassVar[int] = 422

    kind: Literal["MuscleGroupDoesNotExist"] = "MuscleGroupDoesNotExist"
    value: str
    recognized: List[str]

    @property
    def message(self) -> str:
        return f"'{self.value}' is not a viable group, please select one of: {', '.join(self.recognized)}"


class AuthenticationFail(LedgerError):
    status_code: ClassVar[int] = 403

    kind: Literal["AuthenticationFail"] = "AuthenticationFail"
    caller_id: str

    @property
    def message(self) -> str:
        return f"Caller '{self.caller_id}' does not own this workout"


class InvalidPayload(LedgerError):
    status_code: ClassVar[int] = 422

    kind: Literal["InvalidPayload"] = "InvalidPayload"
    field: str

    @property
    def message(self) -> str:
        return f"Invalid value for '{self.field}'"


def is_error(result) -> bool:
    """True when a service result is a ledger error rather than an entity."""
    return isinstance(result, LedgerError)


def is_blank(value) -> bool:
    return value is None or not str(value).strip()
