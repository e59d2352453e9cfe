# Force SQLModel table registration at test discovery time
# This ensures both ledger tables are registered before any test database creation
from app.models.user import User  # noqa: F401
from app.models.workout_session import WorkoutSession  # noqa: F401
