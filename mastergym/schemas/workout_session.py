"""Workout session payloads and update structs."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from mastergym.models.enums import DayOfWeek, SessionStatus
from mastergym.schemas.datetime import UtcDateTime
from mastergym.schemas.training_plan import SetTemplate


class SetProgress(BaseModel):
    reps: int | None = None
    weight: float | None = None
    rest_time: float | None = None
    completed: bool = False


class ExerciseProgress(BaseModel):
    exercise_name: str = Field(..., min_length=1)
    no_of_sets: int = Field(..., ge=0)
    sets: list[SetProgress] = Field(default_factory=list)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class WorkoutSessionUpdate(BaseModel):
    """Explicit partial update for a session row; only fields that are set are written."""

    exercises: list[ExerciseProgress] | None = None
    status: SessionStatus | None = None
    end_time: datetime | None = None
    total_time: float | None = None
    total_calories_burned: float | None = None
    updated_at: datetime | None = None

    def to_columns(self) -> dict:
        columns = {}
        for field in self.model_fields_set:
            value = getattr(self, field)
            if field == "exercises" and value is not None:
                value = [exercise.to_document() for exercise in value]
            columns[field] = value
        return columns


class StartSessionRequest(BaseModel):
    user_id: int
    training_plan_id: int | None = None
    day_start: UtcDateTime
    day_end: UtcDateTime
    day_of_week: DayOfWeek
    exercises: list[ExerciseProgress] | None = None


class AddExerciseRequest(BaseModel):
    user_id: int
    day_of_week: DayOfWeek
    day_start: UtcDateTime
    day_end: UtcDateTime
    exercise_name: str = Field(..., min_length=1)
    sets: list[SetTemplate] = Field(default_factory=list)


class UpdateProgressRequest(BaseModel):
    exercises: list[ExerciseProgress]
    total_time: float = Field(..., ge=0)
    total_calories_burned: float = Field(..., ge=0)


class CompleteSessionRequest(BaseModel):
    total_time: float = Field(..., ge=0)
    total_calories_burned: float = Field(..., ge=0)


class SessionIdResponse(BaseModel):
    session_id: int


class WorkoutSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    training_plan_id: int | None
    day_of_week: DayOfWeek
    status: SessionStatus
    start_time: datetime
    end_time: datetime | None
    exercises: list[ExerciseProgress]
    total_time: float
    total_calories_burned: float
    created_at: datetime
    updated_at: datetime


class SessionStats(BaseModel):
    total_sessions: int
    total_calories: float
    total_time: float
    avg_time_per_session: float


class SessionRangeSplit(BaseModel):
    current: list[WorkoutSessionResponse]
    previous: list[WorkoutSessionResponse]
