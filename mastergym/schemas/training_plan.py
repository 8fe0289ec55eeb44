"""Training plan payloads."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from mastergym.models.enums import DayOfWeek, UserRole


class SetTemplate(BaseModel):
    reps: int | None = None
    weight: float | None = None
    rest_time: float | None = None
    notes: str | None = None


class ExerciseTemplate(BaseModel):
    name: str = Field(..., min_length=1)
    no_of_sets: int = Field(..., ge=0)
    sets: list[SetTemplate] = Field(default_factory=list)


class DayPlan(BaseModel):
    day: DayOfWeek
    title: str | None = None
    description: str | None = None
    exercises: list[ExerciseTemplate] = Field(default_factory=list)


def days_to_documents(days: list[DayPlan]) -> list[dict]:
    return [day.model_dump(mode="json", exclude_none=True) for day in days]


class TrainingPlanCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    days: list[DayPlan] = Field(default_factory=list)
    duration_weeks: int = Field(..., ge=1)
    created_by: int


class TrainingPlanUpdate(BaseModel):
    """Explicit partial update; unset fields are left untouched."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    days: list[DayPlan] | None = None
    duration_weeks: int | None = Field(None, ge=1)

    def to_columns(self) -> dict:
        columns = self.model_dump(include=self.model_fields_set, exclude={"days"})
        if "days" in self.model_fields_set and self.days is not None:
            columns["days"] = days_to_documents(self.days)
        return columns


class TrainingPlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    days: list[DayPlan]
    duration_weeks: int
    created_by: int
    is_copy: bool
    is_assigned: bool
    created_at: datetime
    updated_at: datetime


class AssignPlanRequest(BaseModel):
    user_id: int


class AssignPlanResponse(BaseModel):
    training_plan_id: int


class DeletePlanResponse(BaseModel):
    success: bool = True
    detached_users: int


class AssignedUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    role: UserRole
    training_plan_id: int | None
