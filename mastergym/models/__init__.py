"""ORM models package."""
from mastergym.models.enums import (
    DayOfWeek,
    GalleryAccess,
    MealType,
    PublishStatus,
    SessionStatus,
    UserRole,
)
from mastergym.models.media import DietLog, GalleryItem, SuccessStory, TransformationImage
from mastergym.models.storage_blob import StorageBlob
from mastergym.models.training_plan import TrainingPlan
from mastergym.models.user import User
from mastergym.models.workout_session import WorkoutSession

__all__ = [
    "DayOfWeek",
    "GalleryAccess",
    "MealType",
    "PublishStatus",
    "SessionStatus",
    "UserRole",
    "DietLog",
    "GalleryItem",
    "SuccessStory",
    "TransformationImage",
    "StorageBlob",
    "TrainingPlan",
    "User",
    "WorkoutSession",
]
