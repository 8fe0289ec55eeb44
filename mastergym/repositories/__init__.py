"""Repositories package."""
from mastergym.repositories.base import Repository
from mastergym.repositories.media_repository import MediaReferenceRepository, STORAGE_REFERENCE_COLUMNS
from mastergym.repositories.training_plan_repository import TrainingPlanRepository
from mastergym.repositories.user_repository import UserRepository
from mastergym.repositories.workout_session_repository import WorkoutSessionRepository

__all__ = [
    "Repository",
    "MediaReferenceRepository",
    "STORAGE_REFERENCE_COLUMNS",
    "TrainingPlanRepository",
    "UserRepository",
    "WorkoutSessionRepository",
]
