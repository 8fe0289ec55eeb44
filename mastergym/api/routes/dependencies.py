"""Shared dependencies for API routes.

Caller identity is resolved upstream; user ids arrive as trusted input.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mastergym.db.database import async_session_maker, get_db
from mastergym.services.storage_cleanup import StorageReferenceCollector
from mastergym.services.training_plan import PlanAssignmentService, TrainingPlanService
from mastergym.services.workout_session import WorkoutSessionService
from mastergym.storage import get_blob_store


def get_workout_session_service(db: AsyncSession = Depends(get_db)) -> WorkoutSessionService:
    return WorkoutSessionService(db)


def get_training_plan_service(db: AsyncSession = Depends(get_db)) -> TrainingPlanService:
    return TrainingPlanService(db)


def get_plan_assignment_service(db: AsyncSession = Depends(get_db)) -> PlanAssignmentService:
    return PlanAssignmentService(db)


def get_storage_collector() -> StorageReferenceCollector:
    return StorageReferenceCollector(async_session_maker, get_blob_store())
