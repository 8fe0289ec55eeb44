"""API routes module."""
from mastergym.api.routes.health import router as health_router
from mastergym.api.routes.maintenance import router as maintenance_router
from mastergym.api.routes.training_plans import router as training_plans_router
from mastergym.api.routes.workout_sessions import router as workout_sessions_router

__all__ = [
    "health_router",
    "maintenance_router",
    "training_plans_router",
    "workout_sessions_router",
]
