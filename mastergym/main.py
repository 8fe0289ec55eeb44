"""Main FastAPI application."""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mastergym import __version__
from mastergym.api.routes import (
    health_router,
    maintenance_router,
    training_plans_router,
    workout_sessions_router,
)
from mastergym.config.settings import get_settings
from mastergym.core.error_handlers import domain_error_handler
from mastergym.core.exceptions import DomainError
from mastergym.core.logging import configure_logging, get_logger
from mastergym.core.metrics import set_app_info
from mastergym.db.database import close_engine, init_db
from mastergym.middleware.metrics import MetricsMiddleware
from mastergym.middleware.request_id import RequestIDMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    configure_logging()

    await init_db()
    set_app_info(__version__, "debug" if settings.debug else "production")
    logger.info("application_started", app=settings.app_name, version=__version__)

    yield

    await close_engine()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Client workout tracking, training plan assignment and storage maintenance",
        version=__version__,
        lifespan=lifespan,
    )

    if settings.enable_metrics:
        app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainError, domain_error_handler)

    app.include_router(health_router, tags=["health"])
    app.include_router(workout_sessions_router, prefix="/sessions", tags=["workout-sessions"])
    app.include_router(training_plans_router, prefix="/training-plans", tags=["training-plans"])
    app.include_router(maintenance_router, prefix="/maintenance", tags=["maintenance"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("mastergym.main:app", host="0.0.0.0", port=8000, reload=get_settings().debug)
