"""Database engine, session factory and declarative base."""
from collections.abc import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from mastergym.config.settings import get_settings
from mastergym.core.logging import get_logger

logger = get_logger(__name__)

settings = get_settings()


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create the async database engine.

    SQLite opens a fresh connection per checkout and waits up to 30s on
    a locked database file; pool sizing only applies to server databases.
    """
    url = url or settings.database_url
    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=settings.debug,
            future=True,
            poolclass=NullPool,
            connect_args={"timeout": 30},
        )
    return create_async_engine(
        url,
        echo=settings.debug,
        future=True,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=30,
        pool_recycle=300,
        pool_pre_ping=True,
    )


def create_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = create_engine()

async_session_maker = create_session_maker(engine)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """Dependency that provides a request-scoped database session."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create missing tables. Production schemas are managed by Alembic."""
    bind = bind or engine

    # Register every model on Base.metadata
    import mastergym.models  # noqa: F401

    if bind.url.get_backend_name() == "sqlite":
        async with bind.connect() as conn:
            await conn.execute(text("PRAGMA journal_mode=WAL"))
            await conn.commit()

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_initialized", backend=bind.url.get_backend_name())


async def check_database() -> bool:
    """Return True when the primary database answers a trivial query."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning("database_health_check_failed", error=str(e))
        return False


async def close_engine() -> None:
    await engine.dispose()
