"""
Shared fixtures for service and API tests.

Every test gets its own SQLite database file, created from the ORM
metadata, and a controllable clock. DATABASE_URL must point at SQLite
before mastergym is imported because the module-level engine is built
on import.
"""
import os
import tempfile
from pathlib import Path

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="mastergym-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'app.db'}"
os.environ["BLOB_STORAGE_DIR"] = str(_TEST_ROOT / "blobs")

import pytest
import pytest_asyncio

from mastergym.db.database import create_engine, create_session_maker, init_db
from mastergym.models import TrainingPlan, User
from mastergym.models.enums import UserRole
from mastergym.storage import LocalBlobStore

from tests.helpers import MONDAY, FakeClock, squat_plan_days


@pytest.fixture
def clock():
    return FakeClock(MONDAY.replace(hour=10))


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return create_session_maker(engine)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def trainer(session_maker):
    async with session_maker() as session, session.begin():
        user = User(name="Tina", phone_number="+15550000001", role=UserRole.TRAINER)
        session.add(user)
    return user


@pytest_asyncio.fixture
async def client_user(session_maker, trainer):
    async with session_maker() as session, session.begin():
        user = User(
            name="Ana",
            phone_number="+15550000002",
            role=UserRole.TRAINER_MANAGED_CUSTOMER,
            trainer_id=trainer.id,
        )
        session.add(user)
    return user


@pytest_asyncio.fixture
async def self_managed_user(session_maker):
    async with session_maker() as session, session.begin():
        user = User(name="Sam", phone_number="+15550000003", role=UserRole.SELF_MANAGED_CUSTOMER)
        session.add(user)
    return user


@pytest_asyncio.fixture
async def squat_plan(session_maker, trainer):
    async with session_maker() as session, session.begin():
        plan = TrainingPlan(
            name="Strength Base",
            description="Three weeks of heavy squats",
            days=squat_plan_days(),
            duration_weeks=3,
            created_by=trainer.id,
            is_copy=False,
            is_assigned=False,
        )
        session.add(plan)
    return plan


@pytest.fixture
def blob_store(session_maker, tmp_path, clock):
    return LocalBlobStore(session_maker, tmp_path / "blobs", clock=clock)
