from __future__ import annotations
from datetime import datetime
from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from mastergym.models.enums import DayOfWeek, SessionStatus
from mastergym.models.workout_session import WorkoutSession
from mastergym.repositories.base import Repository, UpdateStruct


class WorkoutSessionRepository(Repository[WorkoutSession, int]):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, id: int) -> WorkoutSession | None:
        return await self._session.get(WorkoutSession, id)

    async def get_latest_in_window(
        self,
        user_id: int,
        day_of_week: DayOfWeek,
        day_start: datetime,
        day_end: datetime,
    ) -> WorkoutSession | None:
        """Most recent session for the weekday with start_time in [day_start, day_end)."""
        result = await self._session.execute(
            select(WorkoutSession)
            .where(
                and_(
                    WorkoutSession.user_id == user_id,
                    WorkoutSession.day_of_week == day_of_week,
                    WorkoutSession.start_time >= day_start,
                    WorkoutSession.start_time < day_end,
                )
            )
            .order_by(WorkoutSession.start_time.desc(), WorkoutSession.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_ongoing(self, user_id: int) -> WorkoutSession | None:
        result = await self._session.execute(
            select(WorkoutSession)
            .where(
                and_(
                    WorkoutSession.user_id == user_id,
                    WorkoutSession.status == SessionStatus.ONGOING,
                )
            )
            .order_by(WorkoutSession.start_time.desc(), WorkoutSession.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_recent(self, user_id: int, limit: int) -> list[WorkoutSession]:
        result = await self._session.execute(
            select(WorkoutSession)
            .where(WorkoutSession.user_id == user_id)
            .order_by(WorkoutSession.start_time.desc(), WorkoutSession.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_started_between(
        self,
        user_id: int,
        start: datetime,
        end: datetime,
    ) -> list[WorkoutSession]:
        """Sessions with start_time in [start, end], oldest first."""
        result = await self._session.execute(
            select(WorkoutSession)
            .where(
                and_(
                    WorkoutSession.user_id == user_id,
                    WorkoutSession.start_time >= start,
                    WorkoutSession.start_time <= end,
                )
            )
            .order_by(WorkoutSession.start_time, WorkoutSession.id)
        )
        return list(result.scalars().all())

    async def completed_totals(self, user_id: int) -> tuple[int, float, float]:
        """(count, calories, time) summed over completed sessions."""
        result = await self._session.execute(
            select(
                func.count(WorkoutSession.id),
                func.coalesce(func.sum(WorkoutSession.total_calories_burned), 0),
                func.coalesce(func.sum(WorkoutSession.total_time), 0),
            ).where(
                and_(
                    WorkoutSession.user_id == user_id,
                    WorkoutSession.status == SessionStatus.COMPLETED,
                )
            )
        )
        count, calories, total_time = result.one()
        return int(count), float(calories), float(total_time)

    async def create(self, entity: WorkoutSession) -> WorkoutSession:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def update(self, id: int, updates: UpdateStruct) -> WorkoutSession | None:
        session = await self.get(id)
        if session:
            for key, value in updates.to_columns().items():
                setattr(session, key, value)
            await self._session.flush()
        return session

    async def delete(self, id: int) -> bool:
        session = await self.get(id)
        if session:
            await self._session.delete(session)
            await self._session.flush()
            return True
        return False
