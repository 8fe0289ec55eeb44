from __future__ import annotations
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from mastergym.models.training_plan import TrainingPlan
from mastergym.repositories.base import Repository, UpdateStruct


class TrainingPlanRepository(Repository[TrainingPlan, int]):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, id: int) -> TrainingPlan | None:
        return await self._session.get(TrainingPlan, id)

    async def list(self, include_copies: bool = False) -> list[TrainingPlan]:
        query = select(TrainingPlan)
        if not include_copies:
            query = query.where(TrainingPlan.is_copy.is_(False))
        query = query.order_by(TrainingPlan.created_at.desc(), TrainingPlan.id.desc())
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def list_by_creator(self, creator_id: int) -> list[TrainingPlan]:
        result = await self._session.execute(
            select(TrainingPlan)
            .where(TrainingPlan.created_by == creator_id)
            .order_by(TrainingPlan.created_at.desc(), TrainingPlan.id.desc())
        )
        return list(result.scalars().all())

    async def create(self, entity: TrainingPlan) -> TrainingPlan:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def update(self, id: int, updates: UpdateStruct) -> TrainingPlan | None:
        plan = await self.get(id)
        if plan:
            for key, value in updates.to_columns().items():
                setattr(plan, key, value)
            await self._session.flush()
        return plan

    async def delete(self, id: int) -> bool:
        plan = await self.get(id)
        if plan:
            await self._session.delete(plan)
            await self._session.flush()
            return True
        return False
