from __future__ import annotations
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from mastergym.models.user import User
from mastergym.repositories.base import Repository, UpdateStruct


class UserRepository(Repository[User, int]):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, id: int) -> User | None:
        return await self._session.get(User, id)

    async def list_by_training_plan(self, training_plan_id: int) -> list[User]:
        result = await self._session.execute(
            select(User)
            .where(User.training_plan_id == training_plan_id)
            .order_by(User.id)
        )
        return list(result.scalars().all())

    async def create(self, entity: User) -> User:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def update(self, id: int, updates: UpdateStruct) -> User | None:
        user = await self.get(id)
        if user:
            for key, value in updates.to_columns().items():
                setattr(user, key, value)
            await self._session.flush()
        return user

    async def delete(self, id: int) -> bool:
        user = await self.get(id)
        if user:
            await self._session.delete(user)
            await self._session.flush()
            return True
        return False
