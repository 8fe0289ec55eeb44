"""Training plan templates: authoring, assignment and deletion."""
import copy
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from mastergym.core.clock import utcnow
from mastergym.core.logging import get_logger
from mastergym.core.metrics import track_plan_operation
from mastergym.core.transactions import transactional
from mastergym.models.training_plan import TrainingPlan
from mastergym.models.user import User
from mastergym.repositories.training_plan_repository import TrainingPlanRepository
from mastergym.repositories.user_repository import UserRepository
from mastergym.schemas.training_plan import (
    TrainingPlanCreate,
    TrainingPlanUpdate,
    days_to_documents,
)
from mastergym.schemas.user import UserUpdate
from mastergym.services.base import BaseService

logger = get_logger(__name__)


class TrainingPlanService(BaseService):
    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow):
        super().__init__(session)
        self._plans = TrainingPlanRepository(session)
        self._users = UserRepository(session)
        self._clock = clock

    @transactional()
    async def create_plan(self, data: TrainingPlanCreate) -> TrainingPlan:
        now = self._clock()
        plan = await self._plans.create(TrainingPlan(
            name=data.name,
            description=data.description,
            days=days_to_documents(data.days),
            duration_weeks=data.duration_weeks,
            created_by=data.created_by,
            is_copy=False,
            is_assigned=False,
            created_at=now,
            updated_at=now,
        ))
        logger.info("training_plan_created", training_plan_id=plan.id, created_by=data.created_by)
        return plan

    @transactional(readonly=True)
    async def get_plan(self, plan_id: int) -> TrainingPlan:
        return await self._get_or_404(TrainingPlan, plan_id)

    @transactional()
    async def update_plan(self, plan_id: int, updates: TrainingPlanUpdate) -> TrainingPlan:
        await self._get_or_404(TrainingPlan, plan_id)
        plan = await self._plans.update(plan_id, updates)
        plan.updated_at = self._clock()
        logger.info("training_plan_updated", training_plan_id=plan_id, fields=sorted(updates.model_fields_set))
        return plan

    @transactional(readonly=True)
    async def list_plans(self, include_copies: bool = False) -> list[TrainingPlan]:
        return await self._plans.list(include_copies=include_copies)

    @transactional(readonly=True)
    async def list_plans_by_creator(self, creator_id: int) -> list[TrainingPlan]:
        return await self._plans.list_by_creator(creator_id)

    @transactional(readonly=True)
    async def list_users_by_plan(self, plan_id: int) -> list[User]:
        return await self._users.list_by_training_plan(plan_id)


class PlanAssignmentService(BaseService):
    """Copy-on-assign, unassign and detach-then-delete for training plans."""

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow):
        super().__init__(session)
        self._plans = TrainingPlanRepository(session)
        self._users = UserRepository(session)
        self._clock = clock

    @transactional()
    async def assign_plan(self, training_plan_id: int, user_id: int) -> int:
        """Give the user a private copy of the plan and point them at it.

        The source plan is left untouched. Returns the id of the copy.
        """
        source = await self._get_or_404(TrainingPlan, training_plan_id)
        user = await self._get_or_404(User, user_id)

        now = self._clock()
        plan_copy = await self._plans.create(TrainingPlan(
            name=f"{source.name} {user.name}",
            description=source.description,
            days=copy.deepcopy(source.days),
            duration_weeks=source.duration_weeks,
            created_by=source.created_by,
            is_copy=True,
            is_assigned=True,
            created_at=now,
            updated_at=now,
        ))
        await self._users.update(user.id, UserUpdate(training_plan_id=plan_copy.id, updated_at=now))

        track_plan_operation("assigned")
        logger.info(
            "training_plan_assigned",
            source_plan_id=source.id,
            training_plan_id=plan_copy.id,
            user_id=user.id,
        )
        return plan_copy.id

    @transactional()
    async def unassign_plan(self, user_id: int) -> None:
        user = await self._get_or_404(User, user_id)
        await self._users.update(user.id, UserUpdate(training_plan_id=None, updated_at=self._clock()))
        track_plan_operation("unassigned")
        logger.info("training_plan_unassigned", user_id=user.id)

    @transactional()
    async def delete_plan(self, plan_id: int) -> int:
        """Detach every user referencing the plan, then delete it.

        Referrers are queried fresh on each call, so retrying after a partial
        failure finishes the job. Returns the number of users detached.
        """
        plan = await self._get_or_404(TrainingPlan, plan_id)

        referrers = await self._users.list_by_training_plan(plan.id)
        now = self._clock()
        for user in referrers:
            await self._users.update(user.id, UserUpdate(training_plan_id=None, updated_at=now))

        await self._plans.delete(plan.id)

        track_plan_operation("deleted")
        logger.info("training_plan_deleted", training_plan_id=plan_id, detached_users=len(referrers))
        return len(referrers)
