"""Workout session lifecycle.

A session starts ``ongoing`` and ends exactly once as ``completed`` or
``cancelled``. Sessions are deduplicated per user, weekday and
caller-supplied day window ``[day_start, day_end)``: starting a session when
one already exists in the window returns the existing id.
"""
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from mastergym.config.settings import get_settings
from mastergym.core.clock import utcnow
from mastergym.core.exceptions import SessionClosedError, ValidationError
from mastergym.core.logging import get_logger
from mastergym.core.metrics import track_session_transition
from mastergym.core.transactions import transactional
from mastergym.core.windows import in_range
from mastergym.models.enums import DayOfWeek, SessionStatus
from mastergym.models.training_plan import TrainingPlan
from mastergym.models.workout_session import WorkoutSession
from mastergym.repositories.workout_session_repository import WorkoutSessionRepository
from mastergym.schemas.datetime import to_naive_utc
from mastergym.schemas.training_plan import SetTemplate
from mastergym.schemas.workout_session import (
    ExerciseProgress,
    SessionStats,
    SetProgress,
    WorkoutSessionUpdate,
)
from mastergym.services.base import BaseService
from mastergym.services.plan_materializer import materialize

logger = get_logger(__name__)


def _coerce_exercises(exercises: Sequence[ExerciseProgress | dict[str, Any]] | None) -> list[ExerciseProgress]:
    return [ExerciseProgress.model_validate(exercise) for exercise in exercises or []]


def _new_exercise(exercise_name: str, sets: Sequence[SetTemplate | dict[str, Any]]) -> ExerciseProgress:
    templates = [SetTemplate.model_validate(s) for s in sets]
    return ExerciseProgress(
        exercise_name=exercise_name,
        no_of_sets=len(templates),
        sets=[
            SetProgress(reps=t.reps, weight=t.weight, rest_time=t.rest_time, completed=False)
            for t in templates
        ],
    )


class WorkoutSessionService(BaseService):
    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow):
        super().__init__(session)
        self._sessions = WorkoutSessionRepository(session)
        self._clock = clock

    @transactional()
    async def start_session(
        self,
        user_id: int,
        day_start: datetime,
        day_end: datetime,
        day_of_week: DayOfWeek | str,
        training_plan_id: int | None = None,
        exercises: Sequence[ExerciseProgress | dict[str, Any]] | None = None,
    ) -> int:
        """Start today's session, or return the one already started in the window.

        With a training plan the weekday's template is materialized; otherwise
        (or when the plan has nothing for that day) ``exercises`` is used.
        """
        day_of_week = DayOfWeek.parse(day_of_week)
        existing = await self._sessions.get_latest_in_window(
            user_id, day_of_week, to_naive_utc(day_start), to_naive_utc(day_end)
        )
        if existing:
            logger.info(
                "workout_session_reused",
                session_id=existing.id,
                user_id=user_id,
                day_of_week=day_of_week.value,
            )
            return existing.id

        resolved: list[ExerciseProgress] | None = None
        if training_plan_id is not None:
            plan = await self._get_or_404(TrainingPlan, training_plan_id)
            resolved = materialize(plan, day_of_week)
        if not resolved:
            resolved = _coerce_exercises(exercises)
        if not resolved:
            raise ValidationError(
                "exercises",
                f"no exercises to start a session on {day_of_week.value}",
                {"training_plan_id": training_plan_id, "day_of_week": day_of_week.value},
            )

        now = self._clock()
        session = await self._sessions.create(WorkoutSession(
            user_id=user_id,
            training_plan_id=training_plan_id,
            day_of_week=day_of_week,
            status=SessionStatus.ONGOING,
            start_time=now,
            exercises=[exercise.to_document() for exercise in resolved],
            total_time=0,
            total_calories_burned=0,
            created_at=now,
            updated_at=now,
        ))
        track_session_transition("started")
        logger.info(
            "workout_session_started",
            session_id=session.id,
            user_id=user_id,
            training_plan_id=training_plan_id,
            exercise_count=len(resolved),
        )
        return session.id

    @transactional()
    async def add_self_managed_exercise_to_today(
        self,
        user_id: int,
        day_of_week: DayOfWeek | str,
        day_start: datetime,
        day_end: datetime,
        exercise_name: str,
        sets: Sequence[SetTemplate | dict[str, Any]],
    ) -> int:
        """Append one exercise to the day's session, creating the session if needed.

        The existing session keeps its status and totals.
        """
        day_of_week = DayOfWeek.parse(day_of_week)
        exercise = _new_exercise(exercise_name, sets)
        now = self._clock()

        existing = await self._sessions.get_latest_in_window(
            user_id, day_of_week, to_naive_utc(day_start), to_naive_utc(day_end)
        )
        if existing:
            await self._sessions.update(existing.id, WorkoutSessionUpdate(
                exercises=[*_coerce_exercises(existing.exercises), exercise],
                updated_at=now,
            ))
            logger.info(
                "workout_session_exercise_appended",
                session_id=existing.id,
                exercise_name=exercise_name,
                exercise_count=len(existing.exercises),
            )
            return existing.id

        session = await self._sessions.create(WorkoutSession(
            user_id=user_id,
            day_of_week=day_of_week,
            status=SessionStatus.ONGOING,
            start_time=now,
            exercises=[exercise.to_document()],
            total_time=0,
            total_calories_burned=0,
            created_at=now,
            updated_at=now,
        ))
        track_session_transition("started")
        logger.info(
            "workout_session_started",
            session_id=session.id,
            user_id=user_id,
            self_managed=True,
        )
        return session.id

    @transactional()
    async def update_session_progress(
        self,
        session_id: int,
        exercises: Sequence[ExerciseProgress | dict[str, Any]],
        total_time: float,
        total_calories_burned: float,
    ) -> int:
        """Overwrite exercises and totals. The session stays ongoing even though end_time is set."""
        session = await self._get_ongoing(session_id, "update")
        now = self._clock()
        await self._sessions.update(session.id, WorkoutSessionUpdate(
            exercises=_coerce_exercises(exercises),
            total_time=total_time,
            total_calories_burned=total_calories_burned,
            end_time=now,
            updated_at=now,
        ))
        track_session_transition("progress_updated")
        return session.id

    @transactional()
    async def complete_session(
        self,
        session_id: int,
        total_time: float,
        total_calories_burned: float,
    ) -> int:
        session = await self._get_ongoing(session_id, "complete")
        now = self._clock()
        await self._sessions.update(session.id, WorkoutSessionUpdate(
            status=SessionStatus.COMPLETED,
            end_time=now,
            total_time=total_time,
            total_calories_burned=total_calories_burned,
            updated_at=now,
        ))
        track_session_transition("completed")
        logger.info("workout_session_completed", session_id=session.id, total_time=total_time)
        return session.id

    @transactional()
    async def cancel_session(self, session_id: int) -> int:
        session = await self._get_ongoing(session_id, "cancel")
        now = self._clock()
        await self._sessions.update(session.id, WorkoutSessionUpdate(
            status=SessionStatus.CANCELLED,
            end_time=now,
            updated_at=now,
        ))
        track_session_transition("cancelled")
        logger.info("workout_session_cancelled", session_id=session.id)
        return session.id

    async def _get_ongoing(self, session_id: int, action: str) -> WorkoutSession:
        session = await self._get_or_404(WorkoutSession, session_id)
        if session.is_terminal:
            raise SessionClosedError(session_id, session.status.value, action)
        return session

    @transactional(readonly=True)
    async def get_session(self, session_id: int) -> WorkoutSession:
        return await self._get_or_404(WorkoutSession, session_id)

    @transactional(readonly=True)
    async def get_ongoing_session(self, user_id: int) -> WorkoutSession | None:
        return await self._sessions.get_ongoing(user_id)

    @transactional(readonly=True)
    async def get_latest_session_for_day(
        self,
        user_id: int,
        day_start: datetime,
        day_end: datetime,
        day_of_week: DayOfWeek | str | None = None,
    ) -> WorkoutSession | None:
        """Latest session in ``[day_start, day_end)``.

        Without ``day_of_week`` the weekday of ``day_start`` is used; an explicit
        weekday is trusted as given.
        """
        day_start = to_naive_utc(day_start)
        day = DayOfWeek.parse(day_of_week) if day_of_week is not None else DayOfWeek.from_datetime(day_start)
        return await self._sessions.get_latest_in_window(user_id, day, day_start, to_naive_utc(day_end))

    @transactional(readonly=True)
    async def get_session_history(self, user_id: int, limit: int) -> list[WorkoutSession]:
        """Most recent sessions first, at most ``limit`` of them after capping it
        at ``session_history_max_limit``.
        """
        if limit < 1:
            raise ValidationError("limit", "must be at least 1", {"limit": limit})
        limit = min(limit, get_settings().session_history_max_limit)
        return await self._sessions.list_recent(user_id, limit)

    @transactional(readonly=True)
    async def get_session_stats(self, user_id: int) -> SessionStats:
        total_sessions, total_calories, total_time = await self._sessions.completed_totals(user_id)
        return SessionStats(
            total_sessions=total_sessions,
            total_calories=total_calories,
            total_time=total_time,
            avg_time_per_session=total_time / total_sessions if total_sessions else 0,
        )

    @transactional(readonly=True)
    async def get_client_range_sessions(
        self,
        user_id: int,
        range_start: datetime,
        range_end: datetime,
        previous_start: datetime,
        previous_end: datetime,
    ) -> dict[str, list[WorkoutSession]]:
        """Split a user's sessions into the current and previous comparison ranges.

        Both ranges include their end points. A session inside the current range
        is never also counted in the previous one.
        """
        range_start, range_end = to_naive_utc(range_start), to_naive_utc(range_end)
        previous_start, previous_end = to_naive_utc(previous_start), to_naive_utc(previous_end)

        sessions = await self._sessions.list_started_between(
            user_id,
            min(range_start, previous_start),
            max(range_end, previous_end),
        )

        current: list[WorkoutSession] = []
        previous: list[WorkoutSession] = []
        for session in sessions:
            if in_range(session.start_time, range_start, range_end):
                current.append(session)
            elif in_range(session.start_time, previous_start, previous_end):
                previous.append(session)
        return {"current": current, "previous": previous}
