"""API routes for workout sessions."""
from fastapi import APIRouter, Depends, Query

from mastergym.api.routes.dependencies import get_workout_session_service
from mastergym.models.enums import DayOfWeek
from mastergym.schemas.datetime import UtcDateTime
from mastergym.schemas.workout_session import (
    AddExerciseRequest,
    CompleteSessionRequest,
    SessionIdResponse,
    SessionRangeSplit,
    SessionStats,
    StartSessionRequest,
    UpdateProgressRequest,
    WorkoutSessionResponse,
)
from mastergym.services.workout_session import WorkoutSessionService

router = APIRouter()


@router.post("/start", response_model=SessionIdResponse)
async def start_session(
    request: StartSessionRequest,
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    """Start today's session, or return the one already started in the day window."""
    session_id = await service.start_session(
        user_id=request.user_id,
        day_start=request.day_start,
        day_end=request.day_end,
        day_of_week=request.day_of_week,
        training_plan_id=request.training_plan_id,
        exercises=request.exercises,
    )
    return SessionIdResponse(session_id=session_id)


@router.post("/today/exercises", response_model=SessionIdResponse)
async def add_exercise_to_today(
    request: AddExerciseRequest,
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    session_id = await service.add_self_managed_exercise_to_today(
        user_id=request.user_id,
        day_of_week=request.day_of_week,
        day_start=request.day_start,
        day_end=request.day_end,
        exercise_name=request.exercise_name,
        sets=request.sets,
    )
    return SessionIdResponse(session_id=session_id)


@router.get("/ongoing", response_model=WorkoutSessionResponse | None)
async def get_ongoing_session(
    user_id: int,
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    return await service.get_ongoing_session(user_id)


@router.get("/latest", response_model=WorkoutSessionResponse | None)
async def get_latest_session_for_day(
    user_id: int,
    day_start: UtcDateTime,
    day_end: UtcDateTime,
    day_of_week: DayOfWeek | None = None,
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    return await service.get_latest_session_for_day(user_id, day_start, day_end, day_of_week)


@router.get("/history", response_model=list[WorkoutSessionResponse])
async def get_session_history(
    user_id: int,
    limit: int = Query(20, ge=1),
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    """Most recent sessions first.

    ``limit`` is capped at SESSION_HISTORY_MAX_LIMIT (200 by default); larger
    values return at most that many rows.
    """
    return await service.get_session_history(user_id, limit)


@router.get("/stats", response_model=SessionStats)
async def get_session_stats(
    user_id: int,
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    return await service.get_session_stats(user_id)


@router.get("/range", response_model=SessionRangeSplit)
async def get_client_range_sessions(
    user_id: int,
    range_start: UtcDateTime,
    range_end: UtcDateTime,
    previous_start: UtcDateTime,
    previous_end: UtcDateTime,
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    split = await service.get_client_range_sessions(
        user_id, range_start, range_end, previous_start, previous_end
    )
    return SessionRangeSplit(
        current=[WorkoutSessionResponse.model_validate(s) for s in split["current"]],
        previous=[WorkoutSessionResponse.model_validate(s) for s in split["previous"]],
    )


@router.get("/{session_id}", response_model=WorkoutSessionResponse)
async def get_session(
    session_id: int,
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    return await service.get_session(session_id)


@router.put("/{session_id}/progress", response_model=SessionIdResponse)
async def update_session_progress(
    session_id: int,
    request: UpdateProgressRequest,
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    await service.update_session_progress(
        session_id,
        exercises=request.exercises,
        total_time=request.total_time,
        total_calories_burned=request.total_calories_burned,
    )
    return SessionIdResponse(session_id=session_id)


@router.post("/{session_id}/complete", response_model=SessionIdResponse)
async def complete_session(
    session_id: int,
    request: CompleteSessionRequest,
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    await service.complete_session(
        session_id,
        total_time=request.total_time,
        total_calories_burned=request.total_calories_burned,
    )
    return SessionIdResponse(session_id=session_id)


@router.post("/{session_id}/cancel", response_model=SessionIdResponse)
async def cancel_session(
    session_id: int,
    service: WorkoutSessionService = Depends(get_workout_session_service),
):
    await service.cancel_session(session_id)
    return SessionIdResponse(session_id=session_id)
