"""Tests for the workout session lifecycle."""
from datetime import timedelta, timezone

import pytest

from mastergym.config.settings import get_settings
from mastergym.core.exceptions import BusinessRuleError, NotFoundError, SessionClosedError, ValidationError
from mastergym.models.enums import DayOfWeek, SessionStatus
from mastergym.services.workout_session import WorkoutSessionService

from tests.helpers import MONDAY, day_window

BENCH = {
    "exercise_name": "Bench Press",
    "no_of_sets": 2,
    "sets": [{"reps": 8, "weight": 60}, {"reps": 8, "weight": 60}],
}


@pytest.fixture
def service(db, clock):
    return WorkoutSessionService(db, clock=clock)


async def _start_on(service, clock, user_id, day, **kwargs):
    """Start a session at 10:00 on ``day``."""
    clock.now = day.replace(hour=10)
    day_start, day_end = day_window(day)
    kwargs.setdefault("exercises", [BENCH])
    return await service.start_session(
        user_id, day_start, day_end, DayOfWeek.from_datetime(day), **kwargs
    )


class TestStartSession:

    @pytest.mark.asyncio
    async def test_materializes_plan_day(self, service, client_user, squat_plan, clock):
        day_start, day_end = day_window(MONDAY)

        session_id = await service.start_session(
            client_user.id, day_start, day_end, DayOfWeek.MON, training_plan_id=squat_plan.id
        )

        session = await service.get_session(session_id)
        assert session.status is SessionStatus.ONGOING
        assert session.training_plan_id == squat_plan.id
        assert session.start_time == clock.now
        assert session.end_time is None
        assert session.total_time == 0
        assert session.total_calories_burned == 0
        assert session.exercises == [
            {
                "exercise_name": "Squat",
                "no_of_sets": 3,
                "sets": [{"reps": 5, "weight": 100.0, "completed": False}] * 3,
            }
        ]

    @pytest.mark.asyncio
    async def test_is_idempotent_within_day_window(self, service, client_user, squat_plan, clock):
        day_start, day_end = day_window(MONDAY)

        first = await service.start_session(
            client_user.id, day_start, day_end, DayOfWeek.MON, training_plan_id=squat_plan.id
        )
        clock.advance(timedelta(hours=3))
        second = await service.start_session(
            client_user.id, day_start, day_end, DayOfWeek.MON, exercises=[BENCH]
        )

        assert first == second
        history = await service.get_session_history(client_user.id, 10)
        assert len(history) == 1

    @pytest.mark.asyncio
    async def test_completed_session_still_blocks_restart(self, service, client_user):
        day_start, day_end = day_window(MONDAY)
        session_id = await service.start_session(
            client_user.id, day_start, day_end, DayOfWeek.MON, exercises=[BENCH]
        )
        await service.complete_session(session_id, total_time=1800, total_calories_burned=250)

        again = await service.start_session(
            client_user.id, day_start, day_end, DayOfWeek.MON, exercises=[BENCH]
        )

        assert again == session_id

    @pytest.mark.asyncio
    async def test_next_day_gets_new_session(self, service, client_user, clock):
        monday_id = await _start_on(service, clock, client_user.id, MONDAY)
        tuesday_id = await _start_on(service, clock, client_user.id, MONDAY + timedelta(days=1))

        assert monday_id != tuesday_id

    @pytest.mark.asyncio
    async def test_aware_window_is_normalized_to_utc(self, service, client_user):
        day_start, day_end = day_window(MONDAY)

        first = await service.start_session(
            client_user.id, day_start, day_end, DayOfWeek.MON, exercises=[BENCH]
        )
        second = await service.start_session(
            client_user.id,
            day_start.replace(tzinfo=timezone.utc),
            day_end.replace(tzinfo=timezone.utc),
            "mon",
            exercises=[BENCH],
        )

        assert first == second

    @pytest.mark.asyncio
    async def test_missing_plan_day_without_exercises_fails(self, service, client_user, squat_plan):
        day_start, day_end = day_window(MONDAY)

        with pytest.raises(ValidationError) as exc_info:
            await service.start_session(
                client_user.id, day_start, day_end, DayOfWeek.TUE, training_plan_id=squat_plan.id
            )

        assert exc_info.value.code == "VAL_EXERCISES_001"
        assert await service.get_ongoing_session(client_user.id) is None

    @pytest.mark.asyncio
    async def test_missing_plan_day_falls_back_to_exercises(self, service, client_user, squat_plan):
        day_start, day_end = day_window(MONDAY)

        session_id = await service.start_session(
            client_user.id,
            day_start,
            day_end,
            DayOfWeek.TUE,
            training_plan_id=squat_plan.id,
            exercises=[BENCH],
        )

        session = await service.get_session(session_id)
        assert [e["exercise_name"] for e in session.exercises] == ["Bench Press"]

    @pytest.mark.asyncio
    async def test_unknown_plan_raises_not_found(self, service, client_user):
        day_start, day_end = day_window(MONDAY)

        with pytest.raises(NotFoundError):
            await service.start_session(
                client_user.id, day_start, day_end, DayOfWeek.MON, training_plan_id=9999
            )

    @pytest.mark.asyncio
    async def test_no_plan_and_no_exercises_fails(self, service, client_user):
        day_start, day_end = day_window(MONDAY)

        with pytest.raises(ValidationError):
            await service.start_session(client_user.id, day_start, day_end, DayOfWeek.MON)


class TestSelfManagedExercises:

    @pytest.mark.asyncio
    async def test_two_adds_share_one_session(self, service, self_managed_user):
        day_start, day_end = day_window(MONDAY)

        first = await service.add_self_managed_exercise_to_today(
            self_managed_user.id, "mon", day_start, day_end, "Push-up", [{"reps": 20}, {"reps": 20}]
        )
        second = await service.add_self_managed_exercise_to_today(
            self_managed_user.id, "mon", day_start, day_end, "Plank", [{"rest_time": 60}]
        )

        assert first == second
        session = await service.get_session(first)
        assert session.training_plan_id is None
        assert session.status is SessionStatus.ONGOING
        assert session.exercises == [
            {
                "exercise_name": "Push-up",
                "no_of_sets": 2,
                "sets": [{"reps": 20, "completed": False}, {"reps": 20, "completed": False}],
            },
            {
                "exercise_name": "Plank",
                "no_of_sets": 1,
                "sets": [{"rest_time": 60.0, "completed": False}],
            },
        ]

    @pytest.mark.asyncio
    async def test_appends_to_started_plan_session(self, service, client_user, squat_plan):
        day_start, day_end = day_window(MONDAY)
        session_id = await service.start_session(
            client_user.id, day_start, day_end, DayOfWeek.MON, training_plan_id=squat_plan.id
        )

        appended = await service.add_self_managed_exercise_to_today(
            client_user.id, DayOfWeek.MON, day_start, day_end, "Lunge", [{"reps": 10}]
        )

        assert appended == session_id
        session = await service.get_session(session_id)
        assert [e["exercise_name"] for e in session.exercises] == ["Squat", "Lunge"]
        assert session.training_plan_id == squat_plan.id

    @pytest.mark.asyncio
    async def test_appends_to_completed_session_without_reopening(self, service, self_managed_user):
        day_start, day_end = day_window(MONDAY)
        session_id = await service.add_self_managed_exercise_to_today(
            self_managed_user.id, "mon", day_start, day_end, "Push-up", [{"reps": 20}]
        )
        await service.complete_session(session_id, total_time=600, total_calories_burned=80)

        await service.add_self_managed_exercise_to_today(
            self_managed_user.id, "mon", day_start, day_end, "Dips", [{"reps": 12}]
        )

        session = await service.get_session(session_id)
        assert session.status is SessionStatus.COMPLETED
        assert session.total_time == 600
        assert len(session.exercises) == 2


class TestSessionTransitions:

    @pytest.mark.asyncio
    async def test_progress_sets_end_time_but_stays_ongoing(self, service, client_user, squat_plan, clock):
        day_start, day_end = day_window(MONDAY)
        session_id = await service.start_session(
            client_user.id, day_start, day_end, DayOfWeek.MON, training_plan_id=squat_plan.id
        )
        clock.advance(timedelta(minutes=20))

        await service.update_session_progress(
            session_id,
            exercises=[{
                "exercise_name": "Squat",
                "no_of_sets": 3,
                "sets": [
                    {"reps": 5, "weight": 100, "completed": True},
                    {"reps": 5, "weight": 100, "completed": False},
                    {"reps": 5, "weight": 100, "completed": False},
                ],
            }],
            total_time=1200,
            total_calories_burned=150,
        )

        session = await service.get_session(session_id)
        assert session.status is SessionStatus.ONGOING
        assert session.end_time == clock.now
        assert session.total_time == 1200
        assert session.total_calories_burned == 150
        assert session.exercises[0]["sets"][0]["completed"] is True
        assert (await service.get_ongoing_session(client_user.id)).id == session_id

    @pytest.mark.asyncio
    async def test_complete_session(self, service, client_user, clock):
        session_id = await _start_on(service, clock, client_user.id, MONDAY)
        clock.advance(timedelta(minutes=45))

        await service.complete_session(session_id, total_time=2700, total_calories_burned=320)

        session = await service.get_session(session_id)
        assert session.status is SessionStatus.COMPLETED
        assert session.end_time == clock.now
        assert session.total_time == 2700
        assert session.total_calories_burned == 320
        assert await service.get_ongoing_session(client_user.id) is None

    @pytest.mark.asyncio
    async def test_cancel_keeps_totals(self, service, client_user, clock):
        session_id = await _start_on(service, clock, client_user.id, MONDAY)
        await service.update_session_progress(session_id, [BENCH], total_time=300, total_calories_burned=40)

        await service.cancel_session(session_id)

        session = await service.get_session(session_id)
        assert session.status is SessionStatus.CANCELLED
        assert session.total_time == 300
        assert session.end_time is not None

    @pytest.mark.asyncio
    async def test_terminal_session_rejects_changes(self, service, client_user, clock):
        session_id = await _start_on(service, clock, client_user.id, MONDAY)
        await service.cancel_session(session_id)

        with pytest.raises(BusinessRuleError) as exc_info:
            await service.complete_session(session_id, total_time=10, total_calories_burned=1)
        assert exc_info.value.code == "BR_SESSION_TERMINAL"

        with pytest.raises(SessionClosedError):
            await service.update_session_progress(session_id, [BENCH], total_time=10, total_calories_burned=1)
        with pytest.raises(SessionClosedError):
            await service.cancel_session(session_id)

        assert (await service.get_session(session_id)).status is SessionStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_unknown_session_raises_not_found(self, service):
        with pytest.raises(NotFoundError) as exc_info:
            await service.complete_session(12345, total_time=1, total_calories_burned=1)

        assert exc_info.value.code == "NF_WORKOUTSESSION_001"


class TestSessionQueries:

    @pytest.mark.asyncio
    async def test_latest_for_day_derives_weekday_from_day_start(self, service, client_user, clock):
        session_id = await _start_on(service, clock, client_user.id, MONDAY)
        day_start, day_end = day_window(MONDAY)

        found = await service.get_latest_session_for_day(client_user.id, day_start, day_end)

        assert found.id == session_id

    @pytest.mark.asyncio
    async def test_latest_for_day_trusts_explicit_weekday(self, service, client_user, clock):
        await _start_on(service, clock, client_user.id, MONDAY)
        day_start, day_end = day_window(MONDAY)

        assert await service.get_latest_session_for_day(client_user.id, day_start, day_end, "tue") is None

    @pytest.mark.asyncio
    async def test_latest_for_day_window_is_half_open(self, service, client_user, clock):
        await _start_on(service, clock, client_user.id, MONDAY)

        found = await service.get_latest_session_for_day(
            client_user.id, MONDAY, MONDAY.replace(hour=10), DayOfWeek.MON
        )

        assert found is None

    @pytest.mark.asyncio
    async def test_history_newest_first(self, service, client_user, clock):
        ids = [
            await _start_on(service, clock, client_user.id, MONDAY + timedelta(days=offset))
            for offset in range(3)
        ]

        history = await service.get_session_history(client_user.id, 2)

        assert [s.id for s in history] == [ids[2], ids[1]]

    @pytest.mark.asyncio
    async def test_history_limit_is_capped(self, service, client_user, clock, monkeypatch):
        monkeypatch.setattr(get_settings(), "session_history_max_limit", 2)
        for offset in range(3):
            await _start_on(service, clock, client_user.id, MONDAY + timedelta(days=offset))

        history = await service.get_session_history(client_user.id, 500)

        assert len(history) == 2

    @pytest.mark.asyncio
    async def test_history_rejects_non_positive_limit(self, service, client_user):
        with pytest.raises(ValidationError) as exc_info:
            await service.get_session_history(client_user.id, 0)

        assert exc_info.value.code == "VAL_LIMIT_001"

    @pytest.mark.asyncio
    async def test_stats_count_only_completed(self, service, client_user, clock):
        first = await _start_on(service, clock, client_user.id, MONDAY)
        second = await _start_on(service, clock, client_user.id, MONDAY + timedelta(days=1))
        third = await _start_on(service, clock, client_user.id, MONDAY + timedelta(days=2))
        await service.complete_session(first, total_time=1000, total_calories_burned=100)
        await service.complete_session(second, total_time=2000, total_calories_burned=300)
        await service.cancel_session(third)

        stats = await service.get_session_stats(client_user.id)

        assert stats.total_sessions == 2
        assert stats.total_calories == 400
        assert stats.total_time == 3000
        assert stats.avg_time_per_session == 1500

    @pytest.mark.asyncio
    async def test_stats_without_sessions(self, service, client_user):
        stats = await service.get_session_stats(client_user.id)

        assert stats.total_sessions == 0
        assert stats.avg_time_per_session == 0

    @pytest.mark.asyncio
    async def test_range_split_is_inclusive_and_disjoint(self, service, client_user, clock):
        week = timedelta(days=7)
        current_start = MONDAY
        current_end = MONDAY + week
        previous_start = MONDAY - week
        previous_end = MONDAY

        in_previous = await _start_on(service, clock, client_user.id, MONDAY - timedelta(days=3))
        in_current = await _start_on(service, clock, client_user.id, MONDAY + timedelta(days=2))
        # Exactly on the boundary shared by both ranges
        clock.now = MONDAY
        on_boundary = await service.start_session(
            client_user.id, MONDAY, MONDAY + timedelta(hours=1), DayOfWeek.MON, exercises=[BENCH]
        )
        outside = await _start_on(service, clock, client_user.id, MONDAY - timedelta(days=20))

        split = await service.get_client_range_sessions(
            client_user.id, current_start, current_end, previous_start, previous_end
        )

        current_ids = {s.id for s in split["current"]}
        previous_ids = {s.id for s in split["previous"]}
        assert current_ids == {in_current, on_boundary}
        assert previous_ids == {in_previous}
        assert outside not in current_ids | previous_ids


class TestDayOfWeekInput:

    @pytest.mark.asyncio
    async def test_unknown_day_on_start(self, service, client_user):
        day_start, day_end = day_window(MONDAY)

        with pytest.raises(ValidationError) as exc_info:
            await service.start_session(client_user.id, day_start, day_end, "funday", exercises=[BENCH])

        assert exc_info.value.code == "VAL_DAY_OF_WEEK_001"
        assert exc_info.value.details["day_of_week"] == "funday"

    @pytest.mark.asyncio
    async def test_unknown_day_on_self_managed_add(self, service, self_managed_user):
        day_start, day_end = day_window(MONDAY)

        with pytest.raises(ValidationError):
            await service.add_self_managed_exercise_to_today(
                self_managed_user.id, "Monday", day_start, day_end, "Push-up", [{"reps": 10}]
            )

    @pytest.mark.asyncio
    async def test_unknown_day_on_latest_lookup(self, service, client_user):
        day_start, day_end = day_window(MONDAY)

        with pytest.raises(ValidationError):
            await service.get_latest_session_for_day(client_user.id, day_start, day_end, "xyz")
