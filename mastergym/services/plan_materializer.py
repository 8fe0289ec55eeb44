"""Turn a plan-day template into fresh session progress."""
from collections.abc import Iterable
from typing import Any, Protocol

from mastergym.models.enums import DayOfWeek
from mastergym.schemas.training_plan import DayPlan
from mastergym.schemas.workout_session import ExerciseProgress, SetProgress


class HasDays(Protocol):
    days: Iterable[DayPlan | dict[str, Any]]


def find_day(plan: HasDays, day: DayOfWeek | str) -> DayPlan | None:
    """First day entry matching ``day``; weekdays are not unique within a plan."""
    day = DayOfWeek.parse(day)
    for raw in plan.days or []:
        day_plan = raw if isinstance(raw, DayPlan) else DayPlan.model_validate(raw)
        if day_plan.day is day:
            return day_plan
    return None


def materialize(plan: HasDays, day: DayOfWeek | str) -> list[ExerciseProgress] | None:
    """Exercise progress for ``day`` with every set not yet completed.

    Returns None when the plan has no entry for that weekday. The result is
    built from new objects only, so editing it never touches the plan.
    """
    day_plan = find_day(plan, day)
    if day_plan is None:
        return None

    return [
        ExerciseProgress(
            exercise_name=exercise.name,
            no_of_sets=exercise.no_of_sets,
            sets=[
                SetProgress(
                    reps=template_set.reps,
                    weight=template_set.weight,
                    rest_time=template_set.rest_time,
                    completed=False,
                )
                for template_set in exercise.sets
            ],
        )
        for exercise in day_plan.exercises
    ]
