"""Test data builders and a controllable clock."""
from datetime import datetime, timedelta

# A Monday
MONDAY = datetime(2026, 3, 2)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


def day_window(day: datetime) -> tuple[datetime, datetime]:
    start = day.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def squat_plan_days() -> list[dict]:
    return [
        {
            "day": "mon",
            "title": "Legs",
            "exercises": [
                {
                    "name": "Squat",
                    "no_of_sets": 3,
                    "sets": [
                        {"reps": 5, "weight": 100},
                        {"reps": 5, "weight": 100},
                        {"reps": 5, "weight": 100},
                    ],
                }
            ],
        }
    ]
