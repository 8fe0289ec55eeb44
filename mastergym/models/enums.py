"""Closed value sets shared by the data model."""
from datetime import datetime
from enum import Enum

from mastergym.core.exceptions import ValidationError


class UserRole(str, Enum):
    ADMIN = "admin"
    TRAINER = "trainer"
    TRAINER_MANAGED_CUSTOMER = "trainerManagedCustomer"
    SELF_MANAGED_CUSTOMER = "selfManagedCustomer"


class SessionStatus(str, Enum):
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not SessionStatus.ONGOING


class DayOfWeek(str, Enum):
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @classmethod
    def parse(cls, value: "DayOfWeek | str") -> "DayOfWeek":
        """Coerce ``value``, raising a domain ValidationError for unknown days."""
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                "day_of_week",
                f"unknown day {value!r}",
                {"day_of_week": value, "allowed": [day.value for day in cls]},
            ) from None

    @classmethod
    def from_datetime(cls, value: datetime) -> "DayOfWeek":
        """Weekday of ``value``, Monday first."""
        return _WEEKDAYS[value.weekday()]


_WEEKDAYS = list(DayOfWeek)


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    POST_WORKOUT = "postWorkout"


class PublishStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class GalleryAccess(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
