"""Logged workout sessions."""
from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer

from mastergym.core.clock import utcnow
from mastergym.db.database import Base
from mastergym.models.enums import DayOfWeek, SessionStatus
from mastergym.models.types import JSONDocument, enum_type


class WorkoutSession(Base):
    """One workout, from start until it is completed or cancelled.

    ``exercises`` holds a list of ``ExerciseProgress`` documents. The list is
    always replaced as a whole, never mutated in place.
    """
    __tablename__ = "workout_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    training_plan_id = Column(Integer, ForeignKey("training_plans.id", ondelete="SET NULL"), nullable=True)

    day_of_week = Column(enum_type(DayOfWeek, "day_of_week"), nullable=False)
    status = Column(enum_type(SessionStatus, "session_status"), nullable=False, default=SessionStatus.ONGOING)

    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)

    exercises = Column(JSONDocument, nullable=False, default=list)
    total_time = Column(Float, nullable=False, default=0)
    total_calories_burned = Column(Float, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_workout_sessions_user_day_start", "user_id", "day_of_week", "start_time"),
        Index("ix_workout_sessions_user_status", "user_id", "status"),
        Index("ix_workout_sessions_user_start", "user_id", "start_time"),
    )

    def __repr__(self):
        return f"<WorkoutSession(id={self.id}, user_id={self.user_id}, status={self.status})>"

    @property
    def is_terminal(self) -> bool:
        return SessionStatus(self.status).is_terminal
