"""Training plan templates and their per-user copies."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from mastergym.core.clock import utcnow
from mastergym.db.database import Base
from mastergym.models.types import JSONDocument


class TrainingPlan(Base):
    """A weekly training template.

    ``days`` holds an ordered list of day documents, each shaped like
    ``DayPlan``. Copies made on assignment carry ``is_copy=True`` and belong
    to exactly one user.
    """
    __tablename__ = "training_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")

    days = Column(JSONDocument, nullable=False, default=list)
    duration_weeks = Column(Integer, nullable=False)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_copy = Column(Boolean, nullable=False, default=False)
    is_assigned = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<TrainingPlan(id={self.id}, name={self.name!r}, is_copy={self.is_copy})>"
