"""Gym member and staff accounts."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from mastergym.core.clock import utcnow
from mastergym.db.database import Base
from mastergym.models.enums import UserRole
from mastergym.models.types import enum_type


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    phone_number = Column(String(32), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=True)

    role = Column(enum_type(UserRole, "user_role"), nullable=False)

    trainer_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    # At most one plan per user; plan deletion detaches referrers first
    training_plan_id = Column(
        Integer,
        ForeignKey("training_plans.id", use_alter=True, name="fk_users_training_plan_id"),
        nullable=True,
        index=True,
    )

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, role={self.role}, training_plan_id={self.training_plan_id})>"
