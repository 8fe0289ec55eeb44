from datetime import datetime

from pydantic import BaseModel


class UserUpdate(BaseModel):
    """Explicit partial update for a user row."""

    training_plan_id: int | None = None
    updated_at: datetime | None = None

    def to_columns(self) -> dict:
        return self.model_dump(include=self.model_fields_set)
