"""Column types shared by the models."""
from enum import Enum

from sqlalchemy import JSON
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB

# Embedded documents (plan days, session exercises)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def enum_type(enum_cls: type[Enum], name: str) -> SAEnum:
    """Store an enum by value and reject unknown strings before they reach the database."""
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        validate_strings=True,
        length=32,
        values_callable=lambda members: [m.value for m in members],
    )
