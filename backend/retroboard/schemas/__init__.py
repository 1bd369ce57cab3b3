"""
RetroBoard Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract with the frontend.
Why:   Schemas are separate from SQLAlchemy models so we control exactly what
       is exposed (a user response never carries the password) and how keys
       are spelled on the wire (camelCase: userId, createdAt, columnName).
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every API schema.

    alias_generator=to_camel:  `created_at` is read and written as `createdAt`
    populate_by_name=True:     services can still build schemas with snake_case
    from_attributes=True:      schemas validate straight from ORM rows
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _utc_isoformat(value: datetime) -> str:
    # Stored values are naive UTC (see database.utcnow)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


# Serialized as "2026-01-01T12:00:00.123456+00:00"; stays a plain datetime in Python
UtcDateTime = Annotated[datetime, PlainSerializer(_utc_isoformat, return_type=str, when_used="json")]
