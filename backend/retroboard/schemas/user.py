"""User request and response schemas (POST /register, POST /login)."""

from typing import Optional

from pydantic import Field

from retroboard.schemas import CamelModel, UtcDateTime


class CredentialsRequest(CamelModel):
    """
    Body of /register and /login.

    Both fields are optional at the schema level; the service checks presence
    so a missing field yields "email/password required" rather than a
    schema error.
    """

    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    """User summary. The password is deliberately not a field."""

    id: str = Field(description="User identifier (UUID)")
    email: str
    created_at: UtcDateTime
