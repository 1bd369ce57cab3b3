"""Note request and response schemas."""

from typing import Optional

from pydantic import Field

from retroboard.schemas import CamelModel, UtcDateTime


class NoteCreateRequest(CamelModel):
    column_name: Optional[str] = None
    text: Optional[str] = None


class NoteUpdateRequest(CamelModel):
    """Either field may be omitted; at least one must be present."""

    column_name: Optional[str] = None
    text: Optional[str] = None


class NoteResponse(CamelModel):
    id: str = Field(description="Note identifier (UUID)")
    board_id: str
    column_name: str = Field(description="One of Start, Stop, Continue")
    text: str
    created_at: UtcDateTime
