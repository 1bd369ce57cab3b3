"""
Board request and response schemas.

Response shapes:
    BoardResponse:        {id, userId, title, createdAt, updatedAt}
    BoardWithColumns:     BoardResponse + columns {Start: [...], Stop: [...], Continue: [...]}
"""

from typing import Dict, List, Optional

from pydantic import Field

from retroboard.schemas import CamelModel, UtcDateTime


class BoardCreateRequest(CamelModel):
    user_id: Optional[str] = None
    title: Optional[str] = None


class BoardUpdateRequest(CamelModel):
    title: Optional[str] = None


class ColumnNote(CamelModel):
    """A note as it appears inside a board's column."""

    id: str
    text: str
    created_at: UtcDateTime


class BoardResponse(CamelModel):
    id: str = Field(description="Board identifier (UUID)")
    user_id: str = Field(description="Owning user")
    title: str
    created_at: UtcDateTime
    updated_at: UtcDateTime


class BoardWithColumns(BoardResponse):
    columns: Dict[str, List[ColumnNote]] = Field(
        description="Notes grouped by column name, oldest first within each column",
    )
