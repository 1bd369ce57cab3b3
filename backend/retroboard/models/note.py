"""
RetroBoard Backend — Note SQLAlchemy Model
============================================

What:  ORM model for the `notes` table: one text entry in one column of a board.

Table Design:
    - columnName: restricted to Start / Stop / Continue by a CHECK constraint
      (services reject other values with a 400 before reaching the database)
    - boardId: FK with ON DELETE CASCADE, so removing a board removes its notes
      even when the row is deleted outside the API
    - idx_notes_board_created: serves the per-board "oldest first" listing
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from retroboard.database import Base, utcnow


class ColumnName(str, enum.Enum):
    """The fixed columns every board has, in display order."""

    START = "Start"
    STOP = "Stop"
    CONTINUE = "Continue"


COLUMN_NAMES = tuple(c.value for c in ColumnName)


class Note(Base):
    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    board_id: Mapped[str] = mapped_column(
        "boardId",
        String(36),
        ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=False,
    )

    column_name: Mapped[str] = mapped_column("columnName", String(20), nullable=False)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime,
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        CheckConstraint(
            "\"columnName\" IN ('Start', 'Stop', 'Continue')",
            name="ck_notes_column_name",
        ),
        Index("idx_notes_board_created", "boardId", "createdAt"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, board_id={self.board_id}, column='{self.column_name}')>"
