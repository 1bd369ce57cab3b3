"""
RetroBoard Backend — Board SQLAlchemy Model
=============================================

What:  ORM model for the `boards` table.

Lifecycle:
    1. Created by POST /boards (created_at == updated_at)
    2. updated_at bumped on title edit and on every note create/update/delete
    3. Deleted by DELETE /boards/{id}; its notes go with it

Query Patterns:
    - List a user's boards: SELECT ... WHERE userId = :uid ORDER BY createdAt DESC
      → idx_boards_user_id
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from retroboard.database import Base, utcnow


class Board(Base):
    __tablename__ = "boards"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    user_id: Mapped[str] = mapped_column(
        "userId",
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime,
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime,
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_boards_user_id", "userId"),
    )

    def touch(self) -> None:
        """Mark the board as modified now."""
        self.updated_at = utcnow()

    def __repr__(self) -> str:
        return f"<Board(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
