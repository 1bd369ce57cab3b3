"""
RetroBoard Backend — User SQLAlchemy Model
============================================

What:  ORM model for the `users` table.
Lifecycle: Created by POST /register; never updated or deleted by the API.

The password column holds the password exactly as submitted; login compares
it verbatim.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from retroboard.database import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    # Unique constraint backs the 409 on duplicate registration
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime,
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
