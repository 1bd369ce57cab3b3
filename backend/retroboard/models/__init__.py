"""
RetroBoard Backend — ORM Models
=================================

Importing this package registers every table on `Base.metadata`, which is what
`Database.create_all()` and Alembic autogeneration read.
"""

from retroboard.models.user import User
from retroboard.models.board import Board
from retroboard.models.note import COLUMN_NAMES, ColumnName, Note

__all__ = ["User", "Board", "Note", "ColumnName", "COLUMN_NAMES"]
