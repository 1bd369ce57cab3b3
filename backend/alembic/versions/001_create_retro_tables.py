"""Create users, boards and notes tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Initial schema: users → boards → notes, each child with an ON DELETE
       CASCADE foreign key to its parent.
Column names match the JSON keys (userId, boardId, columnName, createdAt,
updatedAt); see retroboard/models/ for the ORM side.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("createdAt", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "boards",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("userId", sa.String(36), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("createdAt", sa.DateTime(), nullable=False),
        sa.Column("updatedAt", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["userId"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_boards_user_id", "boards", ["userId"])

    op.create_table(
        "notes",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("boardId", sa.String(36), nullable=False),
        sa.Column("columnName", sa.String(20), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("createdAt", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "\"columnName\" IN ('Start', 'Stop', 'Continue')",
            name="ck_notes_column_name",
        ),
        sa.ForeignKeyConstraint(["boardId"], ["boards.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notes_board_created", "notes", ["boardId", "createdAt"])


def downgrade() -> None:
    op.drop_index("idx_notes_board_created", table_name="notes")
    op.drop_table("notes")
    op.drop_index("idx_boards_user_id", table_name="boards")
    op.drop_table("boards")
    op.drop_table("users")
