"""
RetroBoard Backend — Board Service
====================================

What:  Board CRUD plus the relational → nested JSON mapping for listings.
Who:   Called by the /boards route handlers; NoteService uses get_board().

Listing Strategy (GET /boards?userId=):
    1. SELECT boards of the user, newest first
    2. SELECT all notes of those boards in ONE query, oldest first
    3. Partition notes by board, then by columnName, in Python

    Why two queries instead of one per board:
        A query per board makes listing cost grow with the number of boards
        (N+1). The IN (...) query keeps it at two round trips regardless.

Every board starts with the three fixed columns, even when they are empty.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

from sqlalchemy import asc, delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from retroboard.database import utcnow
from retroboard.exceptions import DatabaseError, NotFoundError, ValidationError
from retroboard.models import COLUMN_NAMES, Board, Note, User
from retroboard.schemas.board import BoardResponse, BoardWithColumns, ColumnNote

logger = logging.getLogger(__name__)


def group_by_column(notes: Iterable[Note]) -> Dict[str, List[ColumnNote]]:
    """Partition notes into the three fixed columns, preserving input order."""
    columns: Dict[str, List[ColumnNote]] = {name: [] for name in COLUMN_NAMES}
    for note in notes:
        columns[note.column_name].append(ColumnNote.model_validate(note))
    return columns


class BoardService:
    """
    Business logic for boards.

    Error Handling Strategy:
        Missing rows become NotFoundError; SQLAlchemy failures are logged with
        context and re-raised as DatabaseError (generic message to the client).
    """

    async def get_board(self, db: AsyncSession, board_id: str) -> Board:
        """Load a board or raise NotFoundError."""
        try:
            board = await db.get(Board, board_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching board %s: %s", board_id, str(e))
            raise DatabaseError(context={"board_id": board_id})
        if board is None:
            raise NotFoundError(resource="board", resource_id=board_id)
        return board

    async def list_boards(self, db: AsyncSession, user_id: str) -> List[BoardWithColumns]:
        """
        All boards owned by `user_id`, each with its notes grouped by column.

        An unknown user simply owns no boards: the result is an empty list.
        """
        if not user_id:
            raise ValidationError("userId required", field="userId")

        try:
            result = await db.execute(
                select(Board)
                .where(Board.user_id == user_id)
                .order_by(desc(Board.created_at), Board.id)
            )
            boards = list(result.scalars().all())
            if not boards:
                return []

            result = await db.execute(
                select(Note)
                .where(Note.board_id.in_([b.id for b in boards]))
                .order_by(asc(Note.created_at), asc(Note.id))
            )
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing boards: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve boards. Please try again.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        notes_by_board: Dict[str, List[Note]] = defaultdict(list)
        for note in notes:
            notes_by_board[note.board_id].append(note)

        return [
            BoardWithColumns(
                **BoardResponse.model_validate(board).model_dump(),
                columns=group_by_column(notes_by_board[board.id]),
            )
            for board in boards
        ]

    async def create_board(self, db: AsyncSession, user_id: str, title: str) -> BoardWithColumns:
        """Insert a board for an existing user; returned with empty columns."""
        if not user_id or not title:
            raise ValidationError("userId and title required")

        try:
            if await db.get(User, user_id) is None:
                raise NotFoundError(resource="user", resource_id=user_id)

            now = utcnow()
            board = Board(user_id=user_id, title=title, created_at=now, updated_at=now)
            db.add(board)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating board: %s", str(e), exc_info=True)
            raise DatabaseError(context={"user_id": user_id, "error_type": type(e).__name__})

        logger.info("Board created: %s (user=%s)", board.id, user_id)
        return BoardWithColumns(
            **BoardResponse.model_validate(board).model_dump(),
            columns=group_by_column([]),
        )

    async def update_board(self, db: AsyncSession, board_id: str, title: str) -> BoardResponse:
        """Rename a board and bump its updatedAt."""
        if not title:
            raise ValidationError("title required", field="title")

        board = await self.get_board(db, board_id)
        board.title = title
        board.touch()
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating board %s: %s", board_id, str(e))
            raise DatabaseError(context={"board_id": board_id})
        return BoardResponse.model_validate(board)

    async def delete_board(self, db: AsyncSession, board_id: str) -> None:
        """
        Delete the board's notes, then the board.

        Both statements run in the caller's transaction, so a failure between
        them rolls back to the untouched board.
        """
        board = await self.get_board(db, board_id)
        try:
            await db.execute(delete(Note).where(Note.board_id == board_id))
            await db.delete(board)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting board %s: %s", board_id, str(e), exc_info=True)
            raise DatabaseError(context={"board_id": board_id})
        logger.info("Board deleted: %s", board_id)


board_service = BoardService()
