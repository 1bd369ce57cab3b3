"""
RetroBoard Backend — Note Service
===================================

What:  Create, update and delete notes inside a board's columns.
Who:   Called by the /boards/{board_id}/notes route handlers.

Parent Timestamp:
    Every note mutation also sets the parent board's updatedAt. Both writes
    are flushed in the caller's transaction, so either both persist or
    neither does.

Scoping:
    A note is addressed by (board_id, note_id). A note id that exists under a
    different board is reported as not found.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from retroboard.database import utcnow
from retroboard.exceptions import DatabaseError, NotFoundError, ValidationError
from retroboard.models import COLUMN_NAMES, Board, Note
from retroboard.schemas.note import NoteResponse
from retroboard.services.board_service import board_service

logger = logging.getLogger(__name__)


def validate_column_name(column_name: str) -> None:
    if column_name not in COLUMN_NAMES:
        raise ValidationError(
            f"columnName must be one of: {', '.join(COLUMN_NAMES)}",
            field="columnName",
            context={"column_name": column_name},
        )


class NoteService:

    async def _get_note(self, db: AsyncSession, board_id: str, note_id: str) -> Note:
        try:
            result = await db.execute(
                select(Note).where(Note.id == note_id, Note.board_id == board_id)
            )
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(context={"note_id": note_id})
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return note

    async def _flush(self, db: AsyncSession, board: Board, action: str) -> None:
        board.touch()
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error on note %s (board=%s): %s", action, board.id, str(e), exc_info=True)
            raise DatabaseError(context={"board_id": board.id, "action": action})

    async def create_note(
        self,
        db: AsyncSession,
        board_id: str,
        column_name: str,
        text: str,
    ) -> NoteResponse:
        """
        Insert a note into one column of an existing board.

        Raises:
            ValidationError: columnName/text missing, or columnName not a known column
            NotFoundError:   board does not exist
        """
        if not board_id or not column_name or not text:
            raise ValidationError("boardId, columnName and text required")
        validate_column_name(column_name)

        board = await board_service.get_board(db, board_id)
        note = Note(board_id=board.id, column_name=column_name, text=text, created_at=utcnow())
        db.add(note)
        await self._flush(db, board, "create")

        logger.info("Note created: %s (board=%s, column=%s)", note.id, board_id, column_name)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        board_id: str,
        note_id: str,
        column_name: Optional[str] = None,
        text: Optional[str] = None,
    ) -> NoteResponse:
        """
        Change a note's text and/or move it to another column.

        Only the fields that are present are written; `text` may be set to an
        empty string, `column_name` must be a known column.
        """
        if column_name is None and text is None:
            raise ValidationError("columnName or text required")
        if column_name is not None:
            validate_column_name(column_name)

        note = await self._get_note(db, board_id, note_id)
        board = await board_service.get_board(db, board_id)

        if column_name is not None:
            note.column_name = column_name
        if text is not None:
            note.text = text
        await self._flush(db, board, "update")

        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, board_id: str, note_id: str) -> None:
        note = await self._get_note(db, board_id, note_id)
        board = await board_service.get_board(db, board_id)

        await db.delete(note)
        await self._flush(db, board, "delete")
        logger.info("Note deleted: %s (board=%s)", note_id, board_id)


note_service = NoteService()
