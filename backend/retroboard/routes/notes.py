"""
RetroBoard Backend — Note Route Handlers
==========================================

What:  POST /boards/{board_id}/notes and PUT/DELETE /boards/{board_id}/notes/{note_id}.
Every successful call also advances the parent board's updatedAt.
"""

from fastapi import APIRouter, Depends

from retroboard.database import Database
from retroboard.dependencies import get_database, json_body
from retroboard.schemas.common import ErrorResponse, OkResponse
from retroboard.schemas.note import NoteCreateRequest, NoteResponse, NoteUpdateRequest
from retroboard.services.note_service import note_service

router = APIRouter(prefix="/boards/{board_id}/notes", tags=["Notes"])


@router.post(
    "",
    response_model=NoteResponse,
    responses={
        400: {"description": "columnName/text missing or invalid", "model": ErrorResponse},
        404: {"description": "Board not found", "model": ErrorResponse},
    },
    summary="Add a note to a board column",
)
async def create_note(
    board_id: str,
    payload: NoteCreateRequest = Depends(json_body(NoteCreateRequest)),
    database: Database = Depends(get_database),
) -> NoteResponse:
    async with database.transaction() as db:
        return await note_service.create_note(
            db,
            board_id=board_id,
            column_name=payload.column_name,
            text=payload.text,
        )


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Nothing to update or invalid columnName", "model": ErrorResponse},
        404: {"description": "Note not found on this board", "model": ErrorResponse},
    },
    summary="Edit a note's text and/or move it to another column",
)
async def update_note(
    board_id: str,
    note_id: str,
    payload: NoteUpdateRequest = Depends(json_body(NoteUpdateRequest)),
    database: Database = Depends(get_database),
) -> NoteResponse:
    async with database.transaction() as db:
        return await note_service.update_note(
            db,
            board_id=board_id,
            note_id=note_id,
            column_name=payload.column_name,
            text=payload.text,
        )


@router.delete(
    "/{note_id}",
    response_model=OkResponse,
    responses={404: {"description": "Note not found on this board", "model": ErrorResponse}},
    summary="Delete a note",
)
async def delete_note(
    board_id: str,
    note_id: str,
    database: Database = Depends(get_database),
) -> OkResponse:
    async with database.transaction() as db:
        await note_service.delete_note(db, board_id=board_id, note_id=note_id)
    return OkResponse(ok=True)
