"""
RetroBoard Backend — Board Route Handlers
===========================================

What:  GET/POST /boards and PUT/DELETE /boards/{board_id}.
How:   One transaction per request; the service does the work.

Response shape of a listed or newly created board:
    {
        "id": "...", "userId": "...", "title": "Sprint 1",
        "createdAt": "...", "updatedAt": "...",
        "columns": {"Start": [...], "Stop": [...], "Continue": [...]}
    }
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from retroboard.database import Database
from retroboard.dependencies import get_database, json_body
from retroboard.schemas.board import (
    BoardCreateRequest,
    BoardResponse,
    BoardUpdateRequest,
    BoardWithColumns,
)
from retroboard.schemas.common import ErrorResponse, OkResponse
from retroboard.services.board_service import board_service

router = APIRouter(prefix="/boards", tags=["Boards"])


@router.get(
    "",
    response_model=List[BoardWithColumns],
    responses={400: {"description": "userId missing", "model": ErrorResponse}},
    summary="List a user's boards with their notes grouped by column",
)
async def list_boards(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    database: Database = Depends(get_database),
) -> List[BoardWithColumns]:
    async with database.transaction() as db:
        return await board_service.list_boards(db, user_id=user_id)


@router.post(
    "",
    response_model=BoardWithColumns,
    responses={
        400: {"description": "userId/title missing or body malformed", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Create a board with empty Start/Stop/Continue columns",
)
async def create_board(
    payload: BoardCreateRequest = Depends(json_body(BoardCreateRequest)),
    database: Database = Depends(get_database),
) -> BoardWithColumns:
    async with database.transaction() as db:
        return await board_service.create_board(db, user_id=payload.user_id, title=payload.title)


@router.put(
    "/{board_id}",
    response_model=BoardResponse,
    responses={
        400: {"description": "title missing or body malformed", "model": ErrorResponse},
        404: {"description": "Board not found", "model": ErrorResponse},
    },
    summary="Rename a board",
)
async def update_board(
    board_id: str,
    payload: BoardUpdateRequest = Depends(json_body(BoardUpdateRequest)),
    database: Database = Depends(get_database),
) -> BoardResponse:
    async with database.transaction() as db:
        return await board_service.update_board(db, board_id=board_id, title=payload.title)


@router.delete(
    "/{board_id}",
    response_model=OkResponse,
    responses={404: {"description": "Board not found", "model": ErrorResponse}},
    summary="Delete a board and all of its notes",
)
async def delete_board(
    board_id: str,
    database: Database = Depends(get_database),
) -> OkResponse:
    async with database.transaction() as db:
        await board_service.delete_board(db, board_id=board_id)
    return OkResponse(ok=True)
