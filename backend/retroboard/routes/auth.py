"""
RetroBoard Backend — Registration & Login Routes
==================================================

POST /register  → 200 user summary | 400 missing fields | 409 duplicate email
POST /login     → 200 user summary | 400 missing fields | 401 no match
"""

from fastapi import APIRouter, Depends

from retroboard.database import Database
from retroboard.dependencies import get_database, json_body
from retroboard.schemas.common import ErrorResponse
from retroboard.schemas.user import CredentialsRequest, UserResponse
from retroboard.services.user_service import user_service

router = APIRouter(tags=["Auth"])


@router.post(
    "/register",
    response_model=UserResponse,
    responses={
        400: {"description": "email/password missing or body malformed", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    payload: CredentialsRequest = Depends(json_body(CredentialsRequest)),
    database: Database = Depends(get_database),
) -> UserResponse:
    async with database.transaction() as db:
        return await user_service.register(db, email=payload.email, password=payload.password)


@router.post(
    "/login",
    response_model=UserResponse,
    responses={
        400: {"description": "email/password missing or body malformed", "model": ErrorResponse},
        401: {"description": "Invalid email or password", "model": ErrorResponse},
    },
    summary="Log in with email and password",
)
async def login(
    payload: CredentialsRequest = Depends(json_body(CredentialsRequest)),
    database: Database = Depends(get_database),
) -> UserResponse:
    async with database.transaction() as db:
        return await user_service.login(db, email=payload.email, password=payload.password)
