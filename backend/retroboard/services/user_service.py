"""
RetroBoard Backend — User Service
===================================

What:  Registration and login against the `users` table.
Who:   Called by the /register and /login route handlers.

Credential handling:
    Passwords are stored as submitted and login is an exact email+password
    match. Neither the password nor the request body is ever logged.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from retroboard.database import utcnow
from retroboard.exceptions import AuthError, ConflictError, DatabaseError, ValidationError
from retroboard.models import User
from retroboard.schemas.user import UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """Stateless; every call receives the session of the caller's transaction."""

    async def register(self, db: AsyncSession, email: str, password: str) -> UserResponse:
        """
        Create a user.

        Raises:
            ValidationError: email or password missing/empty (→ 400)
            ConflictError:   email already registered (→ 409)
            DatabaseError:   insert failed for another reason (→ 500)
        """
        if not email or not password:
            raise ValidationError("email/password required")

        try:
            result = await db.execute(select(User).where(User.email == email))
            if result.scalar_one_or_none() is not None:
                raise ConflictError("Email already registered")

            user = User(email=email, password=password, created_at=utcnow())
            db.add(user)
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            raise ConflictError("Email already registered")
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User registered: %s", user.id)
        return UserResponse.model_validate(user)

    async def login(self, db: AsyncSession, email: str, password: str) -> UserResponse:
        """Return the user whose email and password both match exactly."""
        if not email or not password:
            raise ValidationError("email/password required")

        try:
            result = await db.execute(
                select(User).where(User.email == email, User.password == password)
            )
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        if user is None:
            raise AuthError("Invalid email or password")
        return UserResponse.model_validate(user)


user_service = UserService()
