"""
RetroBoard Backend — Database Store
=====================================

What:  The `Database` store object: async SQLAlchemy engine, session factory,
       and the transaction scope used by every request.
Why:   The open store is constructed explicitly and handed to the application
       factory instead of living in module-level globals, so tests can run
       against a temporary SQLite file with the same code path.
How:   `Database.transaction()` yields a session, commits on success and rolls
       back on any exception. Multi-step effects (delete notes then board,
       update note then touch the board's updatedAt) run inside one scope.
Who:   Created by `retroboard.main.create_app`; used by route handlers.
When:  Engine is created once at startup and reused for the process lifetime.

Connection Strategy:
    SQLite (default):  no pool sizing; `PRAGMA foreign_keys=ON` on every new
                       connection so FK constraints and ON DELETE CASCADE apply.
    Server databases:  pool_size / max_overflow / pre_ping from settings,
                       connections recycled hourly.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from retroboard.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object used by `Database.create_all()` and by
    Alembic autogeneration.
    """
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp with microseconds; SQLite drops tzinfo anyway."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with FK enforcement off; it is a per-connection setting.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the engine and session factory for one backing store.

    Example:
        database = Database("sqlite+aiosqlite:///./data.sqlite3")
        await database.create_all()
        async with database.transaction() as session:
            session.add(user)
    """

    def __init__(self, url: Optional[str] = None, echo: Optional[bool] = None):
        self.url = url or settings.database_url
        if echo is None:
            echo = settings.log_level == "DEBUG"

        engine_kwargs = {"echo": echo}
        if not self.url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)
        if self.url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False: response schemas read attributes after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Transaction scope for one logical operation.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller (the caller performs queries)
            3. On success: commits the transaction
            4. On error: rolls back, then re-raises for the global error handlers
            5. Always: closes the session (returns connection to pool)
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create missing tables (startup bootstrap, like CREATE TABLE IF NOT EXISTS)."""
        # Models must be imported so they register on Base.metadata
        from retroboard import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Schema ready (%d tables)", len(Base.metadata.tables))

    async def ping(self) -> bool:
        """Run SELECT 1; returns False instead of raising when the store is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()
