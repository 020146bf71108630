# 📄 File: app/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Manages database sessions (like conversations with the database) ensuring each request
# gets its own clean session and that a request's changes are saved together or not at all.
#
# 🧪 Purpose (Technical Summary):
# Implements async SQLAlchemy session management with dependency injection for FastAPI,
# one unit of work per request (commit on success, rollback on error), hooks that run once
# the transaction outcome is known and a context manager for work outside request handlers.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - app/shared/infrastructure/database/connection.py (database engine)
# - app/shared/core/exceptions.py (DatabaseError, TransactionError)
#
# 🔄 Connected Modules / Calls From:
# - All module repository implementations (Depends(get_db_session))
# - app/main.py (startup), admin bootstrap, tests (database_session)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, Optional

from fastapi import HTTPException
from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.shared.core.exceptions import DatabaseError, PetVallyException, TransactionError
from app.shared.infrastructure.database.connection import get_database_engine

logger = logging.getLogger(__name__)

SessionHook = Callable[[], Awaitable[None]]

AFTER_COMMIT_HOOKS = "after_commit_hooks"
AFTER_ROLLBACK_HOOKS = "after_rollback_hooks"


def after_commit(session: AsyncSession, hook: SessionHook) -> None:
    """Run `await hook()` once the session's transaction has been committed."""
    session.info.setdefault(AFTER_COMMIT_HOOKS, []).append(hook)


def after_rollback(session: AsyncSession, hook: SessionHook) -> None:
    """Run `await hook()` if the session's transaction is rolled back instead."""
    session.info.setdefault(AFTER_ROLLBACK_HOOKS, []).append(hook)


async def _run_hooks(session: AsyncSession, key: str) -> None:
    hooks = session.info.pop(key, [])
    session.info.pop(AFTER_ROLLBACK_HOOKS if key == AFTER_COMMIT_HOOKS else AFTER_COMMIT_HOOKS, None)
    for hook in hooks:
        try:
            await hook()
        except Exception as e:
            # The transaction outcome is already final
            logger.error(f"Session {key} hook failed: {e}")


class DatabaseSessionManager:
    """
    Manages database sessions with transaction handling and automatic cleanup.
    """

    def __init__(self):
        self._session_factory: Optional[async_sessionmaker] = None
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize the session factory with database engine."""
        try:
            engine = await get_database_engine()

            self._session_factory = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,  # Keep objects accessible after commit
                autoflush=True,
            )

            self._initialized = True
            logger.info("Database session factory initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database session factory: {e}")
            raise DatabaseError(f"Session initialization failed: {e}")

    def reset(self) -> None:
        """Forget the session factory (engine was disposed)."""
        self._session_factory = None
        self._initialized = False

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with automatic transaction management.

        Yields:
            AsyncSession: Database session

        Raises:
            DatabaseError: If session creation or a database operation fails
            TransactionError: If the commit fails for a non-database reason
        """
        if not self._initialized or self._session_factory is None:
            raise DatabaseError("Session manager not initialized")

        session: AsyncSession = self._session_factory()

        try:
            yield session
            await session.commit()
            logger.debug("Database transaction committed successfully")

        except (PetVallyException, HTTPException):
            # Domain and HTTP errors keep their status; only the work is undone
            await self._rollback(session)
            raise

        except exc.SQLAlchemyError as e:
            await self._rollback(session)
            logger.error(f"Database error occurred, transaction rolled back: {e}")
            raise DatabaseError(f"Database operation failed: {e.__class__.__name__}")

        except Exception as e:
            await self._rollback(session)
            logger.error(f"Unexpected error occurred, transaction rolled back: {e}")
            raise TransactionError(f"Transaction failed: {e.__class__.__name__}") from e

        else:
            await _run_hooks(session, AFTER_COMMIT_HOOKS)

        finally:
            await session.close()

    async def _rollback(self, session: AsyncSession) -> None:
        await session.rollback()
        await _run_hooks(session, AFTER_ROLLBACK_HOOKS)

    def is_initialized(self) -> bool:
        """Check if session manager is initialized."""
        return self._initialized


# Global session manager instance
session_manager = DatabaseSessionManager()


async def initialize_sessions() -> None:
    """Initialize the global database session manager."""
    await session_manager.initialize()


# FastAPI dependency for getting database sessions
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides the request's database session.

    FastAPI caches dependencies per request, so every repository resolved
    for one request shares this session and the request commits once.

    Usage:
        class PetRepositoryImpl:
            def __init__(self, session: AsyncSession = Depends(get_db_session)):
                ...

    Yields:
        AsyncSession: Database session
    """
    async with session_manager.get_session() as session:
        yield session


# Context manager for manual session management
@asynccontextmanager
async def database_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for manual database session management.

    Use this when you need a unit of work outside of FastAPI route handlers.

    Example:
        async with database_session() as db:
            db.add(AdminModel(username="root", password=hashed))

    Yields:
        AsyncSession: Database session
    """
    async with session_manager.get_session() as session:
        yield session
