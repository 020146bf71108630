# 📄 File: app/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to the PetVally database, making sure we can talk to our data storage
# and handling multiple connections efficiently without overwhelming the database.
#
# 🧪 Purpose (Technical Summary):
# Implements async SQLAlchemy engine management with connection pooling, health checks
# with retry/backoff, and optional schema creation for local runs and tests.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine)
# - app/shared/config/settings.py, app/shared/config/database.py (engine configuration, metadata)
# - asyncpg / aiosqlite drivers
#
# 🔄 Connected Modules / Calls From:
# - app/shared/infrastructure/database/session.py (session management)
# - app/main.py (startup and shutdown)
# - app/api/health.py (readiness probe)

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.shared.config.database import DatabaseBase, build_engine_kwargs
from app.shared.config.settings import get_settings

logger = logging.getLogger(__name__)


class DatabaseConnectionManager:
    """
    Manages database connections with connection pooling,
    health monitoring, and retry logic.
    """

    def __init__(self):
        self._engine: Optional[AsyncEngine] = None
        self._health_check_query = text("SELECT 1")
        self._retry_attempts = 3
        self._retry_delay = 1.0

    async def initialize(self) -> None:
        """Initialize database engine with connection pooling."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        settings = get_settings()
        try:
            logger.info("Initializing database connection pool...")
            self._engine = create_async_engine(
                settings.database_url,
                **build_engine_kwargs(settings)
            )

            health = await self.health_check()
            if health["status"] != "healthy":
                raise ConnectionError(health.get("error", "Database unreachable"))

            logger.info(
                "Database connection pool initialized "
                f"({self._engine.url.render_as_string(hide_password=True)})"
            )

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            if self._engine is not None:
                await self._engine.dispose()
                self._engine = None
            raise

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check and return structured status.
        """
        if self._engine is None:
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        for attempt in range(self._retry_attempts):
            try:
                async with self._engine.connect() as conn:
                    result = await conn.execute(self._health_check_query)
                    result.scalar()

                logger.debug("Database health check passed")
                return {
                    "status": "healthy",
                    "timestamp": datetime.now(timezone.utc).isoformat()
                }

            except Exception as e:
                logger.warning(
                    f"Database health check failed (attempt {attempt + 1}/{self._retry_attempts}): {e}"
                )
                if attempt < self._retry_attempts - 1:
                    await asyncio.sleep(self._retry_delay * (2 ** attempt))

        return {
            "status": "unhealthy",
            "error": "Database health check failed after all retry attempts",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    async def create_tables(self) -> None:
        """Create every mapped table that does not exist yet."""
        if self._engine is None:
            raise RuntimeError("Database engine not initialized")

        from app.modules import load_all_models

        load_all_models()
        async with self._engine.begin() as conn:
            await conn.run_sync(DatabaseBase.metadata.create_all)
        logger.info(f"Ensured {len(DatabaseBase.metadata.tables)} tables exist")

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self._engine is None:
            logger.warning("Database engine not initialized, nothing to close")
            return

        logger.info("Closing database connection pool...")
        await self._engine.dispose()
        self._engine = None
        logger.info("Database connection pool closed successfully")

    @property
    def engine(self) -> Optional[AsyncEngine]:
        """Get the SQLAlchemy async engine."""
        return self._engine

    @property
    def is_initialized(self) -> bool:
        """Check if database engine is initialized."""
        return self._engine is not None


# Global database connection manager instance
db_manager = DatabaseConnectionManager()


async def init_database() -> None:
    """Initialize the global database connection manager."""
    await db_manager.initialize()
    if get_settings().DB_CREATE_TABLES:
        await db_manager.create_tables()


async def close_database() -> None:
    """Close the global database connection manager."""
    await db_manager.close()


async def get_database_engine() -> AsyncEngine:
    """
    Get the database engine instance.

    Raises:
        RuntimeError: If database is not initialized
    """
    if not db_manager.is_initialized:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    return db_manager.engine


async def database_health_check() -> Dict[str, Any]:
    """Perform database health check."""
    return await db_manager.health_check()
