# 📄 File: app/shared/config/database.py
#
# 🧭 Purpose (Layman Explanation):
# Configuration for connecting to the PetVally database, managing connections efficiently,
# and giving every table the same naming rules.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy declarative base with constraint naming convention, plus environment-specific
# async engine keyword arguments for PostgreSQL (asyncpg) and SQLite (aiosqlite).
#
# 🔗 Dependencies:
# - SQLAlchemy async engine and declarative base
# - app.shared.config.settings
# - PostgreSQL driver (asyncpg), SQLite driver (aiosqlite) for local runs
#
# 🔄 Connected Modules / Calls From:
# - app.shared.infrastructure.database.connection
# - All module SQLAlchemy models
# - migrations/env.py

from typing import Any, Dict

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool, StaticPool

from .settings import Settings, get_settings


# =============================================================================
# ENGINE CONFIGURATION
# =============================================================================

def build_engine_kwargs(settings: Settings | None = None) -> Dict[str, Any]:
    """Get SQLAlchemy engine configuration based on driver and environment."""
    settings = settings or get_settings()

    if settings.is_sqlite:
        config: Dict[str, Any] = {
            "echo": False,
            "connect_args": {"check_same_thread": False},
        }
        # In-memory databases live as long as their single connection
        if ":memory:" in settings.database_url or settings.database_url.endswith("://"):
            config["poolclass"] = StaticPool
        else:
            config["poolclass"] = NullPool
        return config

    config = {
        "echo": settings.DEBUG and settings.is_development,
        "pool_pre_ping": True,
        "connect_args": {
            "server_settings": {
                "application_name": f"petvally_{settings.ENVIRONMENT}",
                "jit": "off",
            },
            "command_timeout": 60,
        },
    }

    if settings.is_testing:
        config["poolclass"] = NullPool
    else:
        config.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
        })

    if settings.is_production:
        config["connect_args"]["server_settings"].update({
            "timezone": "UTC",
            "statement_timeout": "300000",
            "idle_in_transaction_session_timeout": "300000",
        })

    return config


# =============================================================================
# DATABASE MODELS BASE CLASS
# =============================================================================

# Naming convention for database constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


class DatabaseBase(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Provides the shared metadata (and its naming convention) for every
    PetVally table so Alembic and create_all see one schema.
    """
    metadata = metadata
