"""
Database infrastructure for PetVally.
Engine lifecycle (connection.py) and per-request sessions (session.py).
"""

from .connection import close_database, database_health_check, db_manager, init_database
from .session import database_session, get_db_session, initialize_sessions, session_manager

__all__ = [
    "close_database",
    "database_health_check",
    "db_manager",
    "init_database",
    "database_session",
    "get_db_session",
    "initialize_sessions",
    "session_manager",
]
