"""Database module for the URL shortener application."""
from shortener.db.base import (
    DatabaseHealthCheck,
    create_session_factory,
    get_engine,
    init_db,
)
from shortener.db.session import SessionManager

__all__ = [
    "get_engine",
    "create_session_factory",
    "init_db",
    "DatabaseHealthCheck",
    "SessionManager",
]
