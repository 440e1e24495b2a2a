"""Core app configuration, database and error taxonomy."""

from app.core.config import get_settings, settings
from app.core.database import SessionLocal, get_db, session_scope
from app.core.errors import AppError, StoreError

__all__ = [
    "AppError",
    "SessionLocal",
    "StoreError",
    "get_db",
    "get_settings",
    "session_scope",
    "settings",
]
