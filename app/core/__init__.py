"""Core app configuration, database, security and error handling."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.errors import register_exception_handlers

__all__ = ["get_settings", "settings", "get_db", "register_exception_handlers"]
