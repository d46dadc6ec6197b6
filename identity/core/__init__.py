"""Core app configuration, database and security helpers."""

from identity.core.config import get_settings, settings
from identity.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
