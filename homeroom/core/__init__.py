"""Core app configuration and database."""

from homeroom.core.config import get_settings, settings
from homeroom.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
