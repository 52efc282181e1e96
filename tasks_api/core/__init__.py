"""Core app configuration, store access, and shared errors."""

from tasks_api.core.config import get_settings, settings
from tasks_api.core.database import get_store

__all__ = ["get_settings", "settings", "get_store"]
