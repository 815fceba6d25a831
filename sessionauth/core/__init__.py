"""Core app configuration, hashing and error taxonomy."""

from sessionauth.core.config import Settings, get_settings, settings

__all__ = ["Settings", "get_settings", "settings"]
