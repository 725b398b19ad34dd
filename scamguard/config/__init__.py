"""Application configuration."""

from scamguard.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
