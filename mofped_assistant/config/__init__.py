"""Settings, logging and static configuration data."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
