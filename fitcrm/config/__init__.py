"""
Application configuration.

Settings come from FITCRM_* environment variables with local defaults;
mock modes keep everything in memory and offline.
"""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
