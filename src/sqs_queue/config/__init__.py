"""
Module: config
Description: Package initialization for client configuration.
"""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
