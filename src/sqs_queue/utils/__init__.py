"""
Module: utils
Description: Package initialization for utility functions.

Current utilities:
- logger: Structured logging configuration and helpers
"""

from .logger import get_logger

__all__ = ["get_logger"]
