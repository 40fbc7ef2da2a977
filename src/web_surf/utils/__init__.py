"""
Utilities module for web-surf.

Provides logging setup and helpers.
"""

from web_surf.utils.logging import setup_logging, get_logger, reset_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "reset_logging",
]
