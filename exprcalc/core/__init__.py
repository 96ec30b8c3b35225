"""Core utilities package"""

from .config import Settings, settings, get_settings
from .logging import setup_logging, get_context_logger

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "setup_logging",
    "get_context_logger",
]
