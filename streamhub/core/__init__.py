"""Core infrastructure: settings, logging and durable storage."""

from .config import Settings, get_settings
from .storage import KeyValueStore

__all__ = [
    "KeyValueStore",
    "Settings",
    "get_settings",
]
