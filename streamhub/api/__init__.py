"""HTTP surface for the local viewer page."""

from .app import create_app

__all__ = ["create_app"]
