"""HTTP interface for AI Assist."""

from .app import create_app

__all__ = ["create_app"]
