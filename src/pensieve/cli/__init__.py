"""Command line interface for pensieve."""

from .app import app

__all__ = ["app"]
