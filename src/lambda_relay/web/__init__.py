"""Local HTTP echo target for development."""

from .echo import create_app

__all__ = ["create_app"]
