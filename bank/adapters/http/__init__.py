"""HTTP adapter exposing the bank use cases with FastAPI."""

from .app import create_app

__all__ = ["create_app"]
