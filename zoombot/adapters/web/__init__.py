"""FastAPI web surface."""

from zoombot.adapters.web.server import create_app

__all__ = ["create_app"]
