"""Web module - FastAPI control surface"""

from .server import WebServer

__all__ = [
    "WebServer",
]
