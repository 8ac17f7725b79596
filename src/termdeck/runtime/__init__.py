"""Runtime module - component wiring and lifecycle"""

from .bootstrap import (
    RuntimeComponents,
    bootstrap,
)

__all__ = [
    "bootstrap",
    "RuntimeComponents",
]
