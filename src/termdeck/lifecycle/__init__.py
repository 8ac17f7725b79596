"""Lifecycle module - binds pane trees to backend sessions"""

from .coordinator import TabCoordinator

__all__ = [
    "TabCoordinator",
]
