"""Render module - text views of the workspace"""

from .tree import render_text, render_workspace

__all__ = [
    "render_text",
    "render_workspace",
]
