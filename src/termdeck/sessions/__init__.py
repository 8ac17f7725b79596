"""Sessions module

Outbound side of the core:
- base: SessionBackend interface
- commands: SessionCommand intents
- dispatcher: fire-and-forget execution of intents
- observers: connect/disconnect notification
- memory / http: backend implementations
"""

from .base import SessionBackend, SessionBackendError
from .commands import CommandStatus, SessionAction, SessionCommand
from .dispatcher import SessionDispatcher
from .http import HttpSessionBackend
from .memory import InMemorySessionBackend
from .observers import SessionObservers

__all__ = [
    # Interface
    "SessionBackend",
    "SessionBackendError",
    # Commands
    "SessionAction",
    "SessionCommand",
    "CommandStatus",
    # Dispatch
    "SessionDispatcher",
    "SessionObservers",
    # Backends
    "InMemorySessionBackend",
    "HttpSessionBackend",
]
