"""Session backend interface

The backend process owns the real sessions (pseudo-terminals, SSH shells,
SFTP channels). The core reaches it only through this narrow async surface.
SSH and SFTP sessions are created upstream by the connection-setup flow
(host-key check, vault lookup, jump hosts); the core only creates local
pty sessions and tears down whatever it has bound.

Usage:
    backend = HttpSessionBackend("http://127.0.0.1:7070")
    await backend.connect()
    await backend.create_pty_session("pty-...")
    await backend.close_pty_session("pty-...")
    await backend.disconnect()
"""

from abc import ABC, abstractmethod


class SessionBackendError(Exception):
    """A backend call failed (transport error or rejected command)."""

    def __init__(self, message: str, session_id: str | None = None):
        super().__init__(message)
        self.session_id = session_id


class SessionBackend(ABC):
    """Async command surface of the backend session manager."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name for logs ("memory", "http")."""

    @abstractmethod
    async def create_pty_session(self, session_id: str) -> None:
        """Start a local pseudo-terminal bound to ``session_id``.

        Raises:
            SessionBackendError: the backend refused or was unreachable
        """

    @abstractmethod
    async def close_pty_session(self, session_id: str) -> None:
        """Tear down a pty or SSH shell session."""

    @abstractmethod
    async def close_sftp_session(self, session_id: str) -> None:
        """Tear down an SFTP browser session."""

    # Optional lifecycle hooks

    async def connect(self) -> bool:
        """Open the transport. Returns whether the backend is reachable."""
        return True

    async def disconnect(self) -> None:
        """Release the transport."""
        return None
