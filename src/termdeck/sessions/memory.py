"""In-memory session backend

Records every call and the set of live sessions. Used when no backend URL
is configured, and by the tests. ``fail_on`` makes calls for chosen session
ids raise, to exercise the failure path.
"""

import asyncio

from ..telemetry import format_log, get_logger
from .base import SessionBackend, SessionBackendError

logger = get_logger(__name__)


class InMemorySessionBackend(SessionBackend):
    """Backend that keeps sessions in sets.

    Attributes:
        calls: (method, session_id) in call order
        live_pty: pty/ssh sessions currently open
        live_sftp: sftp sessions currently open
    """

    def __init__(self, fail_on: set[str] | None = None, delay: float = 0.0):
        self.fail_on: set[str] = set(fail_on or ())
        self.delay = delay
        self.calls: list[tuple[str, str]] = []
        self.live_pty: set[str] = set()
        self.live_sftp: set[str] = set()

    @property
    def name(self) -> str:
        return "memory"

    def register_sftp_session(self, session_id: str) -> None:
        """Mark an sftp session as opened by the upstream connection flow."""
        self.live_sftp.add(session_id)

    def register_ssh_session(self, session_id: str) -> None:
        """Mark an SSH shell as opened by the upstream connection flow."""
        self.live_pty.add(session_id)

    async def _record(self, method: str, session_id: str) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.calls.append((method, session_id))
        if session_id in self.fail_on:
            raise SessionBackendError(f"{method} rejected", session_id=session_id)
        logger.debug(format_log("MemoryBackend", session_id, method))

    async def create_pty_session(self, session_id: str) -> None:
        await self._record("create_pty_session", session_id)
        self.live_pty.add(session_id)

    async def close_pty_session(self, session_id: str) -> None:
        await self._record("close_pty_session", session_id)
        self.live_pty.discard(session_id)

    async def close_sftp_session(self, session_id: str) -> None:
        await self._record("close_sftp_session", session_id)
        self.live_sftp.discard(session_id)
