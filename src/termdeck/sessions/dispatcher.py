"""SessionDispatcher - fire-and-forget backend calls

Tree mutations are synchronous; backend calls are not. The dispatcher sits
between them: a mutation submits a SessionCommand and returns immediately,
the call runs later in its own task.

- With a running event loop, each command gets its own task right away.
- Without one (sync callers, tests), commands wait in a queue until
  ``drain()`` is awaited.
- Close commands notify disconnect listeners at submit time; a successful
  create notifies connect listeners.
- A failing call is logged, counted and handed to the error callback. It
  never reaches the code that submitted it.
"""

import asyncio
from collections import deque
from collections.abc import Callable
from typing import Any

from ..config import DISPATCH_HISTORY_MAX_LENGTH, METRICS_ENABLED
from ..telemetry import format_log, get_logger, metrics
from .base import SessionBackend
from .commands import CommandStatus, SessionAction, SessionCommand
from .observers import SessionObservers

logger = get_logger(__name__)

OnErrorCallback = Callable[[SessionCommand, Exception], Any]


class SessionDispatcher:
    """Dispatcher

    Attributes:
        backend: where calls go
        observers: connect/disconnect listeners
        history: most recent commands, oldest first
    """

    def __init__(
        self,
        backend: SessionBackend,
        observers: SessionObservers | None = None,
        history_size: int = DISPATCH_HISTORY_MAX_LENGTH,
    ):
        self._backend = backend
        self._observers = observers or SessionObservers()
        self._queued: deque[SessionCommand] = deque()
        self._inflight: set[asyncio.Task] = set()
        self._history: deque[SessionCommand] = deque(maxlen=history_size)
        self._on_error: OnErrorCallback | None = None

    @property
    def backend(self) -> SessionBackend:
        return self._backend

    @property
    def observers(self) -> SessionObservers:
        return self._observers

    @property
    def history(self) -> list[SessionCommand]:
        return list(self._history)

    @property
    def queued_count(self) -> int:
        return len(self._queued)

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)

    def set_on_error(self, callback: OnErrorCallback | None) -> None:
        """Set the callback receiving ``(command, exc)`` for failed calls."""
        self._on_error = callback

    # === Submission ===

    def create_pty(self, session_id: str, origin: str | None = None) -> SessionCommand:
        return self.submit(SessionCommand(SessionAction.CREATE_PTY, session_id, origin))

    def close_pty(self, session_id: str, origin: str | None = None) -> SessionCommand:
        return self.submit(SessionCommand(SessionAction.CLOSE_PTY, session_id, origin))

    def close_sftp(self, session_id: str, origin: str | None = None) -> SessionCommand:
        return self.submit(SessionCommand(SessionAction.CLOSE_SFTP, session_id, origin))

    def submit(self, command: SessionCommand) -> SessionCommand:
        """Emit a command without waiting for it."""
        self._history.append(command)
        if METRICS_ENABLED:
            metrics.inc("session.dispatched", {"action": command.action.value})
        logger.debug(format_log("Dispatcher", command.session_id, f"submit {command.action.value}"))

        if command.action.is_teardown:
            self._observers.notify_disconnect(command.session_id)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._queued.append(command)
            return command

        self._spawn(loop, command)
        return command

    async def drain(self) -> int:
        """Start queued commands and wait until nothing is in flight.

        Returns:
            Number of queued commands that were started
        """
        loop = asyncio.get_running_loop()
        started = 0
        while self._queued:
            self._spawn(loop, self._queued.popleft())
            started += 1
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)
        return started

    async def shutdown(self) -> None:
        """Finish outstanding calls and release the backend."""
        await self.drain()
        await self._backend.disconnect()
        logger.info(f"[Dispatcher] Shut down ({self._backend.name})")

    # === Execution ===

    def _spawn(self, loop: asyncio.AbstractEventLoop, command: SessionCommand) -> None:
        task = loop.create_task(
            self._execute(command),
            name=f"{command.action.value}:{command.session_id}",
        )
        self._inflight.add(task)
        task.add_done_callback(self._on_task_done)
        if METRICS_ENABLED:
            metrics.gauge("session.inflight", len(self._inflight))

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if METRICS_ENABLED:
            metrics.gauge("session.inflight", len(self._inflight))

    async def _execute(self, command: SessionCommand) -> bool:
        command.status = CommandStatus.RUNNING
        call = getattr(self._backend, command.action.value)
        try:
            await call(command.session_id)
        except Exception as e:
            command.status = CommandStatus.FAILED
            command.error = str(e)
            logger.error(
                format_log("Dispatcher", command.session_id, f"{command.action.value} failed: {e}")
            )
            if METRICS_ENABLED:
                metrics.inc("session.failed", {"action": command.action.value})
            self._report_error(command, e)
            return False

        command.status = CommandStatus.DONE
        if METRICS_ENABLED:
            metrics.inc("session.completed", {"action": command.action.value})
        if command.action is SessionAction.CREATE_PTY:
            self._observers.notify_connect(command.session_id)
        return True

    def _report_error(self, command: SessionCommand, error: Exception) -> None:
        if not self._on_error:
            return
        try:
            self._on_error(command, error)
        except Exception as e:
            logger.error(format_log("Dispatcher", command.session_id, f"error callback failed: {e}"))
