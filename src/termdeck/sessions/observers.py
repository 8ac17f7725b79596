"""Session observers - connect/disconnect notifications

Plugins and other listeners subscribe here. One failing listener never
keeps the others from being notified.
"""

from collections.abc import Callable
from typing import Any

from ..telemetry import format_log, get_logger

logger = get_logger(__name__)

SessionCallback = Callable[[str], Any]


class SessionObservers:
    """Registry of session listeners."""

    def __init__(self):
        self._on_connect: list[SessionCallback] = []
        self._on_disconnect: list[SessionCallback] = []

    def on_connect(self, callback: SessionCallback) -> Callable[[], None]:
        """Subscribe to session start. Returns an unsubscribe function."""
        return self._subscribe(self._on_connect, callback)

    def on_disconnect(self, callback: SessionCallback) -> Callable[[], None]:
        """Subscribe to session teardown. Returns an unsubscribe function."""
        return self._subscribe(self._on_disconnect, callback)

    def notify_connect(self, session_id: str) -> int:
        return self._notify(self._on_connect, session_id, "connect")

    def notify_disconnect(self, session_id: str) -> int:
        return self._notify(self._on_disconnect, session_id, "disconnect")

    @property
    def listener_count(self) -> int:
        return len(self._on_connect) + len(self._on_disconnect)

    @staticmethod
    def _subscribe(callbacks: list[SessionCallback], callback: SessionCallback) -> Callable[[], None]:
        callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    @staticmethod
    def _notify(callbacks: list[SessionCallback], session_id: str, event: str) -> int:
        """Call every listener; returns how many succeeded."""
        delivered = 0
        for callback in list(callbacks):
            try:
                callback(session_id)
                delivered += 1
            except Exception as e:
                logger.error(format_log("Observers", session_id, f"{event} listener failed: {e}"))
        return delivered
