"""Session commands - intents emitted by structural mutations"""

import time
from dataclasses import dataclass, field
from enum import Enum


class SessionAction(Enum):
    """Backend call to make. The value is the SessionBackend method name."""

    CREATE_PTY = "create_pty_session"
    CLOSE_PTY = "close_pty_session"
    CLOSE_SFTP = "close_sftp_session"

    @property
    def is_teardown(self) -> bool:
        return self in {SessionAction.CLOSE_PTY, SessionAction.CLOSE_SFTP}


class CommandStatus(Enum):
    QUEUED = "queued"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SessionCommand:
    """One fire-and-forget backend call.

    Attributes:
        action: which backend call
        session_id: target session
        origin: id of the tab whose mutation emitted the command, so the
            UI flow that asked for it can be told about failures
        status: progress of the call
        error: failure message when status is FAILED
    """

    action: SessionAction
    session_id: str
    origin: str | None = None
    created_at: float = field(default_factory=time.time)
    status: CommandStatus = CommandStatus.QUEUED
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "session_id": self.session_id,
            "origin": self.origin,
            "created_at": self.created_at,
            "status": self.status.value,
            "error": self.error,
        }
