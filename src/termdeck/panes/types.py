"""Pane leaf types

A pane is the leaf of a tab's split tree. It is one of:
- TerminalPane: bound to a pty (local shell or remote SSH shell)
- SftpPane: bound to an SFTP browser session
- PendingPane: placeholder created by a split, waiting for the user to
  pick a session type

A pending pane turns into a terminal or sftp pane exactly once and keeps its
id when it does. Bound panes never go back to pending.
"""

from dataclasses import dataclass
from enum import Enum

from .. import config
from ..layout import Node


class PaneKind(Enum):
    TERMINAL = "terminal"
    SFTP = "sftp"
    PENDING = "pending"


@dataclass(frozen=True)
class TerminalPane:
    id: str
    pty_session_id: str

    @property
    def kind(self) -> PaneKind:
        return PaneKind.TERMINAL

    @property
    def session_id(self) -> str:
        return self.pty_session_id


@dataclass(frozen=True)
class SftpPane:
    id: str
    sftp_session_id: str
    initial_path: str = config.DEFAULT_SFTP_PATH

    @property
    def kind(self) -> PaneKind:
        return PaneKind.SFTP

    @property
    def session_id(self) -> str:
        return self.sftp_session_id


@dataclass(frozen=True)
class PendingPane:
    id: str

    @property
    def kind(self) -> PaneKind:
        return PaneKind.PENDING

    @property
    def session_id(self) -> None:
        return None


type Pane = TerminalPane | SftpPane | PendingPane
type BoundPane = TerminalPane | SftpPane
type PaneNode = Node[Pane]
