"""Pane module

Leaves of a tab's internal split tree:
- types: TerminalPane, SftpPane, PendingPane
- tree: pane queries and pending-pane binding
"""

from .types import BoundPane, Pane, PaneKind, PaneNode, PendingPane, SftpPane, TerminalPane
from .tree import (
    bind_sftp,
    bind_terminal,
    bound_panes,
    count_panes,
    first_focus_candidate,
    pending_pane_ids,
    pty_session_ids,
    sftp_pane_ids,
    sftp_session_ids,
    split_with_pending,
    terminal_pane_ids,
)

__all__ = [
    # Types
    "Pane",
    "BoundPane",
    "PaneNode",
    "PaneKind",
    "TerminalPane",
    "SftpPane",
    "PendingPane",
    # Queries
    "terminal_pane_ids",
    "sftp_pane_ids",
    "pending_pane_ids",
    "pty_session_ids",
    "sftp_session_ids",
    "bound_panes",
    "count_panes",
    "first_focus_candidate",
    # Mutations
    "split_with_pending",
    "bind_terminal",
    "bind_sftp",
]
