"""Pane tree operations

Pane-specific queries and the pending-pane binding step, built on the
generic split-tree algebra.
"""

from .. import config
from ..layout import Direction, find_leaf, iter_leaves, replace_leaf, split_leaf
from .types import BoundPane, PaneKind, PaneNode, PendingPane, SftpPane, TerminalPane


def _ids_of_kind(tree: PaneNode, kind: PaneKind) -> list[str]:
    return [pane.id for pane in iter_leaves(tree) if pane.kind is kind]


def terminal_pane_ids(tree: PaneNode) -> list[str]:
    return _ids_of_kind(tree, PaneKind.TERMINAL)


def sftp_pane_ids(tree: PaneNode) -> list[str]:
    return _ids_of_kind(tree, PaneKind.SFTP)


def pending_pane_ids(tree: PaneNode) -> list[str]:
    return _ids_of_kind(tree, PaneKind.PENDING)


def count_panes(tree: PaneNode) -> int:
    """Total leaves across all three pane kinds."""
    return sum(1 for _ in iter_leaves(tree))


def bound_panes(tree: PaneNode) -> list[BoundPane]:
    """Terminal and sftp leaves in canonical order; pending leaves are skipped."""
    return [pane for pane in iter_leaves(tree) if pane.kind is not PaneKind.PENDING]


def pty_session_ids(tree: PaneNode) -> list[str]:
    return [pane.pty_session_id for pane in iter_leaves(tree) if pane.kind is PaneKind.TERMINAL]


def sftp_session_ids(tree: PaneNode) -> list[str]:
    return [pane.sftp_session_id for pane in iter_leaves(tree) if pane.kind is PaneKind.SFTP]


def first_focus_candidate(tree: PaneNode) -> str | None:
    """Pane to focus after the focused one went away.

    First terminal, else first sftp, else first pending pane.
    """
    for ids in (terminal_pane_ids(tree), sftp_pane_ids(tree), pending_pane_ids(tree)):
        if ids:
            return ids[0]
    return None


def split_with_pending(
    tree: PaneNode,
    target_pane_id: str,
    direction: Direction | str,
    pending_id: str,
    split_id: str,
) -> tuple[PaneNode, str | None]:
    """Split a pane, putting a new PendingPane in the second half.

    Returns:
        (new tree, pending pane id); the id is None when the target was
        not found and the tree is unchanged
    """
    new_tree = split_leaf(tree, target_pane_id, direction, PendingPane(id=pending_id), split_id)
    if new_tree is tree:
        return tree, None
    return new_tree, pending_id


def _bind(tree: PaneNode, pending_id: str, bound: BoundPane) -> PaneNode:
    pane = find_leaf(tree, pending_id)
    if pane is None or pane.kind is not PaneKind.PENDING:
        return tree
    return replace_leaf(tree, pending_id, bound)


def bind_terminal(tree: PaneNode, pending_id: str, pty_session_id: str) -> PaneNode:
    """Turn a pending pane into a terminal pane, keeping its id.

    Unknown ids and panes that are already bound leave the tree unchanged.
    """
    return _bind(tree, pending_id, TerminalPane(id=pending_id, pty_session_id=pty_session_id))


def bind_sftp(
    tree: PaneNode,
    pending_id: str,
    sftp_session_id: str,
    initial_path: str = config.DEFAULT_SFTP_PATH,
) -> PaneNode:
    """Turn a pending pane into an sftp pane, keeping its id."""
    pane = SftpPane(id=pending_id, sftp_session_id=sftp_session_id, initial_path=initial_path)
    return _bind(tree, pending_id, pane)
