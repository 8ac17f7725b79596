"""Pane tree tests"""

import pytest

from termdeck.layout import Direction, Split, collect_leaf_ids
from termdeck.panes import (
    PaneKind,
    PendingPane,
    SftpPane,
    TerminalPane,
    bind_sftp,
    bind_terminal,
    bound_panes,
    count_panes,
    first_focus_candidate,
    pending_pane_ids,
    pty_session_ids,
    sftp_session_ids,
    split_with_pending,
)


@pytest.fixture
def mixed_tree():
    """pending P0 | (sftp F1 / terminal T1)"""
    return Split(
        id="s1",
        direction=Direction.VERTICAL,
        children=(
            PendingPane(id="P0"),
            Split(
                id="s2",
                direction=Direction.HORIZONTAL,
                children=(
                    SftpPane(id="F1", sftp_session_id="sftp-1", initial_path="/home"),
                    TerminalPane(id="T1", pty_session_id="pty-1"),
                ),
                sizes=(50.0, 50.0),
            ),
        ),
        sizes=(50.0, 50.0),
    )


class TestPaneTypes:
    """Pane leaf types"""

    def test_kinds_and_sessions(self):
        assert TerminalPane("T", "pty-1").kind is PaneKind.TERMINAL
        assert TerminalPane("T", "pty-1").session_id == "pty-1"
        assert SftpPane("F", "sftp-1").initial_path == "/"
        assert SftpPane("F", "sftp-1").session_id == "sftp-1"
        assert PendingPane("P").session_id is None


class TestQueries:
    """Pane queries"""

    def test_counts(self, mixed_tree):
        assert count_panes(mixed_tree) == 3
        assert pending_pane_ids(mixed_tree) == ["P0"]

    def test_bound_panes_skip_pending(self, mixed_tree):
        assert [p.id for p in bound_panes(mixed_tree)] == ["F1", "T1"]
        assert pty_session_ids(mixed_tree) == ["pty-1"]
        assert sftp_session_ids(mixed_tree) == ["sftp-1"]

    def test_focus_prefers_terminal(self, mixed_tree):
        """terminal before sftp before pending, regardless of position"""
        assert first_focus_candidate(mixed_tree) == "T1"

    def test_focus_falls_back_to_sftp_then_pending(self):
        tree = Split("s", Direction.VERTICAL, (PendingPane("P"), SftpPane("F", "x")), (50.0, 50.0))
        assert first_focus_candidate(tree) == "F"
        assert first_focus_candidate(PendingPane("P")) == "P"


class TestSplitWithPending:
    """split_with_pending"""

    def test_adds_pending_after_target(self):
        tree, pending_id = split_with_pending(
            TerminalPane("T1", "pty-1"), "T1", "horizontal", "P1", "s1"
        )
        assert pending_id == "P1"
        assert collect_leaf_ids(tree) == ["T1", "P1"]
        assert tree.children[1] == PendingPane("P1")

    def test_unknown_target(self):
        pane = TerminalPane("T1", "pty-1")
        tree, pending_id = split_with_pending(pane, "zzz", "horizontal", "P1", "s1")
        assert tree is pane
        assert pending_id is None


class TestBinding:
    """bind_terminal / bind_sftp"""

    def test_bind_terminal_keeps_id(self, mixed_tree):
        tree = bind_terminal(mixed_tree, "P0", "pty-9")
        assert tree.children[0] == TerminalPane(id="P0", pty_session_id="pty-9")
        assert pending_pane_ids(tree) == []

    def test_bind_sftp_default_path(self, mixed_tree):
        tree = bind_sftp(mixed_tree, "P0", "sftp-9")
        assert tree.children[0] == SftpPane(id="P0", sftp_session_id="sftp-9", initial_path="/")

    def test_bind_sftp_custom_path(self, mixed_tree):
        tree = bind_sftp(mixed_tree, "P0", "sftp-9", "/var/log")
        assert tree.children[0].initial_path == "/var/log"

    def test_bound_pane_is_not_rebound(self, mixed_tree):
        assert bind_terminal(mixed_tree, "T1", "pty-9") is mixed_tree
        assert bind_sftp(mixed_tree, "F1", "sftp-9") is mixed_tree

    def test_unknown_pane(self, mixed_tree):
        assert bind_terminal(mixed_tree, "zzz", "pty-9") is mixed_tree
