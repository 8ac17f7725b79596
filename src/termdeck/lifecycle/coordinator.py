"""TabCoordinator - keeps sessions in step with pane trees

Coordinates WorkspaceController (tabs, groups) with SessionDispatcher
(backend sessions):
- creating a local tab or binding a pending pane to a local shell emits a
  create call
- closing a tab, group or pane emits a close call for every session that
  left the trees, and notifies disconnect listeners
- splitting is purely structural: the new half is a PendingPane until one
  of the replace_pending_with_* calls binds it

Pane operations act on the active tab (the focused group's active tab).
Settings tabs take no pane operations. Backend calls are never awaited
here; a failed create leaves the pane bound to a dead session until the
caller that sees the error closes it.
"""

from dataclasses import replace

from .. import config
from ..core.ids import IdGenerator, IdKind, short_id
from ..layout import CycleDirection, Direction, close_leaf, collect_leaf_ids, contains_leaf, find_leaf
from ..panes import (
    BoundPane,
    PaneKind,
    PaneNode,
    SftpPane,
    TerminalPane,
    bind_sftp,
    bind_terminal,
    bound_panes,
    count_panes,
    first_focus_candidate,
    split_with_pending,
)
from ..sessions import SessionDispatcher
from ..telemetry import format_log, get_logger
from ..workspace import Tab, TabSpec, TabType, WorkspaceController

logger = get_logger(__name__)


class TabCoordinator:
    """Tab/pane lifecycle coordinator

    Attributes:
        workspace: controller owning groups and tabs
        dispatcher: outbound session command queue
    """

    def __init__(
        self,
        workspace: WorkspaceController,
        dispatcher: SessionDispatcher,
        ids: IdGenerator | None = None,
    ):
        self._workspace = workspace
        self._dispatcher = dispatcher
        self._ids = ids or workspace.ids

    @property
    def workspace(self) -> WorkspaceController:
        return self._workspace

    @property
    def dispatcher(self) -> SessionDispatcher:
        return self._dispatcher

    @property
    def active_tab(self) -> Tab | None:
        return self._workspace.active_tab()

    @property
    def active_tab_id(self) -> str | None:
        tab = self.active_tab
        return tab.id if tab else None

    # === Internals ===

    def _pane_tab(self, op: str) -> Tab | None:
        """Active tab, if it accepts pane operations."""
        tab = self.active_tab
        if tab is None:
            logger.debug(f"[Coordinator] {op}: no active tab")
            return None
        if not tab.type.has_panes:
            logger.debug(f"[Coordinator] {op}: {tab.type.value} tab has no panes")
            return None
        return tab

    def _store(self, tab: Tab, tree: PaneNode, focused_pane_id: str) -> None:
        self._workspace.replace_tab(replace(tab, pane_tree=tree, focused_pane_id=focused_pane_id))

    def _teardown(self, panes: list[BoundPane], origin: str) -> list[str]:
        """Emit one close call per session; returns the session ids.

        Panes sharing a session produce a single call, in canonical order.
        """
        by_session: dict[str, BoundPane] = {}
        for pane in panes:
            by_session.setdefault(pane.session_id, pane)

        for pane in by_session.values():
            if pane.kind is PaneKind.TERMINAL:
                self._dispatcher.close_pty(pane.pty_session_id, origin=origin)
            else:
                self._dispatcher.close_sftp(pane.sftp_session_id, origin=origin)
        return list(by_session)

    def _pending_in(self, tab: Tab, pane_id: str, op: str) -> bool:
        pane = find_leaf(tab.pane_tree, pane_id)
        if pane is None or pane.kind is not PaneKind.PENDING:
            logger.debug(format_log("Coordinator", pane_id, f"{op}: not a pending pane"))
            return False
        return True

    # === Tabs ===

    def create_local_tab(self) -> Tab:
        """Open a local shell tab in the focused group.

        The tab exists as soon as this returns; the pty is created in the
        background.
        """
        session_id = self._ids.session_id(IdKind.PTY)
        pane = TerminalPane(id=self._ids.pane_id(), pty_session_id=session_id)
        tab = self._workspace.add_tab_to_focused_group(
            TabSpec(
                type=TabType.LOCAL,
                session_id=session_id,
                title=config.LOCAL_TAB_TITLE,
                pane_tree=pane,
                focused_pane_id=pane.id,
            )
        )
        self._dispatcher.create_pty(session_id, origin=tab.id)
        logger.info(format_log("Coordinator", tab.id, f"local tab, pty {short_id(session_id)}"))
        return tab

    def open_remote_tab(
        self,
        tab_type: TabType | str,
        session_id: str,
        title: str,
        initial_path: str = config.DEFAULT_SFTP_PATH,
    ) -> Tab:
        """Add a tab for a session the connection flow already created.

        SSH tabs get a terminal pane, SFTP tabs an sftp pane. No create
        call is made.

        Raises:
            ValueError: for tab types that are not backed by a remote session
        """
        tab_type = TabType(tab_type)
        pane_id = self._ids.pane_id()
        if tab_type is TabType.SSH:
            pane = TerminalPane(id=pane_id, pty_session_id=session_id)
        elif tab_type is TabType.SFTP:
            pane = SftpPane(id=pane_id, sftp_session_id=session_id, initial_path=initial_path)
        else:
            raise ValueError(f"Not a remote tab type: {tab_type.value}")

        tab = self._workspace.add_tab_to_focused_group(
            TabSpec(
                type=tab_type,
                session_id=session_id,
                title=title,
                pane_tree=pane,
                focused_pane_id=pane.id,
            )
        )
        logger.info(format_log("Coordinator", tab.id, f"{tab_type.value} tab for {short_id(session_id)}"))
        return tab

    def open_settings(self) -> Tab:
        return self._workspace.open_settings()

    def close_tab(self, tab_id: str) -> Tab | None:
        """Tear down every session in the tab, then remove it.

        Teardown is not awaited; the tab leaves the workspace immediately.
        """
        tab = self._workspace.find_tab(tab_id)
        if tab is not None:
            self._teardown(bound_panes(tab.pane_tree), origin=tab.id)
        return self._workspace.close_tab(tab_id)

    def close_group(self, group_id: str) -> list[Tab]:
        """Tear down the sessions of every tab in a group, then close it."""
        group = self._workspace.state.groups.get(group_id)
        if group is not None:
            for tab in group.tabs:
                self._teardown(bound_panes(tab.pane_tree), origin=tab.id)
        return self._workspace.close_group(group_id)

    # === Panes ===

    def split_pane(self, direction: Direction | str, pane_id: str | None = None) -> str | None:
        """Split a pane (default: the focused one) with a new pending pane.

        Returns:
            Id of the new pending pane, now focused; None if nothing split
        """
        tab = self._pane_tab("split_pane")
        if tab is None:
            return None

        target = pane_id or tab.focused_pane_id
        tree, pending_id = split_with_pending(
            tab.pane_tree, target, direction, self._ids.pane_id(), self._ids.split_id()
        )
        if pending_id is None:
            logger.debug(format_log("Coordinator", target, "split_pane: unknown pane"))
            return None

        self._store(tab, tree, pending_id)
        return pending_id

    def close_pane_by_id(self, pane_id: str) -> list[str]:
        """Close one pane of the active tab.

        The last pane of a tab closes the tab. Otherwise only the sessions
        that disappeared with the pane are torn down, and focus moves to
        the first terminal/sftp/pending pane if the closed one had it.

        Returns:
            Session ids torn down
        """
        tab = self._pane_tab("close_pane")
        if tab is None:
            return []
        if not contains_leaf(tab.pane_tree, pane_id):
            logger.debug(format_log("Coordinator", pane_id, "close_pane: unknown pane"))
            return []

        if count_panes(tab.pane_tree) <= 1:
            torn_down = [pane.session_id for pane in bound_panes(tab.pane_tree)]
            self.close_tab(tab.id)
            return torn_down

        tree = close_leaf(tab.pane_tree, pane_id)
        remaining = {pane.session_id for pane in bound_panes(tree)}
        removed = [pane for pane in bound_panes(tab.pane_tree) if pane.session_id not in remaining]
        torn_down = self._teardown(removed, origin=tab.id)

        focused = tab.focused_pane_id
        if focused == pane_id:
            focused = first_focus_candidate(tree)
        self._store(tab, tree, focused)
        return torn_down

    def focus_pane(self, pane_id: str) -> None:
        tab = self._pane_tab("focus_pane")
        if tab is None or not contains_leaf(tab.pane_tree, pane_id):
            return
        if tab.focused_pane_id != pane_id:
            self._store(tab, tab.pane_tree, pane_id)

    def cycle_focused_pane(self, direction: CycleDirection | str) -> None:
        """Move pane focus in canonical tree order, wrapping."""
        tab = self._pane_tab("cycle_pane")
        if tab is None:
            return
        pane_ids = collect_leaf_ids(tab.pane_tree)
        if len(pane_ids) <= 1:
            return
        current = pane_ids.index(tab.focused_pane_id) if tab.focused_pane_id in pane_ids else -1
        index = CycleDirection(direction).step(current, len(pane_ids))
        self._store(tab, tab.pane_tree, pane_ids[index])

    def update_pane_tree(self, tree: PaneNode) -> None:
        """Replace the active tab's pane tree wholesale (e.g. drag to reorder).

        No sessions are created or closed.
        """
        tab = self._pane_tab("update_pane_tree")
        if tab is None:
            return

        before = {pane.session_id for pane in bound_panes(tab.pane_tree)}
        after = {pane.session_id for pane in bound_panes(tree)}
        if before != after:
            logger.warning(
                format_log("Coordinator", tab.id, "update_pane_tree changed bound sessions; none torn down")
            )

        focused = tab.focused_pane_id
        if not contains_leaf(tree, focused):
            focused = collect_leaf_ids(tree)[0]
        self._store(tab, tree, focused)

    # === Pending pane binding ===

    def replace_pending_with_local(self, pending_pane_id: str) -> str | None:
        """Bind a pending pane to a new local shell.

        Returns:
            The new pty session id, or None if the pane was not pending
        """
        tab = self._pane_tab("bind_local")
        if tab is None or not self._pending_in(tab, pending_pane_id, "bind_local"):
            return None

        session_id = self._ids.session_id(IdKind.PTY)
        self._store(tab, bind_terminal(tab.pane_tree, pending_pane_id, session_id), pending_pane_id)
        self._dispatcher.create_pty(session_id, origin=tab.id)
        return session_id

    def replace_pending_with_ssh(self, pending_pane_id: str, pty_session_id: str) -> bool:
        """Bind a pending pane to an SSH shell created upstream."""
        tab = self._pane_tab("bind_ssh")
        if tab is None or not self._pending_in(tab, pending_pane_id, "bind_ssh"):
            return False
        self._store(tab, bind_terminal(tab.pane_tree, pending_pane_id, pty_session_id), pending_pane_id)
        return True

    def replace_pending_with_sftp_pane(
        self,
        pending_pane_id: str,
        sftp_session_id: str,
        initial_path: str = config.DEFAULT_SFTP_PATH,
    ) -> bool:
        """Bind a pending pane to an SFTP session created upstream."""
        tab = self._pane_tab("bind_sftp")
        if tab is None or not self._pending_in(tab, pending_pane_id, "bind_sftp"):
            return False
        tree = bind_sftp(tab.pane_tree, pending_pane_id, sftp_session_id, initial_path)
        self._store(tab, tree, pending_pane_id)
        return True
