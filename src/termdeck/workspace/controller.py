"""WorkspaceController - owns the workspace tree

Responsibilities:
- group split/close/focus over the workspace split tree
- tab CRUD inside groups, active-tab bookkeeping
- the settings singleton
- tab/group focus cycling

Every operation is synchronous and commits a new immutable WorkspaceState.
Operations on unknown ids leave the state untouched.
"""

from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any

from .. import config
from ..config import METRICS_ENABLED
from ..core.ids import IdGenerator, short_id
from ..layout import (
    CycleDirection,
    Direction,
    close_leaf,
    collect_leaf_ids,
    resize_split,
    split_leaf,
)
from ..panes import PendingPane
from ..telemetry import get_logger, metrics
from .types import GroupLeaf, PaneGroup, Tab, TabSpec, TabType, WorkspaceState

logger = get_logger(__name__)

OnChangeCallback = Callable[[WorkspaceState], Any]


def settings_tab_spec(pane_id: str) -> TabSpec:
    """Settings tabs carry one pending pane that is never bound."""
    return TabSpec(
        type=TabType.SETTINGS,
        session_id=config.SETTINGS_SESSION_ID,
        title=config.SETTINGS_TAB_TITLE,
        pane_tree=PendingPane(id=pane_id),
        focused_pane_id=pane_id,
    )


class WorkspaceController:
    """Workspace controller

    Starts with a single empty group, focused. The tree is never empty:
    closing the last group empties it instead of removing it.

    Attributes:
        state: current WorkspaceState snapshot
        ids: id generator shared with the lifecycle coordinator
    """

    def __init__(self, ids: IdGenerator | None = None):
        self._ids = ids or IdGenerator()
        group = PaneGroup(id=self._ids.group_id())
        self._state = WorkspaceState(
            tree=GroupLeaf(id=group.id),
            groups={group.id: group},
            focused_group_id=group.id,
        )
        self._on_change: OnChangeCallback | None = None

    # === Accessors ===

    @property
    def ids(self) -> IdGenerator:
        return self._ids

    @property
    def state(self) -> WorkspaceState:
        return self._state

    @property
    def focused_group_id(self) -> str:
        return self._state.focused_group_id

    def set_on_change(self, callback: OnChangeCallback | None) -> None:
        """Register the callback receiving every committed state."""
        self._on_change = callback

    def get_all_tabs(self) -> list[Tab]:
        return [tab for _, tab in self._state.iter_tabs()]

    def find_group_for_tab(self, tab_id: str) -> str | None:
        group = self._state.find_group_for_tab(tab_id)
        return group.id if group else None

    def find_tab(self, tab_id: str) -> Tab | None:
        return self._state.find_tab(tab_id)

    def active_tab(self) -> Tab | None:
        """Active tab of the focused group."""
        return self._state.focused_group.active_tab

    # === Internals ===

    def _commit(self, state: WorkspaceState, op: str) -> None:
        if state is self._state:
            return
        self._state = state
        if METRICS_ENABLED:
            metrics.gauge("workspace.groups", len(state.groups))
        logger.debug(
            f"[Workspace] {op}: groups={len(state.groups)} "
            f"focused={short_id(state.focused_group_id)}"
        )
        if self._on_change:
            self._on_change(state)

    def _noop(self, op: str, reason: str) -> None:
        logger.debug(f"[Workspace] {op}: no-op ({reason})")
        if METRICS_ENABLED:
            metrics.inc("workspace.noop", {"op": op})

    def _without_group(self, state: WorkspaceState, group_id: str) -> WorkspaceState:
        """Drop a group, or empty it if it is the last one in the tree."""
        group = state.groups[group_id]
        if len(state.group_ids) <= 1:
            return state.with_group(group.with_tabs((), None))

        tree = close_leaf(state.tree, group_id)
        groups = {gid: g for gid, g in state.groups.items() if gid != group_id}
        focused = state.focused_group_id
        if focused == group_id:
            focused = collect_leaf_ids(tree)[0]
        return WorkspaceState(tree=tree, groups=groups, focused_group_id=focused)

    # === Tabs ===

    def add_tab_to_group(self, group_id: str, spec: TabSpec) -> Tab:
        """Append a tab to a group, activate it and focus the group.

        The tab id is generated before the commit, so the returned tab is
        stable even when the group turned out to be stale (in which case
        nothing is committed).
        """
        tab = Tab.from_spec(self._ids.tab_id(), spec)
        group = self._state.groups.get(group_id)
        if group is None:
            self._noop("add_tab", f"unknown group {short_id(group_id)}")
            return tab

        updated = group.with_tabs(group.tabs + (tab,), tab.id)
        self._commit(self._state.with_group(updated, focused_group_id=group_id), "add_tab")
        logger.info(f"[Workspace] Added {tab.type.value} tab {short_id(tab.id)} to {short_id(group_id)}")
        return tab

    def add_tab_to_focused_group(self, spec: TabSpec) -> Tab:
        return self.add_tab_to_group(self._state.focused_group_id, spec)

    def close_tab(self, tab_id: str) -> Tab | None:
        """Remove a tab from whichever group holds it.

        The caller owns teardown of the returned tab's sessions.

        Returns:
            The removed tab, or None if no tab matched
        """
        state = self._state
        group = state.find_group_for_tab(tab_id)
        if group is None:
            self._noop("close_tab", f"unknown tab {short_id(tab_id)}")
            return None

        old_index = group.index_of(tab_id)
        closed = group.tabs[old_index]
        tabs = tuple(tab for tab in group.tabs if tab.id != tab_id)

        if not tabs:
            new_state = self._without_group(state, group.id)
        else:
            active = group.active_tab_id
            if active == tab_id:
                # the tab sliding into the vacated slot, else the new last tab
                active = tabs[min(old_index, len(tabs) - 1)].id
            new_state = state.with_group(group.with_tabs(tabs, active))

        self._commit(new_state, "close_tab")
        logger.info(f"[Workspace] Closed tab {short_id(tab_id)}")
        return closed

    def select_tab(self, group_id: str, tab_id: str) -> None:
        group = self._state.groups.get(group_id)
        if group is None or group.index_of(tab_id) < 0:
            self._noop("select_tab", f"{short_id(tab_id)} not in {short_id(group_id)}")
            return
        updated = group.with_tabs(group.tabs, tab_id)
        self._commit(self._state.with_group(updated, focused_group_id=group_id), "select_tab")

    def rename_tab(self, tab_id: str, title: str) -> None:
        tab = self._state.find_tab(tab_id)
        if tab is None:
            self._noop("rename_tab", f"unknown tab {short_id(tab_id)}")
            return
        self.replace_tab(replace(tab, title=title))

    def replace_tab(self, tab: Tab) -> bool:
        """Store a new version of an existing tab (same id, same position).

        Returns:
            False if no tab with that id exists
        """
        group = self._state.find_group_for_tab(tab.id)
        if group is None:
            self._noop("replace_tab", f"unknown tab {short_id(tab.id)}")
            return False
        tabs = tuple(tab if t.id == tab.id else t for t in group.tabs)
        self._commit(self._state.with_group(group.with_tabs(tabs, group.active_tab_id)), "replace_tab")
        return True

    def open_settings(self) -> Tab:
        """Show the settings tab, creating it only if none exists anywhere."""
        for group, tab in self._state.iter_tabs():
            if tab.type is TabType.SETTINGS:
                updated = group.with_tabs(group.tabs, tab.id)
                self._commit(
                    self._state.with_group(updated, focused_group_id=group.id), "open_settings"
                )
                return tab
        return self.add_tab_to_focused_group(settings_tab_spec(self._ids.pane_id()))

    def cycle_focused_group_tab(self, direction: CycleDirection | str) -> None:
        group = self._state.focused_group
        if len(group.tabs) <= 1:
            return
        index = CycleDirection(direction).step(group.index_of(group.active_tab_id or ""), len(group.tabs))
        updated = group.with_tabs(group.tabs, group.tabs[index].id)
        self._commit(self._state.with_group(updated), "cycle_tab")

    # === Groups ===

    def split_group(self, group_id: str, direction: Direction | str) -> str | None:
        """Split a group leaf, placing a new empty group after it.

        Returns:
            The new group id (now focused), or None for an unknown group
        """
        state = self._state
        if group_id not in state.groups:
            self._noop("split_group", f"unknown group {short_id(group_id)}")
            return None

        group = PaneGroup(id=self._ids.group_id())
        tree = split_leaf(state.tree, group_id, direction, GroupLeaf(id=group.id), self._ids.split_id())
        groups = dict(state.groups)
        groups[group.id] = group
        self._commit(
            WorkspaceState(tree=tree, groups=groups, focused_group_id=group.id), "split_group"
        )
        logger.info(
            f"[Workspace] Split {short_id(group_id)} {Direction(direction).value} -> {short_id(group.id)}"
        )
        return group.id

    def split_focused_group(self, direction: Direction | str) -> str | None:
        return self.split_group(self._state.focused_group_id, direction)

    def close_group(self, group_id: str) -> list[Tab]:
        """Close a group and every tab in it.

        The last group is emptied instead of removed.

        Returns:
            The tabs that were in the group, for session teardown
        """
        group = self._state.groups.get(group_id)
        if group is None:
            self._noop("close_group", f"unknown group {short_id(group_id)}")
            return []
        closed = list(group.tabs)
        self._commit(self._without_group(self._state, group_id), "close_group")
        logger.info(f"[Workspace] Closed group {short_id(group_id)} ({len(closed)} tabs)")
        return closed

    def focus_group(self, group_id: str) -> None:
        if group_id not in self._state.groups:
            self._noop("focus_group", f"unknown group {short_id(group_id)}")
            return
        if group_id == self._state.focused_group_id:
            return
        self._commit(replace(self._state, focused_group_id=group_id), "focus_group")

    def cycle_focused_pane_group(self, direction: CycleDirection | str) -> None:
        group_ids = self._state.group_ids
        if len(group_ids) <= 1:
            return
        index = CycleDirection(direction).step(group_ids.index(self._state.focused_group_id), len(group_ids))
        self._commit(replace(self._state, focused_group_id=group_ids[index]), "cycle_group")

    def resize_split_node(self, split_id: str, sizes: Sequence[float]) -> None:
        tree = resize_split(self._state.tree, split_id, sizes)
        if tree is self._state.tree:
            self._noop("resize_split", f"unknown split {short_id(split_id)}")
            return
        self._commit(replace(self._state, tree=tree), "resize_split")
