"""Workspace data types

- GroupLeaf: leaf of the workspace tree, points at a PaneGroup
- Tab / TabSpec: a typed unit of work with its own pane tree
- PaneGroup: ordered tabs plus the active one
- WorkspaceState: tree + group map + focused group
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from enum import Enum

from ..layout import Node, collect_leaf_ids
from ..panes import PaneNode


@dataclass(frozen=True)
class GroupLeaf:
    """Workspace tree leaf."""

    id: str

    @property
    def type(self) -> str:
        return "group"


type WorkspaceNode = Node[GroupLeaf]


class TabType(Enum):
    LOCAL = "local"
    SSH = "ssh"
    SFTP = "sftp"
    SETTINGS = "settings"

    @property
    def has_panes(self) -> bool:
        """Settings tabs host no sessions and accept no pane operations."""
        return self is not TabType.SETTINGS


@dataclass(frozen=True)
class TabSpec:
    """Tab data before an id is assigned."""

    type: TabType
    session_id: str
    title: str
    pane_tree: PaneNode
    focused_pane_id: str


@dataclass(frozen=True)
class Tab:
    """A tab inside a PaneGroup.

    Attributes:
        id: tab identifier
        type: local / ssh / sftp / settings
        session_id: session the tab was opened for
        title: label shown in the tab bar
        pane_tree: split tree of panes, never empty
        focused_pane_id: pane receiving keyboard input
    """

    id: str
    type: TabType
    session_id: str
    title: str
    pane_tree: PaneNode
    focused_pane_id: str

    @classmethod
    def from_spec(cls, tab_id: str, spec: TabSpec) -> "Tab":
        return cls(
            id=tab_id,
            type=spec.type,
            session_id=spec.session_id,
            title=spec.title,
            pane_tree=spec.pane_tree,
            focused_pane_id=spec.focused_pane_id,
        )


@dataclass(frozen=True)
class PaneGroup:
    """Tabs sharing one tab bar.

    ``active_tab_id`` is None only when ``tabs`` is empty.
    """

    id: str
    tabs: tuple[Tab, ...] = ()
    active_tab_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.tabs

    @property
    def tab_ids(self) -> list[str]:
        return [tab.id for tab in self.tabs]

    def index_of(self, tab_id: str) -> int:
        """Position of a tab, -1 if absent."""
        for index, tab in enumerate(self.tabs):
            if tab.id == tab_id:
                return index
        return -1

    def find_tab(self, tab_id: str) -> Tab | None:
        index = self.index_of(tab_id)
        return self.tabs[index] if index >= 0 else None

    @property
    def active_tab(self) -> Tab | None:
        return self.find_tab(self.active_tab_id) if self.active_tab_id else None

    def with_tabs(self, tabs: tuple[Tab, ...], active_tab_id: str | None) -> "PaneGroup":
        return replace(self, tabs=tabs, active_tab_id=active_tab_id)


@dataclass(frozen=True)
class WorkspaceState:
    """Snapshot of the whole workspace.

    Attributes:
        tree: split tree whose leaves are GroupLeaf
        groups: group id -> PaneGroup, one entry per leaf
        focused_group_id: always a key of ``groups``
    """

    tree: WorkspaceNode
    groups: Mapping[str, PaneGroup]
    focused_group_id: str

    @property
    def group_ids(self) -> list[str]:
        """Group ids in canonical tree order."""
        return collect_leaf_ids(self.tree)

    @property
    def focused_group(self) -> PaneGroup:
        return self.groups[self.focused_group_id]

    def iter_tabs(self) -> Iterator[tuple[PaneGroup, Tab]]:
        """(group, tab) pairs, groups in tree order."""
        for group_id in self.group_ids:
            group = self.groups[group_id]
            for tab in group.tabs:
                yield group, tab

    def find_group_for_tab(self, tab_id: str) -> PaneGroup | None:
        for group, tab in self.iter_tabs():
            if tab.id == tab_id:
                return group
        return None

    def find_tab(self, tab_id: str) -> Tab | None:
        group = self.find_group_for_tab(tab_id)
        return group.find_tab(tab_id) if group else None

    def with_group(self, group: PaneGroup, **changes) -> "WorkspaceState":
        """Copy with one group replaced (plus optional field changes)."""
        groups = dict(self.groups)
        groups[group.id] = group
        return replace(self, groups=groups, **changes)
