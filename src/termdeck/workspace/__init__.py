"""Workspace module

- types: GroupLeaf, Tab, TabSpec, PaneGroup, WorkspaceState
- controller: WorkspaceController (groups, tabs, focus)
- snapshot: dict conversion for the web surface
"""

from .types import GroupLeaf, PaneGroup, Tab, TabSpec, TabType, WorkspaceNode, WorkspaceState
from .controller import WorkspaceController, settings_tab_spec
from .snapshot import group_to_dict, node_to_dict, state_to_dict, tab_to_dict

__all__ = [
    # Types
    "GroupLeaf",
    "WorkspaceNode",
    "TabType",
    "TabSpec",
    "Tab",
    "PaneGroup",
    "WorkspaceState",
    # Controller
    "WorkspaceController",
    "settings_tab_spec",
    # Snapshot
    "node_to_dict",
    "tab_to_dict",
    "group_to_dict",
    "state_to_dict",
]
