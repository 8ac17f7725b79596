"""JSON-ready views of workspace state (web surface, debugging)."""

from typing import Any

from ..layout import is_split
from ..panes import PaneKind
from .types import PaneGroup, Tab, WorkspaceState


def node_to_dict(node: Any) -> dict:
    """Serialize a workspace or pane tree node."""
    if is_split(node):
        return {
            "type": "split",
            "id": node.id,
            "direction": node.direction.value,
            "children": [node_to_dict(child) for child in node.children],
            "sizes": list(node.sizes),
        }

    kind = getattr(node, "kind", None)
    if kind is None:
        return {"type": node.type, "id": node.id}

    data = {"type": kind.value, "id": node.id}
    if kind is PaneKind.TERMINAL:
        data["pty_session_id"] = node.pty_session_id
    elif kind is PaneKind.SFTP:
        data["sftp_session_id"] = node.sftp_session_id
        data["initial_path"] = node.initial_path
    return data


def tab_to_dict(tab: Tab) -> dict:
    return {
        "id": tab.id,
        "type": tab.type.value,
        "session_id": tab.session_id,
        "title": tab.title,
        "pane_tree": node_to_dict(tab.pane_tree),
        "focused_pane_id": tab.focused_pane_id,
    }


def group_to_dict(group: PaneGroup) -> dict:
    return {
        "id": group.id,
        "tabs": [tab_to_dict(tab) for tab in group.tabs],
        "active_tab_id": group.active_tab_id,
    }


def state_to_dict(state: WorkspaceState) -> dict:
    """Whole workspace; groups listed in canonical tree order."""
    return {
        "tree": node_to_dict(state.tree),
        "groups": [group_to_dict(state.groups[gid]) for gid in state.group_ids],
        "focused_group_id": state.focused_group_id,
    }
