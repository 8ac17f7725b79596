"""Workspace tree rendering using the Rich library.

Draws the group split tree with each group's tabs and pane trees beneath
it. Focused group, active tab and focused pane are highlighted.
"""

import io
from typing import Any

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from ..core.ids import short_id
from ..layout import is_split
from ..panes import PaneKind
from ..workspace import PaneGroup, Tab, WorkspaceState

_PANE_STYLES = {
    PaneKind.TERMINAL: "green",
    PaneKind.SFTP: "cyan",
    PaneKind.PENDING: "yellow",
}


def _split_label(node: Any) -> Text:
    sizes = "/".join(f"{size:g}" for size in node.sizes)
    return Text(f"split {node.direction.value} [{sizes}] {short_id(node.id)}", style="dim")


def _pane_label(pane: Any, focused: bool) -> Text:
    label = Text(f"{pane.kind.value} {short_id(pane.id)}", style=_PANE_STYLES[pane.kind])
    if pane.session_id:
        label.append(f" -> {short_id(pane.session_id)}")
    if pane.kind is PaneKind.SFTP:
        label.append(f" {pane.initial_path}")
    if focused:
        label.append(" *", style="bold")
    return label


def _add_pane_node(parent: Tree, node: Any, focused_pane_id: str) -> None:
    if is_split(node):
        branch = parent.add(_split_label(node))
        for child in node.children:
            _add_pane_node(branch, child, focused_pane_id)
    else:
        parent.add(_pane_label(node, node.id == focused_pane_id))


def _add_tab(parent: Tree, tab: Tab, active: bool) -> None:
    label = Text(f"{tab.type.value} \"{tab.title}\" {short_id(tab.id)}")
    if active:
        label.stylize("bold")
        label.append(" (active)")
    branch = parent.add(label)
    if tab.type.has_panes:
        _add_pane_node(branch, tab.pane_tree, tab.focused_pane_id)


def _add_group(parent: Tree, group: PaneGroup, focused: bool) -> None:
    label = Text(f"group {short_id(group.id)}", style="bold magenta" if focused else "magenta")
    if focused:
        label.append(" (focused)")
    if group.is_empty:
        label.append(" empty", style="dim")
    branch = parent.add(label)
    for tab in group.tabs:
        _add_tab(branch, tab, tab.id == group.active_tab_id)


def _add_workspace_node(parent: Tree, node: Any, state: WorkspaceState) -> None:
    if is_split(node):
        branch = parent.add(_split_label(node))
        for child in node.children:
            _add_workspace_node(branch, child, state)
    else:
        _add_group(parent, state.groups[node.id], node.id == state.focused_group_id)


def render_workspace(state: WorkspaceState) -> Tree:
    """Build a rich Tree of the whole workspace."""
    root = Tree(Text("workspace", style="bold"))
    _add_workspace_node(root, state.tree, state)
    return root


def render_text(state: WorkspaceState, width: int = 100) -> str:
    """Plain-text rendering (logs, the /api/workspace/text endpoint)."""
    console = Console(record=True, file=io.StringIO(), width=width, color_system=None)
    console.print(render_workspace(state))
    return console.export_text()
