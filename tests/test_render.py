"""Workspace rendering tests"""

from rich.tree import Tree

from termdeck.render import render_text, render_workspace


class TestRender:
    """rich tree rendering"""

    def test_empty_workspace(self, workspace):
        text = render_text(workspace.state)
        assert "workspace" in text
        assert "empty" in text
        assert "(focused)" in text

    def test_tabs_and_panes(self, coordinator):
        tab = coordinator.create_local_tab()
        coordinator.split_pane("vertical")
        text = render_text(coordinator.workspace.state)
        assert '"Local"' in text
        assert "(active)" in text
        assert "terminal" in text
        assert "pending" in text
        assert "split vertical [50/50]" in text

    def test_settings_tab_has_no_pane_rows(self, coordinator):
        coordinator.open_settings()
        text = render_text(coordinator.workspace.state)
        assert "settings" in text
        assert "pending" not in text

    def test_render_workspace_returns_tree(self, workspace):
        workspace.split_focused_group("horizontal")
        tree = render_workspace(workspace.state)
        assert isinstance(tree, Tree)
        assert len(tree.children) == 1
        assert len(tree.children[0].children) == 2
