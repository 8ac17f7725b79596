"""WebServer tests (fastapi TestClient)"""

import pytest
from fastapi.testclient import TestClient

from termdeck.runtime import bootstrap
from termdeck.web import WebServer


@pytest.fixture
def components(backend, ids):
    return bootstrap(backend=backend, ids=ids)


@pytest.fixture
def client(components):
    server = WebServer(components)
    with TestClient(server.app) as client:
        yield client


class TestWorkspaceRoutes:
    """Read-only endpoints"""

    def test_get_workspace(self, client, components):
        data = client.get("/api/workspace").json()
        assert data["type"] == "workspace"
        assert data["state"]["focused_group_id"] == components.workspace.focused_group_id

    def test_get_workspace_text(self, client):
        response = client.get("/api/workspace/text")
        assert response.status_code == 200
        assert "workspace" in response.text

    def test_list_commands(self, client):
        commands = client.get("/api/commands").json()
        assert commands[0]["id"] == "newLocalTab"
        assert commands[0]["shortcut"] == "Ctrl+N"

    def test_metrics(self, client):
        client.post("/api/tabs/local")
        data = client.get("/api/metrics").json()
        assert data["counters"]["session.dispatched{action=create_pty_session}"] == 1


class TestTabRoutes:
    """Tab endpoints"""

    def test_create_and_close_local_tab(self, client, components, backend):
        created = client.post("/api/tabs/local").json()
        assert created["success"] is True
        assert components.workspace.find_tab(created["tab_id"]) is not None

        response = client.delete(f"/api/tabs/{created['tab_id']}")
        assert response.json() == {"success": True, "message": ""}
        assert components.workspace.get_all_tabs() == []

    def test_close_unknown_tab(self, client):
        assert client.delete("/api/tabs/tab-missing").status_code == 404


class TestCommandRoutes:
    """Palette over HTTP"""

    def test_run_command(self, client, components):
        result = client.post("/api/commands/newLocalTab").json()
        assert result["success"] is True
        assert len(components.workspace.get_all_tabs()) == 1

    def test_run_command_with_args(self, client, components):
        client.post("/api/commands/newLocalTab")
        result = client.post("/api/commands/renameTab", json={"args": {"title": "db"}}).json()
        assert result["success"] is True
        assert components.coordinator.active_tab.title == "db"

    def test_unknown_command(self, client):
        result = client.post("/api/commands/nope").json()
        assert result["success"] is False

    def test_bad_arguments(self, client):
        client.post("/api/commands/newLocalTab")
        result = client.post("/api/commands/renameTab", json={"args": {"bogus": 1}}).json()
        assert result["success"] is False


class TestPaneRoutes:
    """Pane endpoints"""

    def test_split_bind_close(self, client, components):
        client.post("/api/tabs/local")
        split = client.post("/api/panes/split", json={"direction": "horizontal"}).json()
        assert split["success"] is True
        pending_id = split["pending_pane_id"]

        bound = client.post(f"/api/panes/{pending_id}/bind", json={"kind": "local"}).json()
        assert bound["success"] is True
        assert bound["session_id"]

        closed = client.delete(f"/api/panes/{pending_id}").json()
        assert closed["success"] is True
        assert components.coordinator.active_tab.pane_tree.kind.value == "terminal"

    def test_bind_sftp(self, client, components):
        client.post("/api/tabs/local")
        pending_id = client.post("/api/panes/split", json={}).json()["pending_pane_id"]
        bound = client.post(
            f"/api/panes/{pending_id}/bind",
            json={"kind": "sftp", "session_id": "sftp-1", "initial_path": "/srv"},
        ).json()
        assert bound == {"success": True, "message": "", "session_id": "sftp-1"}

    def test_bind_requires_session_for_remote(self, client):
        client.post("/api/tabs/local")
        pending_id = client.post("/api/panes/split", json={}).json()["pending_pane_id"]
        response = client.post(f"/api/panes/{pending_id}/bind", json={"kind": "ssh"})
        assert response.status_code == 422

    def test_bind_unknown_kind(self, client):
        response = client.post("/api/panes/pane-x/bind", json={"kind": "telnet"})
        assert response.status_code == 422

    def test_split_without_tab(self, client):
        assert client.post("/api/panes/split", json={}).json()["success"] is False

    def test_close_pane_without_tab(self, client):
        assert client.delete("/api/panes/pane-x").json()["success"] is False


class TestGroupRoutes:
    """Group and split endpoints"""

    def test_split_and_resize(self, client, components):
        result = client.post("/api/groups/split", json={"direction": "vertical"}).json()
        assert result["success"] is True
        assert components.workspace.focused_group_id == result["group_id"]

        split_id = components.workspace.state.tree.id
        resized = client.put(f"/api/splits/{split_id}", json={"sizes": [25, 75]}).json()
        assert resized["success"] is True
        assert components.workspace.state.tree.sizes == (25.0, 75.0)

    def test_split_unknown_group(self, client):
        result = client.post("/api/groups/split", json={"group_id": "grp-x"}).json()
        assert result["success"] is False

    def test_resize_unknown_split(self, client):
        assert client.put("/api/splits/split-x", json={"sizes": [50, 50]}).json()["success"] is False


class TestWebSocket:
    """State push"""

    def test_initial_state_on_connect(self, client):
        with client.websocket_connect("/ws") as ws:
            data = ws.receive_json()
            assert data["type"] == "workspace"

    def test_command_message(self, client, components):
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_text('{"command": "newLocalTab"}')
            messages = [ws.receive_json(), ws.receive_json()]
            types = {m["type"] for m in messages}
            assert types == {"workspace", "command_result"}
        assert len(components.workspace.get_all_tabs()) == 1

    def test_shortcut_message(self, client, components):
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_text('{"shortcut": {"key": ",", "ctrl": true}}')
            messages = [ws.receive_json(), ws.receive_json()]
            result = next(m for m in messages if m["type"] == "command_result")
            assert result == {"type": "command_result", "command": "openSettings", "success": True}

    def test_focus_message(self, client, components):
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_text("focus:pane-missing")
            result = ws.receive_json()
            assert result == {"type": "focus_result", "pane_id": "pane-missing", "success": False}
