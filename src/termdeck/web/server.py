"""Web server - HTTP control surface and WebSocket state push"""

import asyncio

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import PlainTextResponse

from ..render import render_text
from ..runtime import RuntimeComponents
from ..sessions import SessionCommand
from ..telemetry import get_logger, metrics
from ..workspace import WorkspaceState, state_to_dict
from .handlers import MessageHandler
from .models import (
    ApiResult,
    BindPaneRequest,
    BindPaneResponse,
    CommandInfo,
    ResizeSplitRequest,
    RunCommandRequest,
    SplitGroupRequest,
    SplitGroupResponse,
    SplitPaneRequest,
    SplitPaneResponse,
    TabCreated,
)

logger = get_logger(__name__)


class WebServer:
    """FastAPI app over one set of runtime components.

    Every committed workspace change and every failed session call is
    pushed to all connected WebSocket clients.
    """

    def __init__(self, components: RuntimeComponents):
        self.app = FastAPI(title="termdeck")
        self.components = components
        self.clients: list[WebSocket] = []
        self._tasks: set[asyncio.Task] = set()

        self._handler = MessageHandler(
            coordinator=components.coordinator,
            palette=components.palette,
        )

        self._setup_routes()
        components.workspace.set_on_change(self._on_state_change)
        components.dispatcher.set_on_error(self._on_session_error)

    @property
    def workspace(self):
        return self.components.workspace

    @property
    def coordinator(self):
        return self.components.coordinator

    def get_state_dict(self) -> dict:
        return {"type": "workspace", "state": state_to_dict(self.workspace.state)}

    # === Push ===

    def _schedule(self, data: dict) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return  # no clients can be connected without a loop
        task = loop.create_task(self.broadcast(data))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _on_state_change(self, state: WorkspaceState) -> None:
        self._schedule({"type": "workspace", "state": state_to_dict(state)})

    def _on_session_error(self, command: SessionCommand, error: Exception) -> None:
        self._schedule({"type": "session_error", "command": command.to_dict(), "error": str(error)})

    async def broadcast(self, data: dict):
        """Send a message to every client, dropping the ones that fail."""
        for client in list(self.clients):
            try:
                await client.send_json(data)
            except Exception as e:
                logger.debug(f"[WebServer] Dropping client: {e}")
                if client in self.clients:
                    self.clients.remove(client)

    # === Routes ===

    def _setup_routes(self):
        app = self.app

        @app.get("/api/workspace")
        async def get_workspace():
            return self.get_state_dict()

        @app.get("/api/workspace/text", response_class=PlainTextResponse)
        async def get_workspace_text():
            return render_text(self.workspace.state)

        @app.get("/api/metrics")
        async def get_metrics():
            return metrics.snapshot()

        @app.get("/api/commands", response_model=list[CommandInfo])
        async def list_commands():
            return [command.to_dict() for command in self.components.palette.commands()]

        @app.post("/api/commands/{command_id}", response_model=ApiResult)
        async def run_command(command_id: str, request: RunCommandRequest | None = None):
            args = request.args if request else {}
            try:
                success = self.components.palette.run(command_id, **args)
            except (TypeError, ValueError) as e:
                return ApiResult(success=False, message=str(e))
            return ApiResult(success=success, message="" if success else "unknown or disabled command")

        @app.post("/api/tabs/local", response_model=TabCreated)
        async def create_local_tab():
            tab = self.coordinator.create_local_tab()
            return TabCreated(success=True, tab_id=tab.id, session_id=tab.session_id)

        @app.delete("/api/tabs/{tab_id}", response_model=ApiResult)
        async def close_tab(tab_id: str):
            if self.coordinator.close_tab(tab_id) is None:
                raise HTTPException(status_code=404, detail="Tab not found")
            return ApiResult(success=True)

        @app.post("/api/panes/split", response_model=SplitPaneResponse)
        async def split_pane(request: SplitPaneRequest):
            pending_id = self.coordinator.split_pane(request.direction, request.pane_id)
            return SplitPaneResponse(success=pending_id is not None, pending_pane_id=pending_id)

        @app.delete("/api/panes/{pane_id}", response_model=ApiResult)
        async def close_pane(pane_id: str):
            tab = self.coordinator.active_tab
            if tab is None or not tab.type.has_panes:
                return ApiResult(success=False, message="no active tab")
            before = self.workspace.state
            self.coordinator.close_pane_by_id(pane_id)
            return ApiResult(success=self.workspace.state is not before)

        @app.post("/api/panes/{pane_id}/bind", response_model=BindPaneResponse)
        async def bind_pane(pane_id: str, request: BindPaneRequest):
            if request.kind == "local":
                session_id = self.coordinator.replace_pending_with_local(pane_id)
                return BindPaneResponse(success=session_id is not None, session_id=session_id)
            if request.kind == "ssh":
                success = self.coordinator.replace_pending_with_ssh(pane_id, request.session_id)
            else:
                success = self.coordinator.replace_pending_with_sftp_pane(
                    pane_id, request.session_id, request.initial_path
                )
            return BindPaneResponse(success=success, session_id=request.session_id if success else None)

        @app.post("/api/groups/split", response_model=SplitGroupResponse)
        async def split_group(request: SplitGroupRequest):
            group_id = request.group_id or self.workspace.focused_group_id
            new_group_id = self.workspace.split_group(group_id, request.direction)
            return SplitGroupResponse(success=new_group_id is not None, group_id=new_group_id)

        @app.put("/api/splits/{split_id}", response_model=ApiResult)
        async def resize_split(split_id: str, request: ResizeSplitRequest):
            before = self.workspace.state
            self.workspace.resize_split_node(split_id, request.sizes)
            return ApiResult(success=self.workspace.state is not before)

        @app.websocket("/ws")
        async def websocket_endpoint(websocket: WebSocket):
            await websocket.accept()
            self.clients.append(websocket)
            try:
                await websocket.send_json(self.get_state_dict())
                while True:
                    data = await websocket.receive_text()
                    await self._handler.handle(websocket, data)
            except WebSocketDisconnect:
                if websocket in self.clients:
                    self.clients.remove(websocket)
