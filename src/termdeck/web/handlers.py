"""WebSocket message handler"""

import json
from dataclasses import dataclass

from fastapi import WebSocket

from ..lifecycle import TabCoordinator
from ..palette import CommandPalette
from ..telemetry import get_logger

logger = get_logger(__name__)


@dataclass
class MessageHandler:
    """WebSocket message handler

    Accepts ``focus:<pane_id>`` (user clicked a pane) and JSON messages
    ``{"command": id, "args": {...}}`` or
    ``{"shortcut": {"key": "D", "ctrl": true, ...}}``.
    """

    coordinator: TabCoordinator
    palette: CommandPalette

    async def handle(self, websocket: WebSocket, data: str):
        if data.startswith("focus:"):
            await self._handle_focus(websocket, data)
        elif data.startswith("{"):
            await self._handle_json(websocket, data)

    async def _handle_focus(self, websocket: WebSocket, data: str):
        pane_id = data.split(":", 1)[1]
        self.coordinator.focus_pane(pane_id)
        tab = self.coordinator.active_tab
        await websocket.send_json({
            "type": "focus_result",
            "pane_id": pane_id,
            "success": tab is not None and tab.focused_pane_id == pane_id,
        })

    async def _handle_json(self, websocket: WebSocket, data: str):
        try:
            msg = json.loads(data)
        except json.JSONDecodeError as e:
            logger.warning(f"[WebSocket] Bad message: {e}")
            await websocket.send_json({"type": "error", "message": "invalid json"})
            return

        command_id = msg.get("command")
        if command_id is None and isinstance(msg.get("shortcut"), dict):
            shortcut = msg["shortcut"]
            command = self.palette.match_shortcut(
                str(shortcut.get("key", "")),
                ctrl=bool(shortcut.get("ctrl")),
                shift=bool(shortcut.get("shift")),
                alt=bool(shortcut.get("alt")),
            )
            command_id = command.id if command else None

        if command_id is None:
            await websocket.send_json({"type": "command_result", "command": None, "success": False})
            return

        try:
            success = self.palette.run(command_id, **msg.get("args", {}))
        except (TypeError, ValueError) as e:
            logger.warning(f"[WebSocket] Command {command_id} rejected: {e}")
            success = False
        await websocket.send_json({"type": "command_result", "command": command_id, "success": success})
