"""Request/response bodies of the web control surface"""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

DirectionName = Literal["horizontal", "vertical"]


class ApiResult(BaseModel):
    """Generic operation result"""

    success: bool
    message: str = ""


class RunCommandRequest(BaseModel):
    """Palette command arguments, passed to the handler as keywords"""

    args: dict = Field(default_factory=dict)


class CommandInfo(BaseModel):
    id: str
    title: str
    category: str
    shortcut: str
    enabled: bool


class TabCreated(ApiResult):
    tab_id: str | None = None
    session_id: str | None = None


class SplitPaneRequest(BaseModel):
    direction: DirectionName = "vertical"
    pane_id: str | None = None  # None => focused pane of the active tab


class SplitPaneResponse(ApiResult):
    pending_pane_id: str | None = None


class BindPaneRequest(BaseModel):
    """Bind a pending pane.

    ``local`` creates a new shell; ``ssh`` and ``sftp`` attach a session the
    connection flow already opened and therefore need ``session_id``.
    """

    kind: Literal["local", "ssh", "sftp"]
    session_id: str | None = None
    initial_path: str = "/"

    @model_validator(mode="after")
    def _session_for_remote(self) -> "BindPaneRequest":
        if self.kind != "local" and not self.session_id:
            raise ValueError(f"session_id is required for kind={self.kind}")
        return self


class BindPaneResponse(ApiResult):
    session_id: str | None = None


class SplitGroupRequest(BaseModel):
    direction: DirectionName = "horizontal"
    group_id: str | None = None  # None => focused group


class SplitGroupResponse(ApiResult):
    group_id: str | None = None


class ResizeSplitRequest(BaseModel):
    sizes: list[float]
