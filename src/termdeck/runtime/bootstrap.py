"""Bootstrap - builds the runtime components in one place

Responsibilities:
- pick the session backend (HTTP when TERMDECK_BACKEND_URL is set,
  otherwise in-memory)
- create the dispatcher, workspace controller, coordinator and palette,
  all sharing one IdGenerator
- return RuntimeComponents for the caller

Not responsible for:
- serving (see web.app)
- starting/stopping the backend (RuntimeComponents.start / shutdown,
  driven by the caller)
"""

from dataclasses import dataclass

from .. import config
from ..core.ids import IdGenerator
from ..lifecycle import TabCoordinator
from ..palette import CommandPalette, build_commands
from ..sessions import (
    HttpSessionBackend,
    InMemorySessionBackend,
    SessionBackend,
    SessionDispatcher,
    SessionObservers,
)
from ..telemetry import get_logger
from ..workspace import WorkspaceController

logger = get_logger(__name__)


@dataclass
class RuntimeComponents:
    """Components returned by bootstrap()"""

    ids: IdGenerator
    backend: SessionBackend
    observers: SessionObservers
    dispatcher: SessionDispatcher
    workspace: WorkspaceController
    coordinator: TabCoordinator
    palette: CommandPalette

    async def start(self) -> bool:
        """Connect the backend. Returns False if it is unreachable."""
        connected = await self.backend.connect()
        if connected:
            logger.info(f"[Bootstrap] Backend {self.backend.name} connected")
        else:
            logger.warning(f"[Bootstrap] Backend {self.backend.name} not reachable")
        return connected

    async def shutdown(self) -> None:
        """Flush outstanding session calls and release the backend."""
        await self.dispatcher.shutdown()


def _default_backend() -> SessionBackend:
    if config.BACKEND_URL:
        return HttpSessionBackend(config.BACKEND_URL, timeout=config.BACKEND_TIMEOUT)
    return InMemorySessionBackend()


def bootstrap(
    backend: SessionBackend | None = None,
    ids: IdGenerator | None = None,
) -> RuntimeComponents:
    """Construct the runtime components.

    Args:
        backend: session backend; defaults from config
        ids: id generator shared by workspace and coordinator

    Returns:
        RuntimeComponents with everything wired
    """
    ids = ids or IdGenerator()
    backend = backend or _default_backend()

    observers = SessionObservers()
    dispatcher = SessionDispatcher(backend, observers)
    workspace = WorkspaceController(ids)
    coordinator = TabCoordinator(workspace, dispatcher, ids)
    palette = build_commands(coordinator)

    logger.info(f"[Bootstrap] Components created (backend={backend.name})")

    return RuntimeComponents(
        ids=ids,
        backend=backend,
        observers=observers,
        dispatcher=dispatcher,
        workspace=workspace,
        coordinator=coordinator,
        palette=palette,
    )
