"""termdeck entry point tests"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import termdeck
from termdeck.runtime import bootstrap
from termdeck.sessions import InMemorySessionBackend
from termdeck.web import app


def test_version():
    """Package exposes its version"""
    assert termdeck.__version__ == "0.1.0"


def test_main_runs_server():
    """main() configures logging and runs start_server"""
    with patch.object(app, "configure_logging") as configure, \
            patch.object(app.asyncio, "run", side_effect=lambda coro: coro.close()) as run:
        app.main()
    configure.assert_called_once()
    run.assert_called_once()


def test_main_handles_keyboard_interrupt():
    def interrupt(coro):
        coro.close()
        raise KeyboardInterrupt

    with patch.object(app, "configure_logging"), patch.object(app.asyncio, "run", side_effect=interrupt):
        app.main()


@pytest.mark.asyncio
async def test_start_server_shuts_down_components():
    """Components are shut down when uvicorn returns"""
    backend = InMemorySessionBackend()
    backend.disconnect = AsyncMock()
    components = bootstrap(backend=backend)
    uvicorn_server = MagicMock()
    uvicorn_server.serve = AsyncMock()

    with patch.object(app, "bootstrap", return_value=components), \
            patch.object(app.uvicorn, "Server", return_value=uvicorn_server):
        await app.start_server(host="127.0.0.1", port=0)

    uvicorn_server.serve.assert_awaited_once()
    backend.disconnect.assert_awaited_once()
