"""termdeck entry point - serves the control surface with uvicorn"""

import asyncio

import uvicorn

from .. import config
from ..runtime import bootstrap
from ..telemetry import configure_logging, get_logger
from .server import WebServer

logger = get_logger(__name__)


async def start_server(host: str = config.WEB_HOST, port: int = config.WEB_PORT):
    """Build the components and serve until uvicorn exits."""
    components = bootstrap()
    server = WebServer(components)

    await components.start()

    config_uvicorn = uvicorn.Config(server.app, host=host, port=port, log_level=config.LOG_LEVEL.lower())
    uvicorn_server = uvicorn.Server(config_uvicorn)

    logger.info(f"[App] termdeck starting at http://{host}:{port}")

    try:
        await uvicorn_server.serve()
    finally:
        await components.shutdown()


def main():
    """CLI entry point"""
    configure_logging(config.LOG_LEVEL)
    try:
        asyncio.run(start_server())
    except KeyboardInterrupt:
        logger.info("[App] Server stopped")


if __name__ == "__main__":
    main()
