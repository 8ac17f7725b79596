"""HTTP session backend

Talks to the backend process over its local command endpoint:

    POST {base_url}/invoke/{command}   {"sessionId": "..."}

Any 2xx is success. Transport errors and error statuses become
SessionBackendError.
"""

import httpx

from .. import config
from ..telemetry import format_log, get_logger
from .base import SessionBackend, SessionBackendError

logger = get_logger(__name__)


class HttpSessionBackend(SessionBackend):
    """Backend reached through httpx."""

    def __init__(
        self,
        base_url: str,
        timeout: float = config.BACKEND_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            base_url: backend address, e.g. "http://127.0.0.1:7070"
            timeout: per-request timeout (seconds)
            transport: custom httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "http"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the HTTP client, creating it on first use."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def _invoke(self, command: str, session_id: str) -> None:
        client = await self._get_client()
        try:
            response = await client.post(f"/invoke/{command}", json={"sessionId": session_id})
        except httpx.HTTPError as e:
            raise SessionBackendError(f"{command}: {e}", session_id=session_id) from e

        if response.is_error:
            raise SessionBackendError(
                f"{command}: HTTP {response.status_code} {response.text}",
                session_id=session_id,
            )
        logger.debug(format_log("HttpBackend", session_id, f"{command} ok"))

    async def connect(self) -> bool:
        client = await self._get_client()
        try:
            response = await client.get("/health")
        except httpx.HTTPError as e:
            logger.warning(f"[HttpBackend] {self.base_url} unreachable: {e}")
            return False
        return response.is_success

    async def disconnect(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def create_pty_session(self, session_id: str) -> None:
        await self._invoke("create_pty_session", session_id)

    async def close_pty_session(self, session_id: str) -> None:
        await self._invoke("close_pty_session", session_id)

    async def close_sftp_session(self, session_id: str) -> None:
        await self._invoke("close_sftp_session", session_id)
