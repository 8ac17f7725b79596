"""HttpSessionBackend tests (httpx.MockTransport)"""

import json

import httpx
import pytest

from termdeck.sessions import HttpSessionBackend, SessionBackendError


def make_backend(handler):
    return HttpSessionBackend("http://backend.test/", transport=httpx.MockTransport(handler))


class TestHttpSessionBackend:
    """Command invocation"""

    @pytest.mark.asyncio
    async def test_invoke_posts_session_id(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={})

        backend = make_backend(handler)
        await backend.create_pty_session("pty-1")
        await backend.close_sftp_session("sftp-1")
        await backend.disconnect()

        assert [r.url.path for r in requests] == [
            "/invoke/create_pty_session",
            "/invoke/close_sftp_session",
        ]
        assert requests[0].method == "POST"
        assert json.loads(requests[0].content) == {"sessionId": "pty-1"}

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        backend = make_backend(lambda request: httpx.Response(500, text="no such session"))
        with pytest.raises(SessionBackendError) as exc_info:
            await backend.close_pty_session("pty-1")
        assert exc_info.value.session_id == "pty-1"
        assert "500" in str(exc_info.value)
        await backend.disconnect()

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        backend = make_backend(handler)
        with pytest.raises(SessionBackendError):
            await backend.create_pty_session("pty-1")
        await backend.disconnect()

    @pytest.mark.asyncio
    async def test_connect_health_check(self):
        def handler(request):
            assert request.url.path == "/health"
            return httpx.Response(200)

        backend = make_backend(handler)
        assert await backend.connect() is True
        await backend.disconnect()

    @pytest.mark.asyncio
    async def test_connect_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        backend = make_backend(handler)
        assert await backend.connect() is False
        await backend.disconnect()

    @pytest.mark.asyncio
    async def test_client_recreated_after_disconnect(self):
        backend = make_backend(lambda request: httpx.Response(204))
        await backend.close_pty_session("pty-1")
        await backend.disconnect()
        await backend.close_pty_session("pty-2")
        await backend.disconnect()

    def test_name(self):
        assert HttpSessionBackend("http://x").name == "http"
