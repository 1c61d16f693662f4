"""Tests for the httpx-backed transport and the transport value types."""

import asyncio
import ssl

import httpx
import pytest

from nvisy_sdk.transport import (
    HttpxTransport,
    PreparedRequest,
    RawResponse,
    TlsBackend,
    Transport,
    TransportError,
    TransportErrorKind,
)
from nvisy_sdk.transport.http import transport_error_from_httpx


def _request(method="GET", url="https://api.nvisy.com/health/", **kwargs):
    return PreparedRequest(method, url, **kwargs)


class TestHttpxTransportSend:
    """Test request/response mapping through httpx.MockTransport."""

    @pytest.mark.unit
    async def test_send_returns_raw_response(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "healthy"}, headers={"X-Request-Id": "r1"})

        async with HttpxTransport(transport=httpx.MockTransport(handler)) as transport:
            raw = await transport.send(_request(), timeout=5.0)

        assert raw.status_code == 200
        assert raw.json() == {"status": "healthy"}
        assert raw.header("x-request-id") == "r1"

    @pytest.mark.unit
    async def test_send_forwards_method_headers_and_body(self):
        seen = {}

        async def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["authorization"]
            seen["body"] = request.content
            return httpx.Response(201)

        request = _request(
            "POST",
            "https://api.nvisy.com/workspaces/?limit=5",
            headers={"Authorization": "Bearer k", "Content-Type": "application/json"},
            content=b'{"displayName": "Legal"}',
        )
        async with HttpxTransport(transport=httpx.MockTransport(handler)) as transport:
            raw = await transport.send(request, timeout=5.0)

        assert raw.status_code == 201
        assert seen == {
            "method": "POST",
            "url": "https://api.nvisy.com/workspaces/?limit=5",
            "auth": "Bearer k",
            "body": b'{"displayName": "Legal"}',
        }

    @pytest.mark.unit
    async def test_non_2xx_is_returned_not_raised(self):
        """Status classification belongs to the executor."""

        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="down")

        async with HttpxTransport(transport=httpx.MockTransport(handler)) as transport:
            raw = await transport.send(_request(), timeout=5.0)

        assert raw.status_code == 503
        assert raw.text == "down"
        assert not raw.is_success

    @pytest.mark.unit
    async def test_redirects_are_followed(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/health":
                return httpx.Response(301, headers={"Location": "https://api.nvisy.com/health/"})
            return httpx.Response(200, json={})

        async with HttpxTransport(transport=httpx.MockTransport(handler)) as transport:
            raw = await transport.send(_request(url="https://api.nvisy.com/health"), timeout=5.0)

        assert raw.status_code == 200

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("exc", "kind"),
        [
            (httpx.ConnectError("Name or service not known"), TransportErrorKind.CONNECT),
            (httpx.ConnectTimeout("timed out"), TransportErrorKind.TIMEOUT),
            (httpx.ReadTimeout("timed out"), TransportErrorKind.TIMEOUT),
            (httpx.ReadError("connection reset"), TransportErrorKind.BODY_READ),
            (httpx.RemoteProtocolError("peer closed"), TransportErrorKind.BODY_READ),
            (httpx.ConnectError("[SSL: CERTIFICATE_VERIFY_FAILED]"), TransportErrorKind.TLS),
            (httpx.LocalProtocolError("Illegal header value"), TransportErrorKind.INVALID_REQUEST),
            (httpx.TooManyRedirects("Exceeded maximum allowed redirects."), TransportErrorKind.REDIRECT),
            (httpx.UnsupportedProtocol("Request URL has an unsupported protocol 'ftp://'."), TransportErrorKind.REDIRECT),
        ],
    )
    async def test_httpx_errors_become_transport_errors(self, exc, kind):
        async def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        async with HttpxTransport(transport=httpx.MockTransport(handler)) as transport:
            with pytest.raises(TransportError) as exc_info:
                await transport.send(_request(), timeout=5.0)

        assert exc_info.value.kind is kind

    @pytest.mark.unit
    async def test_redirect_loop_is_not_a_connect_failure(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"location": "https://api.nvisy.com/health/"})

        async with HttpxTransport(transport=httpx.MockTransport(handler)) as transport:
            with pytest.raises(TransportError) as exc_info:
                await transport.send(_request(), timeout=5.0)

        assert exc_info.value.kind is TransportErrorKind.REDIRECT

    @pytest.mark.unit
    async def test_unencodable_header_is_invalid_request(self):
        calls = []

        async def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        async with HttpxTransport(transport=httpx.MockTransport(handler)) as transport:
            with pytest.raises(TransportError) as exc_info:
                await transport.send(_request(headers={"User-Agent": "caf\u00e9/1.0"}), timeout=5.0)

        assert exc_info.value.kind is TransportErrorKind.INVALID_REQUEST
        assert calls == []

    @pytest.mark.unit
    async def test_hard_deadline(self):
        """A response slower than the timeout is reported as a timeout."""

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200)

        async with HttpxTransport(transport=httpx.MockTransport(handler)) as transport:
            with pytest.raises(TransportError) as exc_info:
                await transport.send(_request(), timeout=0.05)

        assert exc_info.value.kind is TransportErrorKind.TIMEOUT

    @pytest.mark.unit
    async def test_concurrent_sends_share_one_transport(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.01)
            return httpx.Response(200, json={"path": request.url.path})

        async with HttpxTransport(transport=httpx.MockTransport(handler)) as transport:
            responses = await asyncio.gather(
                *(transport.send(_request(url=f"https://api.nvisy.com/files/{i}"), timeout=5.0) for i in range(10))
            )

        assert [r.json()["path"] for r in responses] == [f"/files/{i}" for i in range(10)]

    @pytest.mark.unit
    def test_satisfies_transport_protocol(self):
        assert isinstance(HttpxTransport(transport=httpx.MockTransport(lambda r: httpx.Response(200))), Transport)


class TestTlsBackend:
    """Test TLS backend selection."""

    @pytest.mark.unit
    @pytest.mark.parametrize("backend", list(TlsBackend))
    def test_ssl_context_verifies_certificates(self, backend):
        context = backend.ssl_context()

        assert isinstance(context, ssl.SSLContext)
        assert context.verify_mode == ssl.CERT_REQUIRED
        assert context.check_hostname is True

    @pytest.mark.unit
    async def test_transport_built_for_each_backend(self):
        for backend in TlsBackend:
            transport = HttpxTransport(tls_backend=backend)
            assert transport.tls_backend is backend
            await transport.aclose()

    @pytest.mark.unit
    def test_backend_from_value(self):
        assert TlsBackend("alternate") is TlsBackend.ALTERNATE


class TestErrorMapping:
    """Test the httpx exception mapping helper directly."""

    @pytest.mark.unit
    def test_ssl_error_in_chain_is_tls(self):
        exc = httpx.ConnectError("handshake failed")
        exc.__cause__ = ssl.SSLError(1, "certificate verify failed")

        assert transport_error_from_httpx(exc).kind is TransportErrorKind.TLS

    @pytest.mark.unit
    def test_write_error_is_body_read(self):
        assert transport_error_from_httpx(httpx.WriteError("broken pipe")).kind is TransportErrorKind.BODY_READ


class TestValueTypes:
    """Test PreparedRequest and RawResponse helpers."""

    @pytest.mark.unit
    def test_prepared_request_repr_redacts_credentials(self):
        request = _request(headers={"Authorization": "Bearer sk-live-1", "Accept": "application/json"})

        assert "sk-live-1" not in repr(request)
        assert request.redacted_headers() == {"Authorization": "***", "Accept": "application/json"}

    @pytest.mark.unit
    def test_with_header_returns_copy(self):
        request = _request(headers={"Accept": "application/json"})

        updated = request.with_header("User-Agent", "nvisy-sdk-python/0.1.0")

        assert request.headers == {"Accept": "application/json"}
        assert updated.headers["User-Agent"] == "nvisy-sdk-python/0.1.0"

    @pytest.mark.unit
    def test_raw_response_helpers(self):
        raw = RawResponse(200, {"Content-Type": "application/json"}, b'{"a": 1}')

        assert raw.is_success
        assert raw.header("content-type") == "application/json"
        assert raw.header("missing") is None
        assert raw.json() == {"a": 1}
        assert raw.text == '{"a": 1}'

    @pytest.mark.unit
    @pytest.mark.parametrize(("status", "ok"), [(199, False), (200, True), (299, True), (300, False)])
    def test_success_range(self, status, ok):
        assert RawResponse(status).is_success is ok
