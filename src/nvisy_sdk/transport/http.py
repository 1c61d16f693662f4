"""httpx-backed transport with a runtime-selectable TLS backend.

One :class:`HttpxTransport` owns one ``httpx.AsyncClient`` and therefore one
connection pool, which is safe for concurrent use by many in-flight calls.
Connections are checked out and returned by httpx itself; a response body is
read completely before :meth:`HttpxTransport.send` returns, so no connection
is held once the call resolves, fails or is cancelled.

Example:
    ```python
    from nvisy_sdk.transport.http import HttpxTransport, TlsBackend

    transport = HttpxTransport(tls_backend=TlsBackend.ALTERNATE)
    try:
        raw = await transport.send(prepared_request, timeout=30.0)
    finally:
        await transport.aclose()
    ```
"""

import asyncio
import logging
import ssl
from enum import Enum

import certifi
import httpx

from nvisy_sdk.transport.base import PreparedRequest, RawResponse, TransportError, TransportErrorKind

logger = logging.getLogger(__name__)


class TlsBackend(str, Enum):
    """Which trust configuration the HTTPS connections use."""

    PLATFORM_DEFAULT = "platform_default"  # system trust store via OpenSSL defaults
    ALTERNATE = "alternate"  # Mozilla CA bundle shipped by certifi

    def ssl_context(self) -> ssl.SSLContext:
        if self is TlsBackend.ALTERNATE:
            return ssl.create_default_context(cafile=certifi.where())
        return ssl.create_default_context()


def _is_tls_failure(exc: BaseException) -> bool:
    """Walk the exception chain looking for an ssl error."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    message = str(exc)
    return "SSL" in message or "CERTIFICATE_VERIFY_FAILED" in message


def transport_error_from_httpx(exc: httpx.HTTPError) -> TransportError:
    """Map an httpx exception onto the transport error kinds."""
    if isinstance(exc, httpx.TimeoutException):
        return TransportError(f"Timed out: {exc}", TransportErrorKind.TIMEOUT)
    if isinstance(exc, httpx.ConnectError):
        if _is_tls_failure(exc):
            return TransportError(f"TLS handshake failed: {exc}", TransportErrorKind.TLS)
        return TransportError(f"Connection failed: {exc}", TransportErrorKind.CONNECT)
    if isinstance(exc, httpx.LocalProtocolError):
        return TransportError(f"Request rejected by the HTTP layer: {exc}", TransportErrorKind.INVALID_REQUEST)
    if isinstance(exc, (httpx.TooManyRedirects, httpx.UnsupportedProtocol)):
        return TransportError(f"Could not follow redirect: {exc}", TransportErrorKind.REDIRECT)
    if isinstance(exc, (httpx.ReadError, httpx.WriteError, httpx.CloseError, httpx.ProtocolError, httpx.DecodingError)):
        return TransportError(f"Failed reading response: {exc}", TransportErrorKind.BODY_READ)
    return TransportError(f"Connection failed: {exc}", TransportErrorKind.CONNECT)


class HttpxTransport:
    """Transport that performs requests through a pooled ``httpx.AsyncClient``.

    Args:
        tls_backend: Trust configuration for HTTPS connections
        transport: Optional lower-level httpx transport (e.g. ``httpx.MockTransport``
            in tests); when given, ``tls_backend`` is not applied
        limits: Connection pool limits
    """

    def __init__(
        self,
        *,
        tls_backend: TlsBackend = TlsBackend.PLATFORM_DEFAULT,
        transport: httpx.AsyncBaseTransport | None = None,
        limits: httpx.Limits | None = None,
    ) -> None:
        self.tls_backend = tls_backend
        client_kwargs = {"follow_redirects": True, "limits": limits or httpx.Limits()}
        if transport is not None:
            client_kwargs["transport"] = transport
        else:
            client_kwargs["verify"] = tls_backend.ssl_context()
        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(self, request: PreparedRequest, timeout: float) -> RawResponse:
        """Perform one HTTP exchange under a hard deadline.

        Args:
            request: Prepared request with absolute URL and final headers
            timeout: Seconds allowed for connect, send and receive together

        Returns:
            Raw response with the body fully read

        Raises:
            TransportError: On connection, TLS, timeout or body-read failure, a
                redirect that cannot be followed, or a request httpx refuses to send
        """
        try:
            http_request = self._client.build_request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.content,
                timeout=httpx.Timeout(timeout),
            )
        except (ValueError, httpx.InvalidURL) as e:
            # UnicodeEncodeError from non-ASCII header values is a ValueError
            raise TransportError(f"Could not build request: {e}", TransportErrorKind.INVALID_REQUEST) from e

        try:
            async with asyncio.timeout(timeout):
                response = await self._client.send(http_request)
        except TimeoutError as e:
            raise TransportError(f"Request exceeded deadline of {timeout}s", TransportErrorKind.TIMEOUT) from e
        except httpx.HTTPError as e:
            error = transport_error_from_httpx(e)
            # query strings are left out of logs
            logger.debug(f"Transport failure for {request.method} {request.url.split('?', 1)[0]}: {error.kind.value}")
            raise error from e

        return RawResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
        )
