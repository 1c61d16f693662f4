"""Transport contract: the only seam of the SDK that performs network I/O.

A transport receives a fully prepared request (absolute URL, headers, encoded
body) and returns the raw status, headers and body bytes. It knows nothing
about retries, credentials or response types; those belong to the executor.
"""

import dataclasses
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

SENSITIVE_HEADERS: frozenset[str] = frozenset(["authorization", "proxy-authorization", "x-api-key"])


class TransportErrorKind(str, Enum):
    """What went wrong below the HTTP layer."""

    CONNECT = "connect"  # DNS resolution or TCP connection failure
    TLS = "tls"  # TLS handshake failure
    TIMEOUT = "timeout"  # per-attempt deadline elapsed
    BODY_READ = "body_read"  # connection dropped while sending or reading
    INVALID_REQUEST = "invalid_request"  # request could not be put on the wire as given
    REDIRECT = "redirect"  # redirect loop or redirect to an unsupported scheme


class TransportError(Exception):
    """Raised by a transport when no HTTP response could be obtained."""

    def __init__(self, message: str, kind: TransportErrorKind):
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class PreparedRequest:
    """A physical HTTP request, ready to hand to a transport.

    Instances are immutable; :meth:`with_header` returns a decorated copy so
    credential providers never mutate the request they were given.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | None = None

    def with_header(self, name: str, value: str) -> "PreparedRequest":
        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        headers[name] = value
        return dataclasses.replace(self, headers=headers)

    def redacted_headers(self) -> dict[str, str]:
        """Headers with credential-bearing values replaced by ``***``."""
        return {k: ("***" if k.lower() in SENSITIVE_HEADERS else v) for k, v in self.headers.items()}

    def __repr__(self) -> str:
        return f"PreparedRequest(method={self.method!r}, url={self.url!r}, headers={self.redacted_headers()!r})"


@dataclass(frozen=True)
class RawResponse:
    """Status, headers and body bytes of one HTTP exchange."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.content)


@runtime_checkable
class Transport(Protocol):
    """Anything that can perform one HTTP exchange asynchronously."""

    async def send(self, request: PreparedRequest, timeout: float) -> RawResponse:
        """Send ``request`` and return the raw response.

        The timeout is a hard deadline covering connect, send and receive.

        Raises:
            TransportError: If no HTTP response could be obtained.
        """
        ...

    async def aclose(self) -> None:
        """Release pooled connections."""
        ...
