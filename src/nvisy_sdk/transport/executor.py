"""Request executor: turns one logical API call into HTTP attempts.

Per call to :meth:`RequestExecutor.execute`:

1. **Prepare**: build the absolute URL (base URL + path + encoded query),
   encode the body and let the credential provider decorate the request. An
   encoding or auth failure ends the call with zero attempts.
2. **Attempt(n)**: send through the transport with the configured timeout
   and classify the outcome:
   - transport failure → ``NetworkError`` / ``RequestTimeoutError``
   - 2xx → run the decoder; a decoder failure is a ``DecodeError``
   - anything else → typed error from the status code and body
3. **Retry**: ask the retry policy for a delay; wait and go to Attempt(n+1),
   or stop with the last error.

The executor never raises for API failures; it returns :class:`Success` or
:class:`Failure`. ``asyncio.CancelledError`` is not intercepted, so a caller
can cancel during the network call or the wait between attempts and no
further attempt is made.

Example:
    ```python
    spec = RequestSpec("GET", "/workspaces/", query={"limit": 10}, decoder=decode_json(WorkspacesPage))
    result = await executor.execute(spec)
    if result.is_success:
        page = result.value
    ```
"""

import asyncio
import json
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

import httpx

from nvisy_sdk.auth.provider import CredentialProvider
from nvisy_sdk.errors.exceptions import APIError, AuthError, DecodeError, EncodeError
from nvisy_sdk.errors.handler import classify_response, classify_transport_error
from nvisy_sdk.result import Attempt, Failure, Result, Success
from nvisy_sdk.tracing import ATTEMPT, FAILURE, NULL_SINK, PREPARE, SUCCESS, TraceEvent, TraceSink
from nvisy_sdk.transport.base import PreparedRequest, RawResponse, Transport, TransportError
from nvisy_sdk.transport.retry import DEFAULT_RETRY_POLICY, RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

Decoder = Callable[[RawResponse], T]
Sleep = Callable[[float], Awaitable[None]]


def decode_json(model: Any = None) -> Decoder:
    """Decoder parsing a JSON body, optionally into ``model``.

    ``model`` may be a class with a ``from_dict`` classmethod or any callable
    taking the parsed JSON. Without a model the parsed JSON is returned.
    """

    def decoder(response: RawResponse) -> Any:
        data = response.json()
        if model is None:
            return data
        from_dict = getattr(model, "from_dict", None)
        return from_dict(data) if from_dict is not None else model(data)

    return decoder


def decode_bytes(response: RawResponse) -> bytes:
    return response.content


def decode_text(response: RawResponse) -> str:
    return response.content.decode("utf-8")


def decode_none(response: RawResponse) -> None:
    return None


@dataclass(frozen=True)
class RequestSpec(Generic[T]):
    """Logical description of one API call.

    Attributes:
        method: HTTP method.
        path: Path relative to the configured base URL, starting with ``/``.
        query: Query parameters in order; ``None`` values are dropped and
            sequences are sent as repeated parameters.
        json: Payload encoded as JSON. Objects with ``to_dict`` are converted first.
        content: Raw body bytes (mutually exclusive with ``json`` and ``files``).
        content_type: Content type for ``content``.
        files: Multipart file fields, as accepted by httpx.
        decoder: Turns a 2xx response into the typed result value.
    """

    method: str
    path: str
    query: Mapping[str, Any] = field(default_factory=dict)
    json: Any = None
    content: bytes | None = None
    content_type: str | None = None
    files: Mapping[str, Any] | None = None
    decoder: Decoder = field(default=decode_json())

    def __post_init__(self) -> None:
        # a path without the leading slash would be glued onto the host part of the base URL
        if not self.path.startswith("/"):
            raise ValueError(f"RequestSpec path must start with '/', got {self.path!r}")
        bodies = [part for part in (self.json, self.content, self.files) if part is not None]
        if len(bodies) > 1:
            raise ValueError("RequestSpec accepts only one of json, content or files")


def _query_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _to_jsonable(payload: Any) -> Any:
    to_dict = getattr(payload, "to_dict", None)
    return to_dict() if callable(to_dict) else payload


class RequestExecutor:
    """Executes request specs against a transport under a retry policy.

    Args:
        base_url: Absolute base URL without trailing slash
        transport: Transport performing the I/O
        credential_provider: Provider decorating each request with auth
        timeout: Per-attempt deadline in seconds
        retry_policy: Retry decision function
        trace_sink: Destination for trace events
        default_headers: Headers added to every request
        sleep: Coroutine used to wait between attempts
    """

    def __init__(
        self,
        *,
        base_url: str,
        transport: Transport,
        credential_provider: CredentialProvider,
        timeout: float,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        trace_sink: TraceSink = NULL_SINK,
        default_headers: Mapping[str, str] | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.credential_provider = credential_provider
        self.timeout = timeout
        self.retry_policy = retry_policy
        self.trace_sink = trace_sink
        self.default_headers = dict(default_headers or {"Accept": "application/json"})
        self._sleep = sleep

    def _emit(self, name: str, **fields: Any) -> None:
        if self.trace_sink is NULL_SINK:
            return
        redact = self.credential_provider.redact
        scrubbed = {key: redact(value) if isinstance(value, str) else value for key, value in fields.items()}
        self.trace_sink.emit(TraceEvent(name, scrubbed))

    def build_request(self, spec: RequestSpec) -> PreparedRequest:
        """Encode URL, query and body of ``spec`` into an unauthenticated request.

        Raises:
            EncodeError: If the body cannot be serialized.
        """
        params = []
        for key, value in spec.query.items():
            if value is None:
                continue
            values = value if isinstance(value, (list, tuple)) else [value]
            params.extend((key, _query_value(item)) for item in values)
        body_kwargs: dict[str, Any] = {}
        try:
            if spec.json is not None:
                body_kwargs["content"] = json.dumps(_to_jsonable(spec.json)).encode("utf-8")
            elif spec.content is not None:
                body_kwargs["content"] = spec.content
            elif spec.files is not None:
                body_kwargs["files"] = spec.files
            http_request = httpx.Request(
                spec.method.upper(),
                f"{self.base_url}{spec.path}",
                params=params,
                headers=self.default_headers,
                **body_kwargs,
            )
            content = body_kwargs.get("content")
            if spec.files is not None:
                content = http_request.read()
        except (TypeError, ValueError) as e:
            raise EncodeError(f"Could not encode request body for {spec.method} {spec.path}: {e}") from e

        headers = dict(self.default_headers)
        if spec.json is not None:
            headers["Content-Type"] = "application/json"
        elif spec.content is not None:
            headers["Content-Type"] = spec.content_type or "application/octet-stream"
        elif spec.files is not None:
            headers["Content-Type"] = http_request.headers["content-type"]

        return PreparedRequest(method=http_request.method, url=str(http_request.url), headers=headers, content=content)

    def _prepare(self, spec: RequestSpec) -> PreparedRequest:
        request = self.build_request(spec)
        return self.credential_provider.apply(request)

    async def execute(self, spec: RequestSpec[T]) -> Result[T]:
        """Run ``spec`` to completion and return its typed result."""
        try:
            request = self._prepare(spec)
        except (AuthError, EncodeError) as e:
            self._emit(FAILURE, method=spec.method, path=spec.path, kind=e.kind.value, attempts=0)
            logger.debug(f"Request {spec.method} {spec.path} failed before sending: {e}")
            return Failure(e, ())

        self._emit(PREPARE, method=request.method, url=request.url, headers=str(request.redacted_headers()))

        display_url = self.credential_provider.redact(request.url)
        attempts: list[Attempt] = []
        max_attempts = self.retry_policy.max_attempts
        attempt_number = 0

        while True:
            attempt_number += 1
            started_at = datetime.now(UTC)
            start = time.monotonic()
            response: RawResponse | None = None
            error: APIError | None = None
            value: Any = None

            try:
                response = await self.transport.send(request, self.timeout)
            except TransportError as e:
                error = classify_transport_error(e, attempts=attempt_number)

            elapsed = time.monotonic() - start

            if response is not None:
                if response.is_success:
                    try:
                        value = spec.decoder(response)
                    except (ValueError, TypeError, KeyError) as e:
                        error = DecodeError(
                            f"Could not decode response of {request.method} {display_url}: {e}",
                            status_code=response.status_code,
                            attempts=attempt_number,
                            headers=dict(response.headers),
                        )
                else:
                    error = classify_response(response, attempts=attempt_number)

            status_code = response.status_code if response is not None else None

            if error is None:
                attempts.append(Attempt(attempt_number, started_at, elapsed, status_code))
                self._emit(
                    ATTEMPT, method=request.method, url=request.url, attempt=attempt_number,
                    status_code=status_code, elapsed=round(elapsed, 4), outcome="success",
                )
                self._emit(SUCCESS, method=request.method, url=request.url, attempts=attempt_number)
                return Success(value, tuple(attempts))

            delay = self.retry_policy.next_delay(attempt_number, error)
            attempts.append(Attempt(attempt_number, started_at, elapsed, status_code, error.kind, delay))
            self._emit(
                ATTEMPT, method=request.method, url=request.url, attempt=attempt_number,
                status_code=status_code, elapsed=round(elapsed, 4), outcome=error.kind.value, delay=delay,
            )

            if delay is None:
                error.attempts = attempt_number
                self._emit(
                    FAILURE, method=request.method, url=request.url, kind=error.kind.value,
                    status_code=status_code, attempts=attempt_number,
                )
                if attempt_number > 1:
                    logger.warning(
                        f"Request {request.method} {display_url} failed with {status_code or error.kind.value} "
                        f"after {attempt_number} attempts"
                    )
                return Failure(error, tuple(attempts))

            logger.warning(
                f"Request {request.method} {display_url} failed with {status_code or error.kind.value}, "
                f"retrying in {delay}s (attempt {attempt_number}/{max_attempts})"
            )
            await self._sleep(delay)
