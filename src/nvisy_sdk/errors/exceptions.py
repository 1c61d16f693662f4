"""Structured exceptions for Nvisy API errors.

Every failure the request executor can report is an instance of one of the
classes below. Each class carries an :class:`ErrorKind` so retry decisions and
callers can branch on the classification without ``isinstance`` chains.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from nvisy_sdk.errors.models import ProblemDetail


class ErrorKind(str, Enum):
    """Classification of a failed call."""

    CONFIG = "config"
    AUTH = "auth"
    NETWORK = "network"
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    SERVER = "server"
    CLIENT = "client"
    DECODE = "decode"
    ENCODE = "encode"
    UNEXPECTED = "unexpected"


class NvisyError(Exception):
    """Base exception for everything raised or returned by the SDK."""

    kind: ErrorKind = ErrorKind.UNEXPECTED


class ConfigError(NvisyError, ValueError):
    """Invalid client configuration, reported when the config is built."""

    kind = ErrorKind.CONFIG


class APIError(NvisyError):
    """Base exception for failed API calls.

    Attributes:
        status_code: HTTP status of the last response, if one was received.
        attempts: Number of physical attempts made before giving up.
        body: Parsed JSON body of the error response (raw text if not JSON).
        problem_detail: RFC 7807 problem details, when the body has that shape.
        headers: Headers of the last response.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        attempts: int = 0,
        body: Any = None,
        problem_detail: "ProblemDetail | None" = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.attempts = attempts
        self.body = body
        self.problem_detail = problem_detail
        self.headers = headers if headers is not None else {}

    @property
    def message(self) -> str:
        return str(self)


class AuthError(APIError):
    """Credential missing or unusable; raised before any network attempt."""

    kind = ErrorKind.AUTH


class NetworkError(APIError):
    """Connection, TLS or body-read failure below the HTTP layer."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, *, transport_kind: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.transport_kind = transport_kind


class RequestTimeoutError(NetworkError):
    """The per-attempt deadline elapsed."""

    kind = ErrorKind.TIMEOUT


class ClientError(APIError):
    """4xx client errors other than 429."""

    kind = ErrorKind.CLIENT


class BadRequestError(ClientError):
    """400 Bad Request."""


class UnauthorizedError(ClientError):
    """401 Unauthorized."""


class ForbiddenError(ClientError):
    """403 Forbidden."""


class NotFoundError(ClientError):
    """404 Not Found."""


class ConflictError(ClientError):
    """409 Conflict."""


class ValidationError(ClientError):
    """422 Unprocessable Entity (validation errors)."""

    def __init__(self, message: str, validation_errors: list[dict] | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors if validation_errors is not None else []


class RateLimitError(APIError):
    """429 Too Many Requests.

    ``retry_after`` holds the server's hint in seconds, if it sent one.
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, message: str, retry_after: float | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    kind = ErrorKind.SERVER


class UnexpectedStatusError(APIError):
    """Final status outside 2xx, 4xx and 5xx (unfollowed redirects, 1xx)."""

    kind = ErrorKind.UNEXPECTED


class DecodeError(APIError):
    """A 2xx response body did not match the expected type."""

    kind = ErrorKind.DECODE


class EncodeError(APIError):
    """The request payload could not be serialized."""

    kind = ErrorKind.ENCODE
