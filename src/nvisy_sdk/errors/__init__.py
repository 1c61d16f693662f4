"""Error taxonomy and RFC 7807 support for the Nvisy SDK."""

from nvisy_sdk.errors.exceptions import (
    APIError,
    AuthError,
    BadRequestError,
    ClientError,
    ConfigError,
    ConflictError,
    DecodeError,
    EncodeError,
    ErrorKind,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    NvisyError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    UnauthorizedError,
    UnexpectedStatusError,
    ValidationError,
)
from nvisy_sdk.errors.handler import classify_response, classify_transport_error, parse_retry_after
from nvisy_sdk.errors.models import ProblemDetail

__all__ = [
    "APIError",
    "AuthError",
    "BadRequestError",
    "ClientError",
    "ConfigError",
    "ConflictError",
    "DecodeError",
    "EncodeError",
    "ErrorKind",
    "ForbiddenError",
    "NetworkError",
    "NotFoundError",
    "NvisyError",
    "ProblemDetail",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "UnauthorizedError",
    "UnexpectedStatusError",
    "ValidationError",
    "classify_response",
    "classify_transport_error",
    "parse_retry_after",
]
