"""Classification of raw HTTP outcomes into typed API errors."""

from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

from nvisy_sdk.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    EncodeError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    UnauthorizedError,
    UnexpectedStatusError,
    ValidationError,
)
from nvisy_sdk.errors.models import ProblemDetail
from nvisy_sdk.transport.base import RawResponse, TransportError, TransportErrorKind

STATUS_EXCEPTIONS: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def exception_class_for_status(status_code: int) -> type[APIError]:
    """Map an HTTP status outside 2xx to the exception class that reports it."""
    if status_code in STATUS_EXCEPTIONS:
        return STATUS_EXCEPTIONS[status_code]
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return UnexpectedStatusError


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header value into seconds.

    Supports both formats:
    - Delay-seconds: "120" (integer seconds)
    - HTTP-date: "Wed, 21 Oct 2015 07:28:00 GMT"

    Returns:
        Delay in seconds, or None if the value is missing, invalid or in the past
    """
    if not value:
        return None

    try:
        delay = int(value)
        return None if delay < 0 else float(delay)
    except ValueError:
        pass

    try:
        retry_date = parsedate_to_datetime(value)
    except (ValueError, TypeError):
        return None
    if retry_date.tzinfo is None:
        retry_date = retry_date.replace(tzinfo=UTC)
    delay = (retry_date - datetime.now(UTC)).total_seconds()

    # Protect against negative delays (clock skew)
    return None if delay < 0 else delay


def _parse_body(response: RawResponse) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _validation_errors(problem_detail: ProblemDetail | None, body: Any) -> list | None:
    # problem documents use "errors" or "validation_errors"; plain bodies only "errors"
    source = problem_detail.extensions if problem_detail and problem_detail.extensions else None
    if source is not None:
        return source.get("errors", source.get("validation_errors"))
    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        return body["errors"]
    return None


def classify_response(response: RawResponse, attempts: int = 1) -> APIError:
    """Build the typed error for a non-2xx response.

    Parses RFC 7807 problem details if present, otherwise falls back to the
    status code and a prefix of the body text.

    Args:
        response: Raw HTTP response with a status outside [200, 300)
        attempts: Number of attempts made so far

    Returns:
        APIError subclass instance matching the status code
    """
    status_code = response.status_code
    exc_class = exception_class_for_status(status_code)
    problem_detail = ProblemDetail.from_response(response)
    body = _parse_body(response)

    if problem_detail:
        message = problem_detail.to_exception_message()
    else:
        snippet = response.text[:200]
        message = f"HTTP {status_code}: {snippet}" if snippet else f"HTTP {status_code}"

    kwargs: dict[str, Any] = {
        "status_code": status_code,
        "attempts": attempts,
        "body": body,
        "problem_detail": problem_detail,
        "headers": dict(response.headers),
    }

    if exc_class is RateLimitError:
        return RateLimitError(message, retry_after=parse_retry_after(response.header("retry-after")), **kwargs)

    if exc_class is ValidationError:
        return ValidationError(message, validation_errors=_validation_errors(problem_detail, body), **kwargs)

    return exc_class(message, **kwargs)


def classify_transport_error(error: TransportError, attempts: int = 1) -> APIError:
    """Convert a transport failure into a typed error.

    Connection, TLS and body-read failures become NetworkError and timeouts
    RequestTimeoutError, both retryable. A request httpx refused to send is an
    EncodeError and a redirect that cannot be followed an UnexpectedStatusError;
    neither is retried.
    """
    if error.kind is TransportErrorKind.INVALID_REQUEST:
        return EncodeError(str(error), attempts=attempts)
    if error.kind is TransportErrorKind.REDIRECT:
        return UnexpectedStatusError(str(error), attempts=attempts)
    exc_class = RequestTimeoutError if error.kind is TransportErrorKind.TIMEOUT else NetworkError
    return exc_class(str(error), transport_kind=error.kind.value, attempts=attempts)
