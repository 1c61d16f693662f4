"""Typed outcome of an API call: either a value or a classified error."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, NoReturn, TypeVar

from nvisy_sdk.errors.exceptions import APIError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Attempt:
    """Record of one physical request within a single call.

    Attributes:
        number: 1-indexed attempt number.
        started_at: Wall-clock start of the attempt (UTC).
        elapsed: Seconds spent waiting for the transport.
        status_code: HTTP status received, if any.
        outcome: ``None`` on success, otherwise the error kind.
        delay: Seconds waited after this attempt before the next one.
    """

    number: int
    started_at: datetime
    elapsed: float
    status_code: int | None = None
    outcome: ErrorKind | None = None
    delay: float | None = None


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    attempts: tuple[Attempt, ...] = field(default=())

    is_success = True

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A call that failed; ``error.attempts`` matches ``attempt_count``."""

    error: APIError
    attempts: tuple[Attempt, ...] = field(default=())

    is_success = False

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)

    def unwrap(self) -> NoReturn:
        """Raise the carried error."""
        raise self.error


Result = Success[T] | Failure
