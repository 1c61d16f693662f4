"""Retry policy for the request executor.

The policy is a pure decision function: given the number of the attempt that
just failed and the error it produced, it returns how long to wait before the
next attempt, or ``None`` to stop. It performs no I/O and holds no mutable
state, so one instance can be shared by every concurrent call.

## Default classification

| Outcome | Retried | Notes |
|---------|---------|-------|
| Network error (connect, TLS, body read) | ✅ | |
| Timeout | ✅ | |
| 5xx | ✅ | |
| 429 | ✅ | Retry-After hint honored, capped at `max_delay` |
| Other 4xx | ❌ | unless listed in `retryable_status_codes` |
| Decode / encode / auth errors | ❌ | |
| Unsendable request, redirect loop | ❌ | reported as encode / unexpected errors |

## Example

```python
from nvisy_sdk.transport.retry import RetryPolicy

policy = RetryPolicy(max_attempts=5, base_delay=0.5, max_delay=10.0)

# Also retry 408 Request Timeout for idempotent endpoints
policy = RetryPolicy(retryable_status_codes=frozenset([408]))
```
"""

import math
from dataclasses import dataclass, field

from nvisy_sdk.errors.exceptions import APIError, ConfigError, ErrorKind

TRANSIENT_KINDS: frozenset[ErrorKind] = frozenset(
    [ErrorKind.NETWORK, ErrorKind.TIMEOUT, ErrorKind.SERVER, ErrorKind.RATE_LIMITED]
)
DEFAULT_RETRYABLE_KINDS = TRANSIENT_KINDS


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff policy.

    Attempt 1 is always made; the policy only governs attempts
    2..``max_attempts``.

    Args:
        max_attempts: Total number of attempts, including the first (default: 3)
        base_delay: Delay before the second attempt, in seconds (default: 0.2)
        max_delay: Upper bound for any single delay, in seconds (default: 5.0)
        backoff_multiplier: Growth factor between consecutive delays (default: 2.0)
        retryable_kinds: Error kinds that warrant another attempt
        retryable_status_codes: Extra HTTP status codes to retry regardless of kind
        respect_retry_after: Wait at least the server's Retry-After hint when present
    """

    max_attempts: int = 3
    base_delay: float = 0.2
    max_delay: float = 5.0
    backoff_multiplier: float = 2.0
    retryable_kinds: frozenset[ErrorKind] = field(default=DEFAULT_RETRYABLE_KINDS)
    retryable_status_codes: frozenset[int] = field(default=frozenset())
    respect_retry_after: bool = True

    def __post_init__(self) -> None:
        if not self.max_attempts >= 1:
            raise ConfigError(f"max_attempts must be at least 1, got {self.max_attempts}")
        for name in ("base_delay", "max_delay", "backoff_multiplier"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigError(f"{name} must be a finite number, got {getattr(self, name)}")
        if self.base_delay < 0:
            raise ConfigError(f"base_delay must not be negative, got {self.base_delay}")
        if self.max_delay < self.base_delay:
            raise ConfigError(f"max_delay ({self.max_delay}) must not be below base_delay ({self.base_delay})")
        if self.backoff_multiplier < 1.0:
            raise ConfigError(f"backoff_multiplier must be at least 1.0, got {self.backoff_multiplier}")
        # Accept any iterable but store frozensets so the policy stays hashable
        object.__setattr__(self, "retryable_kinds", frozenset(self.retryable_kinds))
        unsupported = self.retryable_kinds - TRANSIENT_KINDS
        if unsupported:
            names = ", ".join(sorted(kind.value for kind in unsupported))
            raise ConfigError(f"Only transient error kinds can be retried, got: {names}")
        object.__setattr__(self, "retryable_status_codes", frozenset(self.retryable_status_codes))

    @classmethod
    def no_retries(cls) -> "RetryPolicy":
        """Policy that makes exactly one attempt."""
        return cls(max_attempts=1)

    def is_retryable(self, error: APIError) -> bool:
        if error.kind not in TRANSIENT_KINDS and error.kind is not ErrorKind.CLIENT:
            return False
        if error.status_code is not None and error.status_code in self.retryable_status_codes:
            return True
        return error.kind in self.retryable_kinds

    def backoff_delay(self, attempt_number: int) -> float:
        """Calculate exponential backoff delay with max_delay cap.

        Uses formula: min(base_delay * backoff_multiplier ** (attempt_number - 1), max_delay)
        Default sequence: 0.2, 0.4, 0.8, 1.6, 3.2, 5.0, 5.0 ... seconds

        Args:
            attempt_number: Number of the attempt that just failed (1-indexed)

        Returns:
            Delay in seconds (capped at max_delay)
        """
        exponent = max(attempt_number - 1, 0)
        try:
            delay = self.base_delay * (self.backoff_multiplier**exponent)
        except OverflowError:
            return self.max_delay
        return min(delay, self.max_delay)

    def next_delay(self, attempt_number: int, error: APIError) -> float | None:
        """Decide whether to retry after a failed attempt.

        Args:
            attempt_number: Number of the attempt that just failed (1-indexed)
            error: Classified outcome of that attempt

        Returns:
            Seconds to wait before attempt ``attempt_number + 1``, or None to stop
        """
        if attempt_number >= self.max_attempts:
            return None
        if not self.is_retryable(error):
            return None

        delay = self.backoff_delay(attempt_number)
        retry_after = getattr(error, "retry_after", None)
        if self.respect_retry_after and retry_after is not None:
            delay = min(max(delay, retry_after), self.max_delay)
        return delay


DEFAULT_RETRY_POLICY = RetryPolicy()
