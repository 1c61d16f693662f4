"""Nvisy SDK - async Python client for the Nvisy platform API.

The SDK turns each API call into one or more HTTP attempts:
- Bearer API key authentication, never logged
- Exponential backoff on network errors, timeouts, 5xx and 429
- Typed results: every call returns ``Success`` or ``Failure`` with a
  classified error (client, server, rate limit, decode, ...)
- Optional structured tracing with credential redaction

Example:
    ```python
    from nvisy_sdk import NvisyClient

    async with NvisyClient.with_api_key("your-api-key") as client:
        result = await client.health.check()
        if result.is_success:
            print(result.value.status)
        else:
            print(f"{result.error.kind}: {result.error} after {result.error.attempts} attempts")
    ```
"""

__version__ = "0.1.0"

from nvisy_sdk.client import NvisyClient  # noqa: E402
from nvisy_sdk.config import (  # noqa: E402
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    NvisyConfig,
    NvisyConfigBuilder,
)
from nvisy_sdk.errors import APIError, ConfigError, ErrorKind, NvisyError  # noqa: E402
from nvisy_sdk.result import Attempt, Failure, Result, Success  # noqa: E402
from nvisy_sdk.transport import RetryPolicy, TlsBackend  # noqa: E402

__all__ = [
    "APIError",
    "Attempt",
    "ConfigError",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "ErrorKind",
    "Failure",
    "NvisyClient",
    "NvisyConfig",
    "NvisyConfigBuilder",
    "NvisyError",
    "Result",
    "RetryPolicy",
    "Success",
    "TlsBackend",
    "__version__",
]
