"""Transport layer: I/O boundary, retry policy and request execution.

Modules:
    base: Transport contract, prepared request and raw response types
    http: httpx-backed transport with selectable TLS backend
    retry: Retry policy (pure backoff decision function)
    executor: Request executor orchestrating attempts under the retry policy

Example:
    ```python
    from nvisy_sdk.transport import HttpxTransport, RetryPolicy, TlsBackend
    from nvisy_sdk.transport.executor import RequestExecutor, RequestSpec

    executor = RequestExecutor(
        base_url="https://api.nvisy.com",
        transport=HttpxTransport(tls_backend=TlsBackend.PLATFORM_DEFAULT),
        credential_provider=ApiKeyProvider("your-api-key"),
        timeout=60.0,
        retry_policy=RetryPolicy(max_attempts=5),
    )
    ```
"""

from nvisy_sdk.transport.base import (
    PreparedRequest,
    RawResponse,
    Transport,
    TransportError,
    TransportErrorKind,
)
from nvisy_sdk.transport.http import HttpxTransport, TlsBackend
from nvisy_sdk.transport.retry import DEFAULT_RETRY_POLICY, RetryPolicy

__all__ = [
    "DEFAULT_RETRY_POLICY",
    "HttpxTransport",
    "PreparedRequest",
    "RawResponse",
    "RetryPolicy",
    "TlsBackend",
    "Transport",
    "TransportError",
    "TransportErrorKind",
]
