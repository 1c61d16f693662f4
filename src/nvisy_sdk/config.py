"""Nvisy client configuration and builder.

:class:`NvisyConfig` is immutable and validated; it is shared read-only by
every request issued from the client built from it. Configs are assembled
with :class:`NvisyConfigBuilder`, whose ``with_*`` methods each return a new
builder, so a partially configured builder can be reused safely.

Example:
    ```python
    from datetime import timedelta
    from nvisy_sdk import NvisyConfig, TlsBackend

    client = (
        NvisyConfig.builder()
        .with_api_key("your-api-key")
        .with_base_url("https://custom.api.nvisy.com")
        .with_timeout(timedelta(seconds=30))
        .with_tls_backend(TlsBackend.ALTERNATE)
        .build_client()
    )
    ```
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

import httpx

from nvisy_sdk import __version__
from nvisy_sdk.auth.credentials import BASE_URL_ENV, TIMEOUT_ENV, CredentialResolver
from nvisy_sdk.errors.exceptions import ConfigError
from nvisy_sdk.tracing import NULL_SINK, LoggingTraceSink, TraceSink
from nvisy_sdk.transport.http import TlsBackend
from nvisy_sdk.transport.retry import DEFAULT_RETRY_POLICY, RetryPolicy

if TYPE_CHECKING:
    from nvisy_sdk.client import NvisyClient

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.nvisy.com"
DEFAULT_TIMEOUT = 60.0
MAX_TIMEOUT = 300.0
DEFAULT_USER_AGENT = f"nvisy-sdk-python/{__version__}"


def mask_api_key(api_key: str) -> str:
    """First 4 characters followed by ``****``; just ``****`` for short keys."""
    if len(api_key) > 4:
        return f"{api_key[:4]}****"
    return "****"


def validate_base_url(base_url: str) -> str:
    """Return ``base_url`` without trailing slash, or raise ConfigError."""
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise ConfigError(f"Base URL is not a valid URL: {base_url!r} ({e})") from e
    if url.scheme not in ("http", "https"):
        raise ConfigError("Base URL must start with http:// or https://")
    if not url.host:
        raise ConfigError(f"Base URL has no host: {base_url!r}")
    if url.query or url.fragment:
        raise ConfigError(f"Base URL must not carry a query or fragment: {base_url!r}")
    return base_url.rstrip("/")


def validate_timeout(timeout: float) -> float:
    # written as "not > 0" so NaN is rejected too
    if not timeout > 0:
        raise ConfigError("Timeout must be greater than 0")
    if timeout > MAX_TIMEOUT:
        raise ConfigError(f"Timeout cannot exceed {int(MAX_TIMEOUT)} seconds")
    return float(timeout)


@dataclass(frozen=True)
class NvisyConfig:
    """Validated connection parameters for the Nvisy API.

    Use :meth:`builder` to create one. The API key never appears in ``repr``.
    """

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    tls_backend: TlsBackend = TlsBackend.PLATFORM_DEFAULT
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY
    tracing_enabled: bool = False
    trace_sink: TraceSink = field(default=NULL_SINK, compare=False, repr=False)
    user_agent: str = DEFAULT_USER_AGENT

    @staticmethod
    def builder() -> "NvisyConfigBuilder":
        return NvisyConfigBuilder()

    @property
    def masked_api_key(self) -> str:
        return mask_api_key(self.api_key)

    @property
    def effective_trace_sink(self) -> TraceSink:
        """Sink the executor should use: the null sink unless tracing is on."""
        return self.trace_sink if self.tracing_enabled else NULL_SINK

    def build_client(self) -> "NvisyClient":
        from nvisy_sdk.client import NvisyClient

        return NvisyClient(self)

    def __repr__(self) -> str:
        return (
            f"NvisyConfig(api_key={self.masked_api_key!r}, base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, tls_backend={self.tls_backend.value!r}, "
            f"tracing_enabled={self.tracing_enabled!r})"
        )


@dataclass(frozen=True)
class NvisyConfigBuilder:
    """Immutable accumulator of config settings.

    Unset fields fall back to the documented defaults at :meth:`build` time:
    base URL ``https://api.nvisy.com``, timeout 60 seconds, platform TLS,
    the default retry policy, tracing off. The API key has no default.
    """

    api_key: str | None = field(default=None, repr=False)
    base_url: str | None = None
    timeout: float | None = None
    tls_backend: TlsBackend | None = None
    retry_policy: RetryPolicy | None = None
    tracing_enabled: bool | None = None
    trace_sink: TraceSink | None = field(default=None, repr=False)
    user_agent: str | None = None

    def with_api_key(self, api_key: str) -> "NvisyConfigBuilder":
        """Set the API key sent as a bearer token. Required."""
        return dataclasses.replace(self, api_key=api_key)

    def with_base_url(self, base_url: str) -> "NvisyConfigBuilder":
        """Set the API endpoint. Default: ``https://api.nvisy.com``."""
        return dataclasses.replace(self, base_url=base_url)

    def with_timeout(self, timeout: float | timedelta) -> "NvisyConfigBuilder":
        """Set the per-attempt deadline. Default: 60 seconds, maximum 300."""
        seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
        return dataclasses.replace(self, timeout=seconds)

    def with_timeout_secs(self, secs: int) -> "NvisyConfigBuilder":
        return self.with_timeout(float(secs))

    def with_tls_backend(self, tls_backend: TlsBackend) -> "NvisyConfigBuilder":
        """Choose the TLS trust configuration. Default: platform trust store."""
        return dataclasses.replace(self, tls_backend=TlsBackend(tls_backend))

    def with_tracing(self, enabled: bool = True) -> "NvisyConfigBuilder":
        """Emit trace events for each call. Default: off.

        Without an explicit sink, events go to the ``nvisy_sdk.trace`` logger.
        """
        return dataclasses.replace(self, tracing_enabled=enabled)

    def with_trace_sink(self, sink: TraceSink) -> "NvisyConfigBuilder":
        return dataclasses.replace(self, trace_sink=sink)

    def with_retry_policy(self, retry_policy: RetryPolicy) -> "NvisyConfigBuilder":
        """Replace the retry policy. Default: 3 attempts, 0.2s doubling to 5s."""
        return dataclasses.replace(self, retry_policy=retry_policy)

    def with_user_agent(self, user_agent: str) -> "NvisyConfigBuilder":
        return dataclasses.replace(self, user_agent=user_agent)

    @classmethod
    def from_env(cls, resolver: CredentialResolver | None = None) -> "NvisyConfigBuilder":
        """Seed a builder from ``NVISY_API_KEY`` / ``NVISY_API_KEY_FILE``,
        ``NVISY_BASE_URL`` and ``NVISY_TIMEOUT`` (environment or .env file).

        Missing variables leave the corresponding setting unset.
        """
        resolver = resolver or CredentialResolver()
        builder = cls(api_key=resolver.resolve_api_key())

        base_url = resolver.resolve(env_var_name=BASE_URL_ENV, mask_in_logs=False)
        if base_url:
            builder = builder.with_base_url(base_url)

        timeout = resolver.resolve(env_var_name=TIMEOUT_ENV, mask_in_logs=False)
        if timeout:
            try:
                builder = builder.with_timeout(float(timeout))
            except ValueError as e:
                raise ConfigError(f"{TIMEOUT_ENV} must be a number of seconds, got {timeout!r}") from e
        return builder

    def build(self) -> NvisyConfig:
        """Validate the accumulated settings.

        Raises:
            ConfigError: If the API key is missing or blank, the base URL is
                malformed, or the timeout is not in (0, 300] seconds.
        """
        if self.api_key is None:
            raise ConfigError("API key is required")
        if not self.api_key.strip():
            raise ConfigError("API key cannot be empty")

        base_url = validate_base_url(self.base_url if self.base_url is not None else DEFAULT_BASE_URL)
        timeout = validate_timeout(self.timeout if self.timeout is not None else DEFAULT_TIMEOUT)
        tracing_enabled = bool(self.tracing_enabled)
        trace_sink = self.trace_sink
        if trace_sink is None:
            trace_sink = LoggingTraceSink() if tracing_enabled else NULL_SINK

        config = NvisyConfig(
            api_key=self.api_key,
            base_url=base_url,
            timeout=timeout,
            tls_backend=self.tls_backend or TlsBackend.PLATFORM_DEFAULT,
            retry_policy=self.retry_policy or DEFAULT_RETRY_POLICY,
            tracing_enabled=tracing_enabled,
            trace_sink=trace_sink,
            user_agent=self.user_agent or DEFAULT_USER_AGENT,
        )
        logger.debug(f"Built {config!r}")
        return config

    def build_client(self) -> "NvisyClient":
        """Build the config and a client using it in one step.

        Raises:
            ConfigError: If validation fails.
        """
        return self.build().build_client()

    def __repr__(self) -> str:
        key = "None" if self.api_key is None else repr(mask_api_key(self.api_key))
        return f"NvisyConfigBuilder(api_key={key}, base_url={self.base_url!r}, timeout={self.timeout!r})"
