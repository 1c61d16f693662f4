"""Nvisy API client facade."""

import logging
from typing import Any

from nvisy_sdk.auth.provider import ApiKeyProvider, CredentialProvider
from nvisy_sdk.config import NvisyConfig
from nvisy_sdk.result import Result
from nvisy_sdk.services import (
    DocumentsService,
    FilesService,
    HealthService,
    IntegrationsService,
    WebhooksService,
    WorkspacesService,
)
from nvisy_sdk.transport.base import Transport
from nvisy_sdk.transport.executor import RequestExecutor, RequestSpec, Sleep
from nvisy_sdk.transport.http import HttpxTransport

logger = logging.getLogger(__name__)


class NvisyClient:
    """Client for the Nvisy API.

    Owns one config, one credential provider and one transport (and so one
    connection pool). It holds no per-request state: any number of calls may
    run concurrently on the same instance.

    Every service method returns a :class:`~nvisy_sdk.result.Success` or
    :class:`~nvisy_sdk.result.Failure`; call ``unwrap()`` to get the value or
    raise the typed error.

    Args:
        config: Validated configuration.
        transport: Transport to use instead of an :class:`HttpxTransport`
            built from the config.
        credential_provider: Provider to use instead of the config's API key.
        sleep: Coroutine used to wait between retry attempts.

    Example:
        ```python
        async with NvisyClient.with_api_key("your-api-key") as client:
            result = await client.workspaces.list(limit=10)
            for workspace in result.unwrap().items:
                print(workspace.display_name)
        ```
    """

    def __init__(
        self,
        config: NvisyConfig,
        *,
        transport: Transport | None = None,
        credential_provider: CredentialProvider | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        self._config = config
        self._transport = transport or HttpxTransport(tls_backend=config.tls_backend)
        self._credential_provider = credential_provider or ApiKeyProvider(config.api_key)

        executor_kwargs: dict[str, Any] = {}
        if sleep is not None:
            executor_kwargs["sleep"] = sleep
        self._executor = RequestExecutor(
            base_url=config.base_url,
            transport=self._transport,
            credential_provider=self._credential_provider,
            timeout=config.timeout,
            retry_policy=config.retry_policy,
            trace_sink=config.effective_trace_sink,
            default_headers={"Accept": "application/json", "User-Agent": config.user_agent},
            **executor_kwargs,
        )

        self.health = HealthService(self._executor)
        self.workspaces = WorkspacesService(self._executor)
        self.files = FilesService(self._executor)
        self.documents = DocumentsService(self._executor)
        self.webhooks = WebhooksService(self._executor)
        self.integrations = IntegrationsService(self._executor)
        logger.debug(f"Created Nvisy client for {config.base_url} (api key {config.masked_api_key})")

    @classmethod
    def with_api_key(cls, api_key: str) -> "NvisyClient":
        """Create a client with default settings and the given API key.

        Raises:
            ConfigError: If the API key is blank.
        """
        return NvisyConfig.builder().with_api_key(api_key).build_client()

    @property
    def config(self) -> NvisyConfig:
        return self._config

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    async def execute(self, spec: RequestSpec) -> Result[Any]:
        """Execute an arbitrary request through the retrying executor."""
        return await self._executor.execute(spec)

    async def aclose(self) -> None:
        """Close the transport and its connection pool."""
        await self._transport.aclose()

    async def __aenter__(self) -> "NvisyClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"NvisyClient(base_url={self._config.base_url!r}, api_key={self._config.masked_api_key!r})"
