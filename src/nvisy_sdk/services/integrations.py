"""Integrations API service."""

from nvisy_sdk.models import CreateIntegration, Integration, Page, UpdateIntegration
from nvisy_sdk.result import Result
from nvisy_sdk.services.base import Service, page_decoder, quote_id
from nvisy_sdk.transport.executor import RequestSpec, decode_json, decode_none


class IntegrationsService(Service):
    async def list(
        self, workspace_id: str, cursor: str | None = None, limit: int | None = None
    ) -> Result[Page[Integration]]:
        spec = RequestSpec(
            "GET",
            f"/workspaces/{quote_id(workspace_id)}/integrations/",
            query={"after": cursor, "limit": limit},
            decoder=page_decoder(Integration),
        )
        return await self._execute(spec)

    async def get(self, integration_id: str) -> Result[Integration]:
        spec = RequestSpec("GET", f"/integrations/{quote_id(integration_id)}/", decoder=decode_json(Integration))
        return await self._execute(spec)

    async def create(self, workspace_id: str, request: CreateIntegration) -> Result[Integration]:
        path = f"/workspaces/{quote_id(workspace_id)}/integrations/"
        spec = RequestSpec("POST", path, json=request, decoder=decode_json(Integration))
        return await self._execute(spec)

    async def update(self, integration_id: str, update: UpdateIntegration) -> Result[Integration]:
        path = f"/integrations/{quote_id(integration_id)}/"
        spec = RequestSpec("PATCH", path, json=update, decoder=decode_json(Integration))
        return await self._execute(spec)

    async def delete(self, integration_id: str) -> Result[None]:
        path = f"/integrations/{quote_id(integration_id)}/"
        return await self._execute(RequestSpec("DELETE", path, decoder=decode_none))

    async def sync(self, integration_id: str) -> Result[Integration]:
        """Trigger a sync and return the integration with its new sync status."""
        spec = RequestSpec("POST", f"/integrations/{quote_id(integration_id)}/sync", decoder=decode_json(Integration))
        return await self._execute(spec)
