"""Webhooks API service."""

from nvisy_sdk.models import CreateWebhook, Page, TestWebhook, UpdateWebhook, Webhook, WebhookResult
from nvisy_sdk.result import Result
from nvisy_sdk.services.base import Service, page_decoder, quote_id
from nvisy_sdk.transport.executor import RequestSpec, decode_json, decode_none


class WebhooksService(Service):
    async def list(
        self, workspace_id: str, cursor: str | None = None, limit: int | None = None
    ) -> Result[Page[Webhook]]:
        spec = RequestSpec(
            "GET",
            f"/workspaces/{quote_id(workspace_id)}/webhooks/",
            query={"after": cursor, "limit": limit},
            decoder=page_decoder(Webhook),
        )
        return await self._execute(spec)

    async def get(self, webhook_id: str) -> Result[Webhook]:
        path = f"/webhooks/{quote_id(webhook_id)}/"
        return await self._execute(RequestSpec("GET", path, decoder=decode_json(Webhook)))

    async def create(self, workspace_id: str, request: CreateWebhook) -> Result[Webhook]:
        path = f"/workspaces/{quote_id(workspace_id)}/webhooks/"
        spec = RequestSpec("POST", path, json=request, decoder=decode_json(Webhook))
        return await self._execute(spec)

    async def update(self, webhook_id: str, update: UpdateWebhook) -> Result[Webhook]:
        spec = RequestSpec("PATCH", f"/webhooks/{quote_id(webhook_id)}/", json=update, decoder=decode_json(Webhook))
        return await self._execute(spec)

    async def delete(self, webhook_id: str) -> Result[None]:
        return await self._execute(RequestSpec("DELETE", f"/webhooks/{quote_id(webhook_id)}/", decoder=decode_none))

    async def test(self, webhook_id: str, request: TestWebhook | None = None) -> Result[WebhookResult]:
        """Send a test delivery, optionally with a custom payload."""
        path = f"/webhooks/{quote_id(webhook_id)}/test"
        spec = RequestSpec("POST", path, json=request, decoder=decode_json(WebhookResult))
        return await self._execute(spec)
