"""Workspaces API service."""

from nvisy_sdk.models import CreateWorkspace, Page, UpdateWorkspace, Workspace
from nvisy_sdk.result import Result
from nvisy_sdk.services.base import Service, page_decoder, quote_id
from nvisy_sdk.transport.executor import RequestSpec, decode_json, decode_none


class WorkspacesService(Service):
    """Workspace operations.

    Example:
        ```python
        result = await client.workspaces.create(CreateWorkspace(display_name="Contracts"))
        workspace = result.unwrap()

        page = (await client.workspaces.list(limit=20)).unwrap()
        while page.next_cursor:
            page = (await client.workspaces.list(cursor=page.next_cursor, limit=20)).unwrap()
        ```
    """

    async def list(self, cursor: str | None = None, limit: int | None = None) -> Result[Page[Workspace]]:
        spec = RequestSpec(
            "GET", "/workspaces", query={"after": cursor, "limit": limit}, decoder=page_decoder(Workspace)
        )
        return await self._execute(spec)

    async def get(self, workspace_id: str) -> Result[Workspace]:
        path = f"/workspaces/{quote_id(workspace_id)}"
        return await self._execute(RequestSpec("GET", path, decoder=decode_json(Workspace)))

    async def create(self, request: CreateWorkspace) -> Result[Workspace]:
        return await self._execute(RequestSpec("POST", "/workspaces", json=request, decoder=decode_json(Workspace)))

    async def update(self, workspace_id: str, update: UpdateWorkspace) -> Result[Workspace]:
        spec = RequestSpec("PUT", f"/workspaces/{quote_id(workspace_id)}", json=update, decoder=decode_json(Workspace))
        return await self._execute(spec)

    async def delete(self, workspace_id: str) -> Result[None]:
        return await self._execute(RequestSpec("DELETE", f"/workspaces/{quote_id(workspace_id)}", decoder=decode_none))
