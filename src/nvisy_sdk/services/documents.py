"""Documents API service."""

from nvisy_sdk.models import CreateDocument, Document, DocumentType, DocumentVersion, Page, UpdateDocument
from nvisy_sdk.result import Result
from nvisy_sdk.services.base import Service, page_decoder, quote_id
from nvisy_sdk.transport.executor import RequestSpec, decode_bytes, decode_json, decode_none, decode_text


class DocumentsService(Service):
    """Document metadata, content and version history.

    Example:
        ```python
        created = await client.documents.create(
            CreateDocument(display_name="NDA", workspace_id=workspace_id, document_type=DocumentType.PDF)
        )
        document = created.unwrap()
        await client.documents.upload(document.document_id, pdf_bytes, DocumentType.PDF)
        ```
    """

    async def list(self, cursor: str | None = None, limit: int | None = None) -> Result[Page[Document]]:
        spec = RequestSpec("GET", "/documents", query={"after": cursor, "limit": limit}, decoder=page_decoder(Document))
        return await self._execute(spec)

    async def list_in_workspace(
        self, workspace_id: str, cursor: str | None = None, limit: int | None = None
    ) -> Result[Page[Document]]:
        spec = RequestSpec(
            "GET",
            f"/workspaces/{quote_id(workspace_id)}/documents",
            query={"after": cursor, "limit": limit},
            decoder=page_decoder(Document),
        )
        return await self._execute(spec)

    async def get(self, document_id: str) -> Result[Document]:
        path = f"/documents/{quote_id(document_id)}"
        return await self._execute(RequestSpec("GET", path, decoder=decode_json(Document)))

    async def create(self, request: CreateDocument) -> Result[Document]:
        return await self._execute(RequestSpec("POST", "/documents", json=request, decoder=decode_json(Document)))

    async def update(self, document_id: str, update: UpdateDocument) -> Result[Document]:
        spec = RequestSpec("PUT", f"/documents/{quote_id(document_id)}", json=update, decoder=decode_json(Document))
        return await self._execute(spec)

    async def delete(self, document_id: str) -> Result[None]:
        return await self._execute(RequestSpec("DELETE", f"/documents/{quote_id(document_id)}", decoder=decode_none))

    async def upload(
        self, document_id: str, content: bytes, document_type: DocumentType | None = None
    ) -> Result[Document]:
        """Replace the document content with ``content``.

        The body is sent as ``application/octet-stream`` unless a
        ``document_type`` gives a more specific MIME type.
        """
        spec = RequestSpec(
            "PUT",
            f"/documents/{quote_id(document_id)}/content",
            content=content,
            content_type=document_type.mime_type if document_type else None,
            decoder=decode_json(Document),
        )
        return await self._execute(spec)

    async def download(self, document_id: str) -> Result[bytes]:
        path = f"/documents/{quote_id(document_id)}/content"
        return await self._execute(RequestSpec("GET", path, decoder=decode_bytes))

    async def download_url(self, document_id: str) -> Result[str]:
        """Fetch a temporary URL the document content can be downloaded from."""
        return await self._execute(RequestSpec("GET", f"/documents/{quote_id(document_id)}/url", decoder=decode_text))

    async def list_versions(
        self, document_id: str, cursor: str | None = None, limit: int | None = None
    ) -> Result[Page[DocumentVersion]]:
        spec = RequestSpec(
            "GET",
            f"/documents/{quote_id(document_id)}/versions",
            query={"after": cursor, "limit": limit},
            decoder=page_decoder(DocumentVersion),
        )
        return await self._execute(spec)

    async def restore_version(self, document_id: str, version: int) -> Result[Document]:
        path = f"/documents/{quote_id(document_id)}/versions/{quote_id(version)}/restore"
        spec = RequestSpec("POST", path, decoder=decode_json(Document))
        return await self._execute(spec)
