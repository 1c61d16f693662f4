"""Files API service."""

from collections.abc import Sequence
from dataclasses import dataclass

from nvisy_sdk.models import ArchiveFormat, DeleteFiles, DownloadFiles, File, Page, UpdateFile
from nvisy_sdk.result import Result
from nvisy_sdk.services.base import Service, page_decoder, quote_id
from nvisy_sdk.transport.executor import RequestSpec, decode_bytes, decode_json, decode_none


@dataclass(frozen=True)
class ListFilesOptions:
    """Filters and pagination for :meth:`FilesService.list`."""

    formats: Sequence[str] | None = None
    search: str | None = None
    after: str | None = None
    limit: int | None = None

    def to_query(self) -> dict:
        # formats is sent as a repeated parameter
        return {
            "formats": list(self.formats) if self.formats else None,
            "search": self.search,
            "after": self.after,
            "limit": self.limit,
        }


def _first_file(data) -> File:
    # Upload answers with the list of created files; one file was sent
    if not data:
        raise ValueError("upload returned no files")
    return File.from_dict(data[0])


class FilesService(Service):
    async def list(self, workspace_id: str, options: ListFilesOptions | None = None) -> Result[Page[File]]:
        query = (options or ListFilesOptions()).to_query()
        path = f"/workspaces/{quote_id(workspace_id)}/files/"
        spec = RequestSpec("GET", path, query=query, decoder=page_decoder(File))
        return await self._execute(spec)

    async def get(self, file_id: str) -> Result[File]:
        return await self._execute(RequestSpec("GET", f"/files/{quote_id(file_id)}", decoder=decode_json(File)))

    async def update(self, file_id: str, update: UpdateFile) -> Result[File]:
        path = f"/files/{quote_id(file_id)}"
        return await self._execute(RequestSpec("PATCH", path, json=update, decoder=decode_json(File)))

    async def delete(self, file_id: str) -> Result[None]:
        return await self._execute(RequestSpec("DELETE", f"/files/{quote_id(file_id)}", decoder=decode_none))

    async def download(self, file_id: str) -> Result[bytes]:
        return await self._execute(RequestSpec("GET", f"/files/{quote_id(file_id)}/content", decoder=decode_bytes))

    async def upload(self, workspace_id: str, file_name: str, file_data: bytes) -> Result[File]:
        """Upload one file as multipart form data."""
        spec = RequestSpec(
            "POST",
            f"/workspaces/{quote_id(workspace_id)}/files/",
            files={"file": (file_name, file_data)},
            decoder=decode_json(_first_file),
        )
        return await self._execute(spec)

    async def delete_batch(self, workspace_id: str, file_ids: Sequence[str]) -> Result[None]:
        spec = RequestSpec(
            "DELETE",
            f"/workspaces/{quote_id(workspace_id)}/files/batch",
            json=DeleteFiles(file_ids=list(file_ids)),
            decoder=decode_none,
        )
        return await self._execute(spec)

    async def download_batch(
        self, workspace_id: str, file_ids: Sequence[str] = (), format: ArchiveFormat = ArchiveFormat.ZIP
    ) -> Result[bytes]:
        """Download files as an archive; an empty ``file_ids`` means all files."""
        spec = RequestSpec(
            "GET",
            f"/workspaces/{quote_id(workspace_id)}/files/batch",
            json=DownloadFiles(file_ids=list(file_ids), format=format),
            decoder=decode_bytes,
        )
        return await self._execute(spec)
