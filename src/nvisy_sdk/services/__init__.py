"""Resource services exposed as attributes of :class:`~nvisy_sdk.NvisyClient`."""

from nvisy_sdk.services.documents import DocumentsService
from nvisy_sdk.services.files import FilesService, ListFilesOptions
from nvisy_sdk.services.health import HealthService
from nvisy_sdk.services.integrations import IntegrationsService
from nvisy_sdk.services.webhooks import WebhooksService
from nvisy_sdk.services.workspaces import WorkspacesService

__all__ = [
    "DocumentsService",
    "FilesService",
    "HealthService",
    "IntegrationsService",
    "ListFilesOptions",
    "WebhooksService",
    "WorkspacesService",
]
