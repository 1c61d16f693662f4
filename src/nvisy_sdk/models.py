"""Payload models for the Nvisy API resources.

Models are plain dataclasses. Wire keys are camelCase; :meth:`Model.from_dict`
and :meth:`Model.to_dict` translate from and to the snake_case attributes.
Unknown keys in responses are ignored and ``None`` values are omitted from
request bodies. A missing required key raises ``KeyError``, which the
executor reports as a decode error.
"""

from dataclasses import MISSING, dataclass, field, fields
from enum import Enum
from typing import Any, Generic, TypeVar

M = TypeVar("M", bound="Model")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Model):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


def enum_field(enum_type: type[Enum], **kwargs: Any) -> Any:
    """Dataclass field whose wire value is converted to ``enum_type``."""
    return field(metadata={"enum": enum_type}, **kwargs)


@dataclass
class Model:
    """Base class providing camelCase (de)serialization."""

    @classmethod
    def from_dict(cls: type[M], data: dict[str, Any]) -> M:
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")
        kwargs = {}
        for f in fields(cls):
            key = _camel(f.name)
            if key not in data:
                if f.default is MISSING and f.default_factory is MISSING:
                    raise KeyError(f"{cls.__name__}.{key}")
                continue
            value = data[key]
            enum_type = f.metadata.get("enum")
            if enum_type is not None and value is not None:
                value = [enum_type(v) for v in value] if isinstance(value, list) else enum_type(value)
            kwargs[f.name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {_camel(f.name): _plain(getattr(self, f.name)) for f in fields(self) if getattr(self, f.name) is not None}


class ServiceStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class WebhookEvent(str, Enum):
    DOCUMENT_CREATED = "document_created"
    DOCUMENT_UPDATED = "document_updated"
    DOCUMENT_DELETED = "document_deleted"
    FILE_CREATED = "file_created"
    FILE_UPDATED = "file_updated"
    FILE_DELETED = "file_deleted"
    MEMBER_ADDED = "member_added"
    MEMBER_DELETED = "member_deleted"
    MEMBER_UPDATED = "member_updated"
    INTEGRATION_CREATED = "integration_created"
    INTEGRATION_UPDATED = "integration_updated"
    INTEGRATION_DELETED = "integration_deleted"
    INTEGRATION_SYNCED = "integration_synced"
    INTEGRATION_DESYNCED = "integration_desynced"


class WebhookStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    DISABLED = "disabled"


class IntegrationType(str, Enum):
    STORAGE = "storage"
    COMMUNICATION = "communication"
    DOCUMENTATION = "documentation"
    PROJECT_MANAGEMENT = "project_management"
    WEBHOOK = "webhook"
    OTHER = "other"


class ArchiveFormat(str, Enum):
    ZIP = "zip"
    TAR_GZ = "tar_gz"


# Health


@dataclass
class MonitorStatus(Model):
    checked_at: str
    status: ServiceStatus = enum_field(ServiceStatus)
    version: str = ""


@dataclass
class CheckHealth(Model):
    timeout: int | None = None  # milliseconds
    use_cache: bool | None = None


# Pagination


T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a cursor-paginated listing."""

    items: list[T]
    next_cursor: str | None = None
    total: int | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any], item_model: type[Model]) -> "Page":
        items = [item_model.from_dict(item) for item in data["items"]]
        next_cursor = data.get("nextCursor")
        has_more = data.get("hasMore", next_cursor is not None)
        return cls(items=items, next_cursor=next_cursor, total=data.get("total"), has_more=bool(has_more))


# Workspaces


@dataclass
class Workspace(Model):
    workspace_id: str
    display_name: str
    created_at: str
    updated_at: str
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    enable_comments: bool = False
    require_approval: bool = False
    member_role: str | None = None
    created_by: str | None = None


@dataclass
class CreateWorkspace(Model):
    display_name: str
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    enable_comments: bool = False
    require_approval: bool = False


@dataclass
class UpdateWorkspace(Model):
    display_name: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    enable_comments: bool | None = None
    require_approval: bool | None = None


# Files


@dataclass
class File(Model):
    file_id: str
    display_name: str
    file_size: int = 0
    workspace_id: str | None = None
    file_format: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class UpdateFile(Model):
    display_name: str | None = None


@dataclass
class DeleteFiles(Model):
    file_ids: list[str]


@dataclass
class DownloadFiles(Model):
    file_ids: list[str]
    format: ArchiveFormat = enum_field(ArchiveFormat, default=ArchiveFormat.ZIP)


# Documents


class DocumentType(str, Enum):
    DOCX = "docx"
    PDF = "pdf"
    XLSX = "xlsx"
    PPTX = "pptx"
    SVG = "svg"
    JPEG = "jpeg"
    PNG = "png"
    JSON = "json"
    XML = "xml"
    TEXT = "text"
    OTHER = "other"

    @property
    def extension(self) -> str:
        return _DOCUMENT_EXTENSIONS[self]

    @property
    def mime_type(self) -> str:
        return _DOCUMENT_MIME_TYPES[self]

    @classmethod
    def from_extension(cls, extension: str) -> "DocumentType":
        """Guess the type from a file extension; unknown extensions map to ``OTHER``."""
        return _EXTENSION_ALIASES.get(extension.lower().lstrip("."), cls.OTHER)


_DOCUMENT_EXTENSIONS = {
    DocumentType.DOCX: "docx",
    DocumentType.PDF: "pdf",
    DocumentType.XLSX: "xlsx",
    DocumentType.PPTX: "pptx",
    DocumentType.SVG: "svg",
    DocumentType.JPEG: "jpg",
    DocumentType.PNG: "png",
    DocumentType.JSON: "json",
    DocumentType.XML: "xml",
    DocumentType.TEXT: "txt",
    DocumentType.OTHER: "bin",
}

_DOCUMENT_MIME_TYPES = {
    DocumentType.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    DocumentType.PDF: "application/pdf",
    DocumentType.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    DocumentType.PPTX: "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    DocumentType.SVG: "image/svg+xml",
    DocumentType.JPEG: "image/jpeg",
    DocumentType.PNG: "image/png",
    DocumentType.JSON: "application/json",
    DocumentType.XML: "application/xml",
    DocumentType.TEXT: "text/plain",
    DocumentType.OTHER: "application/octet-stream",
}

_EXTENSION_ALIASES = {
    "docx": DocumentType.DOCX,
    "doc": DocumentType.DOCX,
    "pdf": DocumentType.PDF,
    "xlsx": DocumentType.XLSX,
    "xls": DocumentType.XLSX,
    "pptx": DocumentType.PPTX,
    "ppt": DocumentType.PPTX,
    "svg": DocumentType.SVG,
    "svgz": DocumentType.SVG,
    "jpg": DocumentType.JPEG,
    "jpeg": DocumentType.JPEG,
    "png": DocumentType.PNG,
    "json": DocumentType.JSON,
    "xml": DocumentType.XML,
    "txt": DocumentType.TEXT,
    "text": DocumentType.TEXT,
}


@dataclass
class Document(Model):
    document_id: str
    display_name: str
    workspace_id: str
    document_type: DocumentType = enum_field(DocumentType, default=DocumentType.OTHER)
    file_size: int = 0
    uploaded_by: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class CreateDocument(Model):
    display_name: str
    workspace_id: str
    document_type: DocumentType


@dataclass
class UpdateDocument(Model):
    display_name: str | None = None
    workspace_id: str | None = None  # moves the document


@dataclass
class DocumentVersion(Model):
    version: int
    file_size: int = 0
    created_by: str | None = None
    created_at: str | None = None


# Webhooks


@dataclass
class Webhook(Model):
    webhook_id: str
    workspace_id: str
    display_name: str
    url: str
    description: str = ""
    events: list[WebhookEvent] = enum_field(WebhookEvent, default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    status: WebhookStatus = enum_field(WebhookStatus, default=WebhookStatus.ACTIVE)
    webhook_type: str | None = None
    integration_id: str | None = None
    last_triggered_at: str | None = None
    created_by: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class CreateWebhook(Model):
    display_name: str
    url: str
    events: list[WebhookEvent]
    description: str = ""
    headers: dict[str, str] | None = None
    status: WebhookStatus | None = None


@dataclass
class UpdateWebhook(Model):
    display_name: str | None = None
    description: str | None = None
    url: str | None = None
    events: list[WebhookEvent] | None = None
    headers: dict[str, str] | None = None
    status: WebhookStatus | None = None


@dataclass
class TestWebhook(Model):
    __test__ = False  # keep pytest from collecting this class

    payload: Any = None


@dataclass
class WebhookResult(Model):
    status_code: int
    response_time_ms: int


# Integrations


@dataclass
class Integration(Model):
    integration_id: str
    workspace_id: str
    integration_name: str
    integration_type: IntegrationType = enum_field(IntegrationType)
    description: str = ""
    is_active: bool = True
    sync_status: str | None = None
    last_sync_at: str | None = None
    created_by: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class CreateIntegration(Model):
    integration_name: str
    description: str
    integration_type: IntegrationType
    credentials: dict[str, Any] | None = None
    is_active: bool | None = None
    metadata: dict[str, Any] | None = None


@dataclass
class UpdateIntegration(Model):
    integration_name: str | None = None
    description: str | None = None
    integration_type: IntegrationType | None = None
    credentials: dict[str, Any] | None = None
    is_active: bool | None = None
    metadata: dict[str, Any] | None = None
