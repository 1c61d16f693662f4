"""Tests for payload models and pagination."""

import pytest

from nvisy_sdk.models import (
    ArchiveFormat,
    CreateIntegration,
    CreateWebhook,
    Document,
    DocumentType,
    DownloadFiles,
    Integration,
    IntegrationType,
    MonitorStatus,
    Page,
    ServiceStatus,
    UpdateWorkspace,
    Webhook,
    WebhookEvent,
    WebhookStatus,
    Workspace,
)

WORKSPACE = {
    "workspaceId": "ws_1",
    "displayName": "Legal",
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": "2025-01-02T00:00:00Z",
    "tags": ["contracts"],
    "memberRole": "owner",
}


class TestFromDict:
    """Test decoding camelCase JSON objects."""

    @pytest.mark.unit
    def test_workspace(self):
        workspace = Workspace.from_dict(WORKSPACE)

        assert workspace.workspace_id == "ws_1"
        assert workspace.display_name == "Legal"
        assert workspace.tags == ["contracts"]
        assert workspace.member_role == "owner"
        assert workspace.description is None
        assert workspace.enable_comments is False

    @pytest.mark.unit
    def test_unknown_keys_are_ignored(self):
        workspace = Workspace.from_dict({**WORKSPACE, "futureField": 1})

        assert workspace.workspace_id == "ws_1"

    @pytest.mark.unit
    def test_missing_required_key(self):
        with pytest.raises(KeyError):
            Workspace.from_dict({"workspaceId": "ws_1"})

    @pytest.mark.unit
    def test_non_object_rejected(self):
        with pytest.raises(TypeError):
            Workspace.from_dict(["ws_1"])

    @pytest.mark.unit
    def test_enums_are_converted(self):
        status = MonitorStatus.from_dict({"checkedAt": "2025-01-01T00:00:00Z", "status": "degraded"})

        assert status.status is ServiceStatus.DEGRADED

    @pytest.mark.unit
    def test_enum_lists_are_converted(self):
        webhook = Webhook.from_dict(
            {
                "webhookId": "wh_1",
                "workspaceId": "ws_1",
                "displayName": "Ops",
                "url": "https://hooks.example.com/nvisy",
                "events": ["file_created", "file_deleted"],
                "status": "paused",
            }
        )

        assert webhook.events == [WebhookEvent.FILE_CREATED, WebhookEvent.FILE_DELETED]
        assert webhook.status is WebhookStatus.PAUSED

    @pytest.mark.unit
    def test_unknown_enum_value_rejected(self):
        with pytest.raises(ValueError):
            MonitorStatus.from_dict({"checkedAt": "2025-01-01T00:00:00Z", "status": "on-fire"})

    @pytest.mark.unit
    def test_integration_defaults(self):
        integration = Integration.from_dict(
            {
                "integrationId": "in_1",
                "workspaceId": "ws_1",
                "integrationName": "Drive",
                "integrationType": "storage",
            }
        )

        assert integration.integration_type is IntegrationType.STORAGE
        assert integration.is_active is True


class TestToDict:
    """Test encoding request models."""

    @pytest.mark.unit
    def test_none_values_are_omitted(self):
        assert UpdateWorkspace(display_name="Renamed").to_dict() == {"displayName": "Renamed"}

    @pytest.mark.unit
    def test_enums_and_lists(self):
        request = CreateWebhook(
            display_name="Ops",
            url="https://hooks.example.com/nvisy",
            events=[WebhookEvent.FILE_CREATED],
            status=WebhookStatus.ACTIVE,
        )

        assert request.to_dict() == {
            "displayName": "Ops",
            "url": "https://hooks.example.com/nvisy",
            "events": ["file_created"],
            "description": "",
            "status": "active",
        }

    @pytest.mark.unit
    def test_download_files_default_format(self):
        assert DownloadFiles(file_ids=["fl_1"]).to_dict() == {"fileIds": ["fl_1"], "format": "zip"}
        assert DownloadFiles(file_ids=[], format=ArchiveFormat.TAR_GZ).to_dict()["format"] == "tar_gz"

    @pytest.mark.unit
    def test_nested_dicts_are_kept(self):
        request = CreateIntegration(
            integration_name="Drive",
            description="Shared drive",
            integration_type=IntegrationType.STORAGE,
            credentials={"token": "abc"},
        )

        assert request.to_dict()["credentials"] == {"token": "abc"}
        assert request.to_dict()["integrationType"] == "storage"


class TestPage:
    """Test cursor pagination envelopes."""

    @pytest.mark.unit
    def test_page_with_cursor(self):
        page = Page.from_dict({"items": [WORKSPACE], "nextCursor": "c2", "total": 41}, Workspace)

        assert [w.workspace_id for w in page.items] == ["ws_1"]
        assert page.next_cursor == "c2"
        assert page.total == 41
        assert page.has_more is True

    @pytest.mark.unit
    def test_last_page(self):
        page = Page.from_dict({"items": []}, Workspace)

        assert page.items == []
        assert page.next_cursor is None
        assert page.has_more is False

    @pytest.mark.unit
    def test_explicit_has_more_wins(self):
        page = Page.from_dict({"items": [], "nextCursor": "c9", "hasMore": False}, Workspace)

        assert page.has_more is False

    @pytest.mark.unit
    def test_missing_items_key(self):
        with pytest.raises(KeyError):
            Page.from_dict({"nextCursor": "c2"}, Workspace)


class TestDocumentType:
    """Test document type helpers."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("extension", "expected"),
        [("pdf", DocumentType.PDF), (".DOC", DocumentType.DOCX), ("jpg", DocumentType.JPEG), ("exe", DocumentType.OTHER)],
    )
    def test_from_extension(self, extension, expected):
        assert DocumentType.from_extension(extension) is expected

    @pytest.mark.unit
    def test_extension_and_mime_type(self):
        assert DocumentType.JPEG.extension == "jpg"
        assert DocumentType.PDF.mime_type == "application/pdf"
        assert DocumentType.OTHER.mime_type == "application/octet-stream"

    @pytest.mark.unit
    def test_every_type_has_extension_and_mime_type(self):
        for document_type in DocumentType:
            assert document_type.extension
            assert "/" in document_type.mime_type

    @pytest.mark.unit
    def test_document_decodes_type(self):
        document = Document.from_dict({"documentId": "dc_1", "displayName": "NDA", "workspaceId": "ws_1"})

        assert document.document_type is DocumentType.OTHER
        assert document.file_size == 0
