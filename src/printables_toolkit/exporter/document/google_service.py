"""
Module: exporter.document.google_service

Purpose:
    DocumentService implementation backed by the Google Docs and Drive APIs.
    The document is created through Drive (so it lands in the user's Drive
    with the Docs mimetype) and edited through Docs batchUpdate.

Key Classes:
    - GoogleDocsService: Live service

Dependencies:
    - googleapiclient: Discovery-based API clients
    - httplib2, google.auth: Transport and token errors wrapped as DocumentServiceError
    - google.oauth2.credentials: Credentials from exporter.document.auth

Used By:
    - exporter.controller (via DocumentService)
    - printables_toolkit.cli
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from printables_toolkit.exporter.operations.models import EditOperation, serialize_operations

from .service import DocumentService, DocumentServiceError

logger = logging.getLogger(__name__)

DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"
DOCUMENT_URL_TEMPLATE = "https://docs.google.com/document/d/{document_id}/edit"

# HTTP status failures plus transport and token refresh failures
SERVICE_ERRORS = (HttpError, httplib2.HttpLib2Error, GoogleAuthError, OSError)


def _status(error: Exception) -> Optional[int]:
    if isinstance(error, HttpError):
        return error.resp.status
    return None


class GoogleDocsService(DocumentService):
    """
    Google Docs service.

    Example:
        >>> creds = load_credentials(AuthConfig(token_path=Path("token.json")))
        >>> service = GoogleDocsService(creds)
        >>> doc_id = service.create_document("Checklist - Section A")
    """

    def __init__(
        self,
        credentials: Any,
        *,
        docs_resource: Optional[Any] = None,
        drive_resource: Optional[Any] = None,
    ):
        self._docs = docs_resource or build("docs", "v1", credentials=credentials, cache_discovery=False)
        self._drive = drive_resource or build("drive", "v3", credentials=credentials, cache_discovery=False)

    def create_document(self, name: str) -> str:
        try:
            created = self._drive.files().create(
                body={"name": name, "mimeType": DOCUMENT_MIME_TYPE},
                fields="id",
            ).execute()
        except SERVICE_ERRORS as e:
            raise DocumentServiceError(
                f"Failed to create document {name!r}: {e}", status=_status(e)
            ) from e

        document_id = created.get("id")
        if not document_id:
            raise DocumentServiceError(f"Create returned no document id for {name!r}")

        logger.info(f"Created document {document_id} ({name})")
        return document_id

    def batch_apply(
        self,
        document_id: str,
        operations: Sequence[EditOperation],
    ) -> list[dict[str, Any]]:
        requests = serialize_operations(list(operations))
        logger.debug(f"batchUpdate {document_id}: {len(requests)} requests")
        try:
            response = self._docs.documents().batchUpdate(
                documentId=document_id,
                body={"requests": requests},
            ).execute()
        except SERVICE_ERRORS as e:
            raise DocumentServiceError(
                f"Batch update failed for {document_id}: {e}", status=_status(e)
            ) from e
        return list(response.get("replies", []))

    def fetch_document(self, document_id: str) -> dict[str, Any]:
        try:
            return self._docs.documents().get(documentId=document_id).execute()
        except SERVICE_ERRORS as e:
            raise DocumentServiceError(
                f"Failed to fetch document structure for {document_id}: {e}",
                status=_status(e),
            ) from e

    def document_url(self, document_id: str) -> str:
        return DOCUMENT_URL_TEMPLATE.format(document_id=document_id)
