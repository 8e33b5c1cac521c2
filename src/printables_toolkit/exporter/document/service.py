"""
Module: exporter.document.service

Purpose:
    Abstract interface of the remote rich-document service. The export
    pipeline only talks to this interface, so tests can substitute an
    in-memory fake for the live service.

Key Classes:
    - DocumentService: Abstract base class (create, batch apply, fetch)
    - DocumentServiceError: Any non-success response

Dependencies:
    - exporter.operations.models: EditOperation

Used By:
    - exporter.document.google_service: Google Docs implementation
    - exporter.document.tracker: Index discovery
    - exporter.controller: Export orchestration
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from printables_toolkit.exporter.operations.models import EditOperation


class DocumentServiceError(Exception):
    """A call to the remote document service did not succeed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class DocumentService(ABC):
    """
    Remote document service.

    Calls are sequential round-trips; an implementation never retries and
    raises DocumentServiceError on any non-success.
    """

    @abstractmethod
    def create_document(self, name: str) -> str:
        """
        Create an empty document.

        Args:
            name: Document title

        Returns:
            Document identifier
        """

    @abstractmethod
    def batch_apply(
        self,
        document_id: str,
        operations: Sequence[EditOperation],
    ) -> list[dict[str, Any]]:
        """
        Apply operations in order, atomically.

        Returns:
            One reply per operation (empty dicts for operations without a reply)
        """

    @abstractmethod
    def fetch_document(self, document_id: str) -> dict[str, Any]:
        """
        Fetch the live document structure.

        Returns:
            Document with ``body.content``: ordered structural elements,
            tables carrying rows and cells with resolved start offsets
        """

    @abstractmethod
    def document_url(self, document_id: str) -> str:
        """URL for viewing/editing the document."""
