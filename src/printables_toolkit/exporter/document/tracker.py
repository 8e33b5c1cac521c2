"""
Module: exporter.document.tracker

Purpose:
    Index discovery. An insert-table request does not return where the
    table landed, so after each structural commit the live document is
    re-fetched and the new table located.

Key Classes:
    - DocumentStateTracker: Resolve server-assigned table positions

Algorithm:
    Tables are always appended at the end of the body, so the most recently
    created table is the last table element. The body is scanned from the
    end. The tracker also checks that the table count grew by one since the
    previous commit, so a silently dropped insert is not mistaken for the
    previous table.

Dependencies:
    - exporter.document.service: DocumentService
    - exporter.document.structure: ResolvedTable

Used By:
    - exporter.controller
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .service import DocumentService
from .structure import DocumentStateError, ResolvedTable

logger = logging.getLogger(__name__)


def body_content(document: dict[str, Any]) -> list[dict[str, Any]]:
    return (document.get("body") or {}).get("content") or []


def count_tables(document: dict[str, Any]) -> int:
    return sum(1 for element in body_content(document) if "table" in element)


def find_last_table(document: dict[str, Any]) -> Optional[dict[str, Any]]:
    """Last table element of the body, scanning from the end."""
    for element in reversed(body_content(document)):
        if "table" in element:
            return element
    return None


class DocumentStateTracker:
    """
    Resolves positions of tables committed to one document.

    Example:
        >>> tracker = DocumentStateTracker(service, doc_id)
        >>> service.batch_apply(doc_id, [InsertTable(rows=5, columns=3)])
        >>> table = tracker.resolve_new_table()
        >>> table.content_index(0, 0)
    """

    def __init__(self, service: DocumentService, document_id: str):
        self._service = service
        self._document_id = document_id
        self._known_tables = 0

    @property
    def document_id(self) -> str:
        return self._document_id

    @property
    def known_tables(self) -> int:
        return self._known_tables

    def resolve_last_table(self) -> ResolvedTable:
        """
        Re-fetch and resolve the last table in the body.

        Raises:
            DocumentStateError: If the body has no table
            DocumentServiceError: If the fetch fails
        """
        document = self._service.fetch_document(self._document_id)
        element = find_last_table(document)
        if element is None:
            raise DocumentStateError(f"No table found in document {self._document_id}")

        self._known_tables = count_tables(document)
        table = ResolvedTable.from_element(element)
        logger.debug(
            f"Resolved table at {table.start_index} "
            f"({table.row_count}x{table.column_count})"
        )
        return table

    def resolve_new_table(self, rows: Optional[int] = None, columns: Optional[int] = None) -> ResolvedTable:
        """
        Resolve the table committed since the last resolution.

        Args:
            rows: Expected row count, checked when given
            columns: Expected column count, checked when given

        Raises:
            DocumentStateError: If no new table appeared or its shape is wrong
        """
        expected = self._known_tables + 1
        table = self.resolve_last_table()

        if self._known_tables != expected:
            raise DocumentStateError(
                f"Expected {expected} tables in document {self._document_id}, "
                f"found {self._known_tables}"
            )
        if rows is not None and columns is not None:
            table.require_shape(rows, columns)
        return table

    def refresh(self, table: ResolvedTable) -> ResolvedTable:
        """
        Re-resolve a table after structure-only edits (sizing, merges).

        Raises:
            DocumentStateError: If the last table no longer starts where
                `table` did
        """
        refreshed = self.resolve_last_table()
        if refreshed.start_index != table.start_index:
            raise DocumentStateError(
                f"Table moved from {table.start_index} to {refreshed.start_index}"
            )
        return refreshed
