"""
Module: exporter.controller

Purpose:
    Orchestrate a complete export into a remote document.
    Create → Style + header → Tables (insert → resolve → fill) → Footer

Key Functions:
    - export_checklist(): One table per lesson with estimated page breaks
    - export_game_board(): One snake-grid table per board page

Key Classes:
    - ExportResult: Created document and counts
    - ExportError: Exception for export failures
    - Exporter: Single-flight wrapper holding a service

Algorithm:
    Table positions are assigned by the service, so every table costs
    several sequential round-trips: the empty table is committed, the
    document re-fetched to find it, its structure edited, the document
    re-fetched again (merges and sizing change cell offsets), and only
    then is content written against the resolved cell offsets. Nothing is
    retried or rolled back; a failure leaves the partial document behind.

Dependencies:
    - exporter.document: Service seam and table resolution
    - exporter.layout: Page breaks and snake placement
    - exporter.operations: Request builders

Used By:
    - printables_toolkit.cli
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Sequence

from printables_toolkit.core.models import Lesson

from .config import ExportConfig
from .document import (
    DocumentService,
    DocumentServiceError,
    DocumentStateError,
    DocumentStateTracker,
)
from .layout import (
    PageTracker,
    estimate_table_height,
    paginate_game_board_items,
    place_snake_grid,
    prepare_game_board_items,
    should_insert_page_break,
)
from .operations import EditOperation, InsertPageBreak, InsertText, chunk_operations
from .operations.checklist import (
    checklist_shape,
    empty_table_operation,
    table_content_operations,
    table_structure_operations,
)
from .operations.footer import (
    footer_content_operations,
    footer_create_operations,
    footer_id_from_replies,
)
from .operations.gameboard import (
    page_table_operation,
    snake_content_operations,
    table_sizing_operations,
)
from .operations.header import DocumentKind, header_operations

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Error during an export. The cause is chained."""
    pass


class ExportBusyError(Exception):
    """An export is already running on this Exporter."""
    pass


@dataclass(frozen=True)
class ExportResult:
    """
    Outcome of a successful export (immutable).

    Attributes:
        document_id: Identifier of the created document
        url: Link for viewing/editing the document
        page_count: Pages planned by the local layout
        table_count: Tables written
    """

    document_id: str
    url: str
    page_count: int
    table_count: int


def _apply_chunked(
    service: DocumentService,
    document_id: str,
    operations: Sequence[EditOperation],
    config: ExportConfig,
) -> int:
    """Apply operations in consecutive capped batches; returns batch count."""
    batches = chunk_operations(operations, config.max_requests_per_batch)
    for number, batch in enumerate(batches, start=1):
        logger.debug(f"Applying batch {number}/{len(batches)} ({len(batch)} operations)")
        service.batch_apply(document_id, batch)
    return len(batches)


def _add_footer(service: DocumentService, document_id: str, config: ExportConfig) -> None:
    replies = service.batch_apply(document_id, footer_create_operations())
    footer_id = footer_id_from_replies(replies)
    service.batch_apply(document_id, footer_content_operations(footer_id, config))


def export_checklist(
    service: DocumentService,
    lessons: Sequence[Lesson],
    config: ExportConfig,
) -> ExportResult:
    """
    Export lessons as a checklist document, one table per lesson.

    Pipeline:
    1. Create "Checklist - {section}"
    2. Apply document style and header
    3. Per lesson: page break or blank line, empty table, resolve,
       structure, resolve, content
    4. Add the footer

    Args:
        service: Remote document service
        lessons: Lessons in source order
        config: Export configuration

    Returns:
        ExportResult for the created document

    Raises:
        ExportError: If any remote call fails or the document is not in the
            expected state
    """
    start_time = time.perf_counter()
    selected = config.select_lessons(lessons)
    page_config = config.checklist_page
    sign_off = config.teacher_sign_off

    logger.info(f"Starting checklist export for {config.section_name} ({len(selected)} lessons)")

    try:
        document_id = service.create_document(f"Checklist - {config.section_name}")
        service.batch_apply(document_id, header_operations(config, DocumentKind.CHECKLIST))

        tracker = DocumentStateTracker(service, document_id)
        pages = PageTracker(page_config)
        page_count = 1

        for i, lesson in enumerate(selected):
            table_height = estimate_table_height(lesson, sign_off, page_config)

            leading: list[EditOperation] = []
            if should_insert_page_break(pages.current_height, table_height, i == 0, page_config):
                leading.append(InsertPageBreak())
                pages.reset_page()
                page_count += 1
            elif i > 0:
                leading.append(InsertText(text="\n"))

            rows, columns = checklist_shape(lesson, sign_off)
            service.batch_apply(document_id, leading + [empty_table_operation(lesson, sign_off)])
            table = tracker.resolve_new_table(rows, columns)

            service.batch_apply(document_id, table_structure_operations(table, lesson, config))
            table = tracker.refresh(table)

            _apply_chunked(service, document_id, table_content_operations(table, lesson, config), config)
            pages.add_table(table_height)

            logger.info(f"Table {i + 1}/{len(selected)} written: {lesson.name}")

        _add_footer(service, document_id, config)

    except (DocumentServiceError, DocumentStateError) as e:
        raise ExportError(f"Checklist export failed: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Checklist export complete in {elapsed:.2f}s: {page_count} pages, {len(selected)} tables")

    return ExportResult(
        document_id=document_id,
        url=service.document_url(document_id),
        page_count=page_count,
        table_count=len(selected),
    )


def export_game_board(
    service: DocumentService,
    lessons: Sequence[Lesson],
    config: ExportConfig,
) -> ExportResult:
    """
    Export lessons as a game board document, one snake-grid table per page.

    Pipeline:
    1. Create "Game Board - {section}"
    2. Apply landscape document style and header
    3. Paginate the item path
    4. Per page: page break (after the first), table, resolve, sizing,
       resolve, content in capped batches
    5. Add the footer

    Raises:
        ExportError: If any remote call fails or the document is not in the
            expected state
    """
    start_time = time.perf_counter()
    selected = config.select_lessons(lessons)
    grid = config.board_grid

    items = prepare_game_board_items(selected)
    board_pages = paginate_game_board_items(items, grid.items_per_page)

    logger.info(
        f"Starting game board export for {config.section_name}: "
        f"{len(items)} squares on {len(board_pages)} pages"
    )

    try:
        document_id = service.create_document(f"Game Board - {config.section_name}")
        service.batch_apply(document_id, header_operations(config, DocumentKind.GAME_BOARD))

        tracker = DocumentStateTracker(service, document_id)

        for page_index, page_items in enumerate(board_pages):
            placement = place_snake_grid(page_items, grid.columns)

            leading: list[EditOperation] = [InsertPageBreak()] if page_index > 0 else []
            service.batch_apply(document_id, leading + [page_table_operation(placement)])
            table = tracker.resolve_new_table(placement.rows, placement.columns)

            service.batch_apply(document_id, table_sizing_operations(table, config))
            table = tracker.refresh(table)

            batches = _apply_chunked(
                service,
                document_id,
                snake_content_operations(placement, table, config),
                config,
            )
            logger.info(
                f"Page {page_index + 1}/{len(board_pages)} written: "
                f"{placement.item_count} squares in {batches} batches"
            )

        _add_footer(service, document_id, config)

    except (DocumentServiceError, DocumentStateError) as e:
        raise ExportError(f"Game board export failed: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Game board export complete in {elapsed:.2f}s")

    return ExportResult(
        document_id=document_id,
        url=service.document_url(document_id),
        page_count=len(board_pages),
        table_count=len(board_pages),
    )


class Exporter:
    """
    Runs exports against one service, one at a time.

    Example:
        >>> exporter = Exporter(GoogleDocsService(creds))
        >>> result = exporter.run_checklist(lessons, config)
        >>> print(result.url)
    """

    def __init__(self, service: DocumentService):
        self._service = service
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def _run(self, export, lessons: Sequence[Lesson], config: ExportConfig) -> ExportResult:
        if not self._lock.acquire(blocking=False):
            raise ExportBusyError("An export is already in progress")
        try:
            return export(self._service, lessons, config)
        finally:
            self._lock.release()

    def run_checklist(self, lessons: Sequence[Lesson], config: ExportConfig) -> ExportResult:
        return self._run(export_checklist, lessons, config)

    def run_game_board(self, lessons: Sequence[Lesson], config: ExportConfig) -> ExportResult:
        return self._run(export_game_board, lessons, config)
