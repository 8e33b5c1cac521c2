"""
Module: exporter.operations.checklist

Purpose:
    Request builders for one checklist table (one lesson).
    Three batches per table, each built from the table's resolved position:

        1. empty_table_operation()       - before the table exists
        2. table_structure_operations()  - merges, widths, title background
        3. table_content_operations()    - text, styles, checkboxes

Key Functions:
    - checklist_shape(): Rows/columns of a lesson's table
    - empty_table_operation(): InsertTable for a lesson
    - table_structure_operations(): Structure batch
    - table_content_writes(): Cell writes for the content batch
    - table_content_operations(): Ordered content batch

Table layout:
    row 0             lesson title (merged across 3 columns)
    row 1             "Due Date" | learning goal (merged columns 1-2)
    row 2 .. n+1      date | activity (checkbox) | status
    row n+2           teacher sign off (merged across 3), optional

Dependencies:
    - exporter.operations.cells: CellWrite, emit_cell_writes
    - exporter.document.structure: ResolvedTable
    - exporter.layout.pagination: table_row_count

Used By:
    - exporter.controller
"""

from __future__ import annotations

import logging
from typing import Optional

from printables_toolkit.core.models import Activity, ActivityType, Classification, Lesson
from printables_toolkit.exporter.config import ExportConfig
from printables_toolkit.exporter.document.structure import ResolvedTable
from printables_toolkit.exporter.layout.pagination import table_row_count
from printables_toolkit.exporter.styles import (
    LIGHT_GREY,
    LINK_BLUE,
    SIGN_OFF_GREEN,
    format_due_date,
    status_color,
    themed,
)

from .cells import CellWrite, TextRun, emit_cell_writes
from .models import (
    CellStyle,
    EditOperation,
    InsertTable,
    MergeTableCells,
    TextStyle,
    UpdateTableCellStyle,
    UpdateTableColumnProperties,
)

logger = logging.getLogger(__name__)

CHECKLIST_COLUMNS = 3
FIRST_ACTIVITY_ROW = 2
FALLBACK_VIDEO_URL = "https://modernclassrooms.org"


def checklist_shape(lesson: Lesson, sign_off: bool) -> tuple[int, int]:
    return table_row_count(lesson, sign_off), CHECKLIST_COLUMNS


def empty_table_operation(lesson: Lesson, sign_off: bool) -> InsertTable:
    rows, columns = checklist_shape(lesson, sign_off)
    return InsertTable(rows=rows, columns=columns)


def table_structure_operations(
    table: ResolvedTable,
    lesson: Lesson,
    config: ExportConfig,
) -> list[EditOperation]:
    """
    Merges, fixed column widths and title background.

    Args:
        table: Freshly inserted (unmerged) table
        lesson: Lesson the table is for
        config: Export configuration

    Raises:
        DocumentStateError: If the table does not have the lesson's shape
    """
    rows, columns = checklist_shape(lesson, config.teacher_sign_off)
    table.require_shape(rows, columns)
    start = table.start_index

    operations: list[EditOperation] = [
        MergeTableCells(table_start=start, row=0, col=0, col_span=3),
        MergeTableCells(table_start=start, row=1, col=1, col_span=2),
    ]
    if config.teacher_sign_off:
        operations.append(MergeTableCells(table_start=start, row=rows - 1, col=0, col_span=3))

    for column, width in enumerate(config.style.checklist_column_widths):
        operations.append(UpdateTableColumnProperties(table_start=start, column=column, width=width))

    operations.append(UpdateTableCellStyle(
        table_start=start,
        row=0,
        col=0,
        col_span=3,
        style=CellStyle(background=LIGHT_GREY),
    ))
    return operations


def activity_link(activity: Activity, config: ExportConfig) -> Optional[str]:
    """Hyperlink for an activity name, when hyperlinks are enabled."""
    if not config.include_video_hyperlinks:
        return None
    url = activity.primary_resource_url
    if url:
        return url
    if activity.type is ActivityType.VIDEO_AND_NOTES:
        return FALLBACK_VIDEO_URL
    return None


def _activity_runs(activity: Activity, config: ExportConfig) -> tuple[TextRun, TextRun, TextRun]:
    theme = config.color_theme

    due = activity.due_date
    date_text = f"{config.style.calendar_icon}{format_due_date(due)}" if due else ""
    date_run = TextRun(text=date_text, style=TextStyle(font_size=10))

    name = activity.name
    if activity.classification is Classification.ASPIRE_TO_DO:
        name += config.style.star(theme)

    link = activity_link(activity, config)
    name_style = None
    if link:
        name_style = TextStyle(link=link, color=themed(LINK_BLUE, theme), underline=True)
    name_run = TextRun(text=name, style=name_style, checkbox=True)

    status_run = TextRun(
        text=activity.classification.display_name,
        style=TextStyle(bold=True, font_size=10, color=status_color(activity.classification, theme)),
        alignment="CENTER",
    )
    return date_run, name_run, status_run


def table_content_writes(
    table: ResolvedTable,
    lesson: Lesson,
    config: ExportConfig,
) -> list[CellWrite]:
    """
    Pending writes for every filled cell of a merged, resolved table.

    Returns:
        Writes in table order (emission reorders them)
    """
    def write(row: int, col: int, *runs: TextRun) -> CellWrite:
        return CellWrite(target_index=table.content_index(row, col), row=row, col=col, runs=runs)

    goal = f"Learning Goal: {lesson.learning_target}" if lesson.learning_target else "Learning Goal"

    writes = [
        write(0, 0, TextRun(text=lesson.name, style=TextStyle(bold=True, font_size=11))),
        write(1, 0, TextRun(text="Due Date", style=TextStyle(font_size=11))),
        write(1, 1, TextRun(text=goal, style=TextStyle(italic=True, font_size=9))),
    ]

    for offset, activity in enumerate(lesson.activities):
        row = FIRST_ACTIVITY_ROW + offset
        date_run, name_run, status_run = _activity_runs(activity, config)
        writes.append(write(row, 0, date_run))
        writes.append(write(row, 1, name_run))
        writes.append(write(row, 2, status_run))

    if config.teacher_sign_off:
        writes.append(write(
            table.row_count - 1,
            0,
            TextRun(
                text="Teacher Sign Off",
                style=TextStyle(
                    bold=True,
                    font_size=10,
                    color=themed(SIGN_OFF_GREEN, config.color_theme),
                ),
                checkbox=True,
            ),
        ))

    return writes


def table_content_operations(
    table: ResolvedTable,
    lesson: Lesson,
    config: ExportConfig,
) -> list[EditOperation]:
    writes = table_content_writes(table, lesson, config)
    operations = emit_cell_writes(writes)
    logger.debug(f"Lesson {lesson.id}: {len(writes)} cell writes, {len(operations)} operations")
    return operations
