"""
Module: exporter.operations.gameboard

Purpose:
    Request builders for one game board page (one snake-grid table).

Key Functions:
    - page_table_operation(): InsertTable sized for a page's placement
    - table_sizing_operations(): Fixed column widths and square rows
    - item_runs(): Text runs of one square, per board item variant
    - item_cell_style(): Border/background of one square
    - snake_content_operations(): Content batch of a page

Algorithm:
    The placement gives each item a (row, col). After the sized table is
    resolved, every placed square becomes a CellWrite at its cell's content
    index, and every grid position without an item gets a hidden cell style.
    Cell-style requests do not move text, so only the text writes need
    descending-index ordering.

Dependencies:
    - exporter.layout.snake_grid: place_snake_grid
    - exporter.operations.cells: CellWrite, emit_cell_writes
    - exporter.styles: Colours, labels, presets

Used By:
    - exporter.controller
"""

from __future__ import annotations

import logging

from printables_toolkit.core.models import (
    ActivityItem,
    EndItem,
    GameBoardItem,
    Lesson,
    LessonItem,
    StartItem,
)
from printables_toolkit.exporter.config import ExportConfig
from printables_toolkit.exporter.document.structure import ResolvedTable
from printables_toolkit.exporter.layout.models import GridPlacement
from printables_toolkit.exporter.styles import (
    GOLD,
    GREY_TEXT,
    LIGHT_GREY,
    ColorTheme,
    LessonDivider,
    format_due_date,
    graphic_emoji,
    lesson_colors,
)

from .cells import CellWrite, TextRun, emit_cell_writes
from .models import (
    BLACK,
    HIDDEN_CELL_STYLE,
    WHITE,
    BorderStyle,
    CellStyle,
    EditOperation,
    InsertTable,
    RgbColor,
    TextStyle,
    UpdateTableCellStyle,
    UpdateTableColumnProperties,
    UpdateTableRowStyle,
)

logger = logging.getLogger(__name__)

CENTER = "CENTER"

LESSON_FONT_SIZES: dict[LessonDivider, int] = {
    LessonDivider.LESSON_NUMBER: 70,
    LessonDivider.LESSON_NUMBER_AND_GRAPHIC: 32,
    LessonDivider.LESSON_NAME_AND_GRAPHIC: 16,
    LessonDivider.LESSON_NAME: 10,
}


def page_table_operation(placement: GridPlacement) -> InsertTable:
    return InsertTable(rows=placement.rows, columns=placement.columns)


def table_sizing_operations(table: ResolvedTable, config: ExportConfig) -> list[EditOperation]:
    """Square cells: every column fixed width, every row at least as tall."""
    grid = config.board_grid
    operations: list[EditOperation] = [
        UpdateTableColumnProperties(table_start=table.start_index, column=column, width=grid.square_size)
        for column in range(table.column_count)
    ]
    operations.append(UpdateTableRowStyle(table_start=table.start_index, min_height=grid.square_size))
    return operations


def lesson_text(lesson: Lesson, config: ExportConfig) -> str:
    number = lesson.lesson_number or "1"
    divider = config.lesson_divider

    if divider is LessonDivider.LESSON_NAME:
        return lesson.name
    if divider is LessonDivider.LESSON_NUMBER:
        return number

    emoji = graphic_emoji(lesson.number_value, config.graphic_theme)
    if divider is LessonDivider.LESSON_NAME_AND_GRAPHIC:
        return f"Lesson {number}\n\n{emoji}"
    return f"{emoji} {number}"


def _terminal_background(config: ExportConfig) -> RgbColor:
    return LIGHT_GREY if config.color_theme is ColorTheme.BLACK_AND_WHITE else GOLD


def _activity_runs(item: ActivityItem, config: ExportConfig) -> tuple[TextRun, ...]:
    activity = item.activity
    mono = config.color_theme is ColorTheme.BLACK_AND_WHITE
    label = config.label_for(activity.classification)
    due = activity.due_date
    return (
        TextRun(
            text=f"{format_due_date(due)}\n\n" if due else "\n\n",
            style=TextStyle(font_size=10, color=GREY_TEXT),
        ),
        # Only the name paragraph gets the checkbox
        TextRun(
            text=f"{activity.name}\n",
            style=TextStyle(bold=True, font_size=10),
            checkbox=True,
            indent_start=15,
            indent_first_line=-3,
        ),
        TextRun(text="\n"),
        TextRun(
            text=label.label,
            style=TextStyle(bold=True, font_size=10, color=BLACK if mono else label.color),
        ),
        TextRun(text=" "),
        TextRun(
            text=config.style.workstyle_icon(activity.is_collaborative),
            style=TextStyle(font_size=11),
        ),
    )


def item_runs(item: GameBoardItem, config: ExportConfig) -> tuple[TextRun, ...]:
    """
    Text runs of one square.

    Raises:
        TypeError: If `item` is not a board item variant
    """
    if isinstance(item, StartItem):
        return (TextRun(
            text="Start!\n\n⮕",
            style=TextStyle(bold=True, font_size=24),
            alignment=CENTER,
        ),)

    if isinstance(item, EndItem):
        if item.is_last_page:
            return (TextRun(text="Finish!", style=TextStyle(bold=True, font_size=24), alignment=CENTER),)
        return (TextRun(
            text=f"Continue to Page {item.page_number}\n\n↪️",
            style=TextStyle(bold=True, font_size=18),
            alignment=CENTER,
        ),)

    if isinstance(item, LessonItem):
        divider = config.lesson_divider
        colors = lesson_colors(item.lesson.number_value, config.color_theme, divider)
        return (TextRun(
            text=lesson_text(item.lesson, config),
            style=TextStyle(
                bold=divider.has_graphic,
                font_size=LESSON_FONT_SIZES[divider],
                color=colors.text,
            ),
            alignment=CENTER,
        ),)

    if isinstance(item, ActivityItem):
        return _activity_runs(item, config)

    raise TypeError(f"Unknown game board item: {item!r}")


def item_cell_style(item: GameBoardItem, config: ExportConfig) -> CellStyle:
    """
    Border, padding and background of one square.

    Raises:
        TypeError: If `item` is not a board item variant
    """
    padding = config.style.board_cell_padding

    def square(background: RgbColor, horizontal: float = padding) -> CellStyle:
        return CellStyle(
            background=background,
            border=BorderStyle(width=1, color=BLACK),
            padding_vertical=padding,
            padding_horizontal=horizontal,
            content_alignment="MIDDLE",
        )

    if isinstance(item, (StartItem, EndItem)):
        return square(_terminal_background(config))
    if isinstance(item, LessonItem):
        colors = lesson_colors(item.lesson.number_value, config.color_theme, config.lesson_divider)
        return square(colors.background)
    if isinstance(item, ActivityItem):
        return square(WHITE, horizontal=config.style.activity_cell_padding)

    raise TypeError(f"Unknown game board item: {item!r}")


def snake_content_operations(
    placement: GridPlacement,
    table: ResolvedTable,
    config: ExportConfig,
) -> list[EditOperation]:
    """
    Content batch for one sized, resolved page table.

    Args:
        placement: Snake placement of the page's items
        table: The page's table, resolved after sizing
        config: Export configuration

    Returns:
        Hidden styles for empty cells, then square styles, then text
        writes in descending index order

    Raises:
        DocumentStateError: If the table does not have the placement's shape
    """
    table.require_shape(placement.rows, placement.columns)
    start = table.start_index

    operations: list[EditOperation] = [
        UpdateTableCellStyle(table_start=start, row=row, col=col, style=HIDDEN_CELL_STYLE)
        for row, col in placement.empty_cells
    ]

    writes = []
    for cell in placement.cells:
        operations.append(UpdateTableCellStyle(
            table_start=start,
            row=cell.row,
            col=cell.col,
            style=item_cell_style(cell.item, config),
        ))
        writes.append(CellWrite(
            target_index=table.content_index(cell.row, cell.col),
            row=cell.row,
            col=cell.col,
            runs=item_runs(cell.item, config),
        ))

    operations.extend(emit_cell_writes(writes))
    logger.debug(
        f"Board page: {placement.item_count} squares, "
        f"{len(placement.empty_cells)} empty, {len(operations)} operations"
    )
    return operations
