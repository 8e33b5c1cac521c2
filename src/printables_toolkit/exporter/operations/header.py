"""
Module: exporter.operations.header

Purpose:
    Document style and header block shared by both exports. The header is
    written into a fresh document at the start of the body, so its indices
    are known locally and no fetch is needed.

Key Functions:
    - document_style_operation(): Margins (and landscape size for the board)
    - header_runs(): Title, subtitle and Name/Date/Class form line
    - header_operations(): Both, as one ordered batch

Dependencies:
    - exporter.operations.cells: TextRun, run_operations
    - exporter.styles: Theme colours

Used By:
    - exporter.controller
"""

from __future__ import annotations

from enum import Enum

from printables_toolkit.exporter.config import ExportConfig
from printables_toolkit.exporter.styles import BOARD_BLUE, BRAND_BLUE, ColorTheme, themed

from .cells import TextRun, run_operations
from .models import EditOperation, TextStyle, UpdateDocumentStyle, text_length

BODY_START_INDEX = 1

FORM_PREFIX = "Name: _______________________________   Date: ______________   Class: "
CLASS_BLANK = "______________"


class DocumentKind(str, Enum):
    CHECKLIST = "CHECKLIST"
    GAME_BOARD = "GAME_BOARD"


def document_style_operation(config: ExportConfig, kind: DocumentKind) -> UpdateDocumentStyle:
    if kind is DocumentKind.GAME_BOARD:
        grid = config.board_grid
        return UpdateDocumentStyle(
            margin_top=grid.page_margin,
            margin_bottom=grid.page_margin,
            margin_left=grid.page_margin,
            margin_right=grid.page_margin,
            page_width=grid.page_width,
            page_height=grid.page_height,
        )

    page = config.checklist_page
    return UpdateDocumentStyle(
        margin_top=page.margin_top,
        margin_bottom=page.margin_bottom,
        margin_left=page.margin_side,
        margin_right=page.margin_side,
    )


def header_runs(config: ExportConfig, kind: DocumentKind) -> list[TextRun]:
    """
    Header text in reading order.

    The class name is its own run so that its highlight covers exactly the
    inserted name.
    """
    theme = config.color_theme
    board = kind is DocumentKind.GAME_BOARD

    title_color = themed(BOARD_BLUE if board else BRAND_BLUE, theme)
    runs = [
        TextRun(
            text=f"{config.section_name}\n",
            style=TextStyle(bold=True, font_size=18 if board else 16, color=title_color),
        ),
        TextRun(
            text=f"{config.course_name} / {config.unit_name}\n\n",
            style=TextStyle(
                italic=None if board else True,
                font_size=14 if board else 10,
                color=title_color,
            ),
        ),
        TextRun(text=FORM_PREFIX, style=TextStyle(bold=False, italic=False, font_size=10)),
    ]

    if config.show_class_name:
        highlight = None if theme is ColorTheme.BLACK_AND_WHITE else BRAND_BLUE
        runs.append(TextRun(text=config.class_name, style=TextStyle(color=highlight)))
    else:
        runs.append(TextRun(text=CLASS_BLANK))

    runs.append(TextRun(text="\n\n"))
    return runs


def header_operations(
    config: ExportConfig,
    kind: DocumentKind,
    start_index: int = BODY_START_INDEX,
) -> list[EditOperation]:
    """
    Document style followed by the header, appended forward from `start_index`.

    Returns:
        Operations for one batch
    """
    operations: list[EditOperation] = [document_style_operation(config, kind)]
    cursor = start_index
    for run in header_runs(config, kind):
        if not run.text:
            continue
        operations.extend(run_operations(run, cursor))
        cursor += text_length(run.text)
    return operations
