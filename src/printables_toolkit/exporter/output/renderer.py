"""
Module: exporter.output.renderer

Purpose:
    Render checklists and game boards to local PDF files using ReportLab.
    Page breaks and square placement come from the same layout functions
    the document export uses, so a printed PDF has the same pages.

Key Functions:
    - render_checklist_pdf(): One table per lesson, planned onto pages
    - render_game_board_pdf(): One snake grid per board page

Dependencies:
    - reportlab: PDF generation
    - exporter.layout: plan_checklist_pages, paginate/place snake grid
    - exporter.operations.gameboard: Square text per item variant

Used By:
    - printables_toolkit.cli (--pdf)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from printables_toolkit.core.models import Activity, Classification, Lesson
from printables_toolkit.exporter.config import ExportConfig
from printables_toolkit.exporter.layout import (
    paginate_game_board_items,
    place_snake_grid,
    plan_checklist_pages,
    prepare_game_board_items,
    table_row_count,
)
from printables_toolkit.exporter.layout.models import GridCell, GridPlacement
from printables_toolkit.exporter.operations.gameboard import item_cell_style, item_runs
from printables_toolkit.exporter.operations.models import BLACK, RgbColor
from printables_toolkit.exporter.operations.header import CLASS_BLANK, FORM_PREFIX
from printables_toolkit.exporter.styles import (
    BOARD_BLUE,
    BRAND_BLUE,
    LIGHT_GREY,
    SIGN_OFF_GREEN,
    format_due_date,
    status_color,
    themed,
)

logger = logging.getLogger(__name__)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

CHECKBOX_SIZE = 7
TEXT_INSET = 4


def _printable(text: str) -> str:
    """Drop characters the built-in PDF fonts cannot draw (emoji, arrows)."""
    return text.encode("cp1252", "ignore").decode("cp1252").strip()


def _fill(c: canvas.Canvas, color: RgbColor) -> None:
    c.setFillColorRGB(color.red, color.green, color.blue)


def _draw_header(c: canvas.Canvas, config: ExportConfig, top: float, left: float, board: bool) -> float:
    """Draw title, subtitle and form line; returns the y below the header."""
    theme = config.color_theme
    title_color = themed(BOARD_BLUE if board else BRAND_BLUE, theme)

    c.saveState()
    y = top - (18 if board else 16)
    _fill(c, title_color)
    c.setFont(FONT_BOLD, 18 if board else 16)
    c.drawString(left, y, _printable(config.section_name))

    y -= 18
    c.setFont(FONT if board else FONT_ITALIC, 14 if board else 10)
    c.drawString(left, y, _printable(f"{config.course_name} / {config.unit_name}"))

    y -= 24
    _fill(c, BLACK)
    c.setFont(FONT, 10)
    c.drawString(left, y, FORM_PREFIX)
    class_x = left + c.stringWidth(FORM_PREFIX, FONT, 10)
    if config.show_class_name:
        _fill(c, themed(BRAND_BLUE, theme))
        c.drawString(class_x, y, _printable(config.class_name))
    else:
        c.drawString(class_x, y, CLASS_BLANK)
    c.restoreState()
    return y - 16


# ─────────────────────────────────────────────────────────────────────────────
# Checklist
# ─────────────────────────────────────────────────────────────────────────────

def _draw_checkbox(c: canvas.Canvas, x: float, y: float) -> float:
    c.rect(x, y - 1, CHECKBOX_SIZE, CHECKBOX_SIZE, stroke=1, fill=0)
    return x + CHECKBOX_SIZE + 4


def _activity_row(c: canvas.Canvas, activity: Activity, config: ExportConfig,
                  xs: Sequence[float], y: float) -> None:
    due = activity.due_date
    c.setFont(FONT, 10)
    _fill(c, BLACK)
    if due:
        c.drawString(xs[0] + TEXT_INSET, y, format_due_date(due))

    name = activity.name
    if activity.classification is Classification.ASPIRE_TO_DO:
        name += config.style.star(config.color_theme)
    text_x = _draw_checkbox(c, xs[1] + TEXT_INSET, y)
    c.drawString(text_x, y, _printable(name) or " ")

    label = activity.classification.display_name
    c.setFont(FONT_BOLD, 10)
    _fill(c, status_color(activity.classification, config.color_theme))
    c.drawCentredString((xs[2] + xs[3]) / 2, y, label)


def _draw_checklist_table(c: canvas.Canvas, lesson: Lesson, config: ExportConfig,
                          left: float, top: float) -> float:
    """Draw one lesson table with its top edge at `top`; returns its bottom."""
    page = config.checklist_page
    widths = config.style.checklist_column_widths
    xs = [left, left + widths[0], left + widths[0] + widths[1], left + sum(widths)]
    rows = table_row_count(lesson, config.teacher_sign_off)
    row_h = page.row_height
    bottom = top - rows * row_h

    c.saveState()
    c.setLineWidth(0.5)

    _fill(c, LIGHT_GREY)
    c.rect(xs[0], top - row_h, xs[3] - xs[0], row_h, stroke=0, fill=1)

    for r in range(rows + 1):
        y = top - r * row_h
        c.line(xs[0], y, xs[3], y)
    c.line(xs[0], top, xs[0], bottom)
    c.line(xs[3], top, xs[3], bottom)
    # Inner verticals skip the merged title, goal and sign-off cells
    c.line(xs[1], top - row_h, xs[1], top - 2 * row_h)
    activity_bottom = top - (2 + lesson.activity_count) * row_h
    for x in xs[1:3]:
        c.line(x, top - 2 * row_h, x, activity_bottom)

    baseline = row_h / 2 + 3
    _fill(c, BLACK)
    c.setFont(FONT_BOLD, 11)
    c.drawString(xs[0] + TEXT_INSET, top - baseline, _printable(lesson.name))

    c.setFont(FONT, 11)
    c.drawString(xs[0] + TEXT_INSET, top - row_h - baseline, "Due Date")
    goal = f"Learning Goal: {lesson.learning_target}" if lesson.learning_target else "Learning Goal"
    c.setFont(FONT_ITALIC, 9)
    c.drawString(xs[1] + TEXT_INSET, top - row_h - baseline, _printable(goal))

    for offset, activity in enumerate(lesson.activities):
        _activity_row(c, activity, config, xs, top - (2 + offset) * row_h - baseline)

    if config.teacher_sign_off:
        y = bottom + row_h - baseline
        _fill(c, themed(SIGN_OFF_GREEN, config.color_theme))
        c.setFont(FONT_BOLD, 10)
        text_x = _draw_checkbox(c, xs[0] + TEXT_INSET, y)
        c.drawString(text_x, y, "Teacher Sign Off")

    c.restoreState()
    return bottom


def render_checklist_pdf(lessons: Sequence[Lesson], output_path: Path, config: ExportConfig) -> int:
    """
    Render a checklist to PDF.

    Args:
        lessons: Lessons in source order
        output_path: Path to write PDF
        config: Export configuration

    Returns:
        Number of pages written

    Raises:
        IOError: If PDF cannot be written
    """
    page = config.checklist_page
    selected = config.select_lessons(lessons)
    plans = plan_checklist_pages(selected, config.teacher_sign_off, page)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(output_path), pagesize=(page.page_width, page.page_height))
    c.setTitle(f"Checklist - {config.section_name}")

    top = page.page_height - page.margin_top
    y = _draw_header(c, config, top, page.margin_side, board=False)
    for plan in plans:
        if plan.index > 0:
            c.showPage()
            y = top
        for lesson in plan.lessons:
            y = _draw_checklist_table(c, lesson, config, page.margin_side, y) - page.table_spacing
    c.showPage()
    c.save()

    page_count = max(len(plans), 1)
    logger.info(f"Rendered checklist ({len(selected)} tables, {page_count} pages) to {output_path}")
    return page_count


# ─────────────────────────────────────────────────────────────────────────────
# Game board
# ─────────────────────────────────────────────────────────────────────────────

def _draw_square(c: canvas.Canvas, cell: GridCell, config: ExportConfig,
                 left: float, top: float) -> None:
    size = config.board_grid.square_size
    x = left + cell.col * size
    y = top - (cell.row + 1) * size
    style = item_cell_style(cell.item, config)

    c.saveState()
    if style.background is not None:
        _fill(c, style.background)
    c.setLineWidth(style.border.width if style.border else 1)
    c.rect(x, y, size, size, stroke=1, fill=1)

    inner = size - 2 * (style.padding_horizontal or 0)
    lines: list[tuple[str, str, float, RgbColor]] = []
    for run in item_runs(cell.item, config):
        text_style = run.style
        font_size = (text_style.font_size if text_style else None) or 10
        font = FONT_BOLD if text_style and text_style.bold else FONT
        color = (text_style.color if text_style else None) or BLACK
        for paragraph in run.text.split("\n"):
            text = _printable(paragraph)
            if not text:
                continue
            # Keep oversized divider numbers inside the square
            font_size = min(font_size, 40)
            for line in simpleSplit(text, font, font_size, inner):
                lines.append((line, font, font_size, color))

    total = sum(size_ * 1.15 for _, _, size_, _ in lines)
    cursor = y + size / 2 + total / 2
    for line, font, font_size, color in lines:
        cursor -= font_size * 1.15
        _fill(c, color)
        c.setFont(font, font_size)
        c.drawCentredString(x + size / 2, cursor + font_size * 0.2, line)
    c.restoreState()


def _draw_board_page(c: canvas.Canvas, placement: GridPlacement, config: ExportConfig,
                     left: float, top: float) -> None:
    for cell in placement.cells:
        _draw_square(c, cell, config, left, top)


def render_game_board_pdf(lessons: Sequence[Lesson], output_path: Path, config: ExportConfig) -> int:
    """
    Render a game board to PDF, landscape, one snake grid per page.

    Returns:
        Number of pages written
    """
    grid = config.board_grid
    selected = config.select_lessons(lessons)
    pages = paginate_game_board_items(prepare_game_board_items(selected), grid.items_per_page)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(output_path), pagesize=(grid.page_width, grid.page_height))
    c.setTitle(f"Game Board - {config.section_name}")

    top = grid.page_height - grid.page_margin
    for index, page_items in enumerate(pages):
        y = _draw_header(c, config, top, grid.page_margin, board=True) if index == 0 else top
        _draw_board_page(c, place_snake_grid(page_items, grid.columns), config, grid.page_margin, y)
        c.showPage()
    c.save()

    logger.info(f"Rendered game board ({len(pages)} pages) to {output_path}")
    return len(pages)
