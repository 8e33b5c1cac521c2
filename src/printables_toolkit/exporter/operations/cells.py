"""
Module: exporter.operations.cells

Purpose:
    Turn pending writes against resolved table cells into an index-safe
    sequence of edit operations.

Key Classes:
    - TextRun: One piece of text with its styling
    - CellWrite: Runs destined for one resolved cell

Key Functions:
    - emit_cell_writes(): Ordered operations for a batch of cell writes

Algorithm:
    An insert at index i shifts every position >= i. Writes are therefore
    applied highest target index first, so the targets of writes still to
    come are never moved. Inside a cell the runs are appended forward from
    the target index. Each style, bullet or paragraph request covers exactly
    the text inserted just before it, [index, index + length), computed
    right away rather than from a later fetch.

Dependencies:
    - exporter.operations.models: Operations and styles

Used By:
    - exporter.operations.checklist
    - exporter.operations.gameboard
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .models import (
    CreateParagraphBullets,
    EditOperation,
    InsertText,
    TextStyle,
    UpdateParagraphStyle,
    UpdateTextStyle,
    text_length,
)


@dataclass(frozen=True)
class TextRun:
    """
    Text appended inside a cell.

    Attributes:
        text: Text to insert (may contain newlines)
        style: Character style for the run
        checkbox: Turn the run's paragraph into a checkbox bullet
        alignment: Paragraph alignment (e.g. "CENTER")
        indent_start: Paragraph start indent in points
        indent_first_line: First-line indent in points
    """

    text: str
    style: Optional[TextStyle] = None
    checkbox: bool = False
    alignment: Optional[str] = None
    indent_start: Optional[float] = None
    indent_first_line: Optional[float] = None

    @property
    def has_paragraph_style(self) -> bool:
        return (
            self.alignment is not None
            or self.indent_start is not None
            or self.indent_first_line is not None
        )


@dataclass(frozen=True)
class CellWrite:
    """
    Pending write against a resolved cell.

    Attributes:
        target_index: Cell start + 1 (past the cell's empty paragraph)
        row: Table row of the cell
        col: Table column of the cell
        runs: Text runs, in reading order
    """

    target_index: int
    row: int
    col: int
    runs: tuple[TextRun, ...]

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


def run_operations(run: TextRun, index: int) -> list[EditOperation]:
    """Insert one run at `index` and style exactly the inserted range."""
    end = index + text_length(run.text)
    operations: list[EditOperation] = [InsertText(text=run.text, index=index)]

    if run.style is not None and not run.style.is_empty:
        operations.append(UpdateTextStyle(start=index, end=end, style=run.style))

    if run.checkbox:
        operations.append(CreateParagraphBullets(start=index, end=end))

    if run.has_paragraph_style:
        operations.append(UpdateParagraphStyle(
            start=index,
            end=end,
            alignment=run.alignment,
            indent_start=run.indent_start,
            indent_first_line=run.indent_first_line,
        ))

    return operations


def order_cell_writes(writes: Iterable[CellWrite]) -> list[CellWrite]:
    """Highest target index first (stable for equal indices)."""
    return sorted(writes, key=lambda w: w.target_index, reverse=True)


def emit_cell_writes(writes: Iterable[CellWrite]) -> list[EditOperation]:
    """
    Operations for a batch of cell writes.

    Args:
        writes: Pending writes, in any order

    Returns:
        Operations ordered by descending target index; empty runs are skipped
    """
    operations: list[EditOperation] = []

    for write in order_cell_writes(writes):
        cursor = write.target_index
        for run in write.runs:
            if not run.text:
                continue
            operations.extend(run_operations(run, cursor))
            cursor += text_length(run.text)

    return operations
