"""
Module: exporter.layout.snake_grid

Purpose:
    Lay a linear sequence of game board squares out as a zig-zag ("snake")
    path across one table per page.

Key Functions:
    - prepare_game_board_items(): Build the full item sequence
    - paginate_game_board_items(): Cut the sequence into pages
    - snake_row_count(): Table rows needed for a page
    - place_snake_grid(): Assign each item a row/column

Algorithm:
    Rows alternate between main rows (up to `columns` squares) and
    single-square connector rows. Row r belongs to row-group r // 2;
    odd row-groups flow right-to-left. A forward main row ends at the last
    column, so its connector sits there; a reverse main row ends at column 0,
    so its connector sits at column 0. The next main row then starts where
    the connector is, giving one continuous path.

    0 → 1 → 2 → 3 → 4 → 5 → 6
                            ↓
                            7
                            ↓
    14 ← 13 ← 12 ← 11 ← 10 ← 9 ← 8

Dependencies:
    - core.models.board: GameBoardItem variants
    - exporter.layout.models: GridCell, GridPlacement

Used By:
    - exporter.controller: Game board export
    - exporter.operations.gameboard: Cell content
    - exporter.output.renderer: Local PDF rendering
"""

from __future__ import annotations

import logging
from typing import Sequence

from printables_toolkit.core.models import (
    ActivityItem,
    EndItem,
    GameBoardItem,
    Lesson,
    LessonItem,
    StartItem,
)

from .models import GridCell, GridPlacement

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = 7
DEFAULT_ITEMS_PER_PAGE = 15


def prepare_game_board_items(lessons: Sequence[Lesson]) -> list[GameBoardItem]:
    """
    Build the item path for all lessons.

    Returns:
        [start] + per lesson [divider, activities...] + [final end]
    """
    items: list[GameBoardItem] = [StartItem()]

    for lesson in lessons:
        items.append(LessonItem(lesson=lesson))
        items.extend(ActivityItem(lesson=lesson, activity=a) for a in lesson.activities)

    items.append(EndItem(is_last_page=True))
    return items


def paginate_game_board_items(
    items: Sequence[GameBoardItem],
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
) -> tuple[tuple[GameBoardItem, ...], ...]:
    """
    Cut the item path into pages of at most `items_per_page` squares.

    When the rest of the path does not fit, the page keeps
    `items_per_page - 1` items and its last slot becomes a continuation
    end pointing at the next page's display number. The displaced item
    opens the next page, so nothing is dropped.

    Args:
        items: Full item path
        items_per_page: Page capacity (at least 2)

    Returns:
        Tuple of pages; each page ends with exactly one EndItem when the
        input ends with the final end

    Raises:
        ValueError: If items_per_page < 2
    """
    if items_per_page < 2:
        raise ValueError(f"items_per_page must be at least 2: {items_per_page}")

    pages: list[tuple[GameBoardItem, ...]] = []
    remaining = list(items)

    while remaining:
        if len(remaining) <= items_per_page:
            pages.append(tuple(remaining))
            break

        # Page display numbers are 1-based: this page is len(pages) + 1
        continuation = EndItem(is_last_page=False, page_number=len(pages) + 2)
        pages.append(tuple(remaining[: items_per_page - 1]) + (continuation,))
        remaining = remaining[items_per_page - 1:]

    logger.debug(f"Paginated {len(items)} board items onto {len(pages)} pages")
    return tuple(pages)


def is_reverse_flow(row: int) -> bool:
    """Odd row-groups (two table rows each) flow right-to-left."""
    return (row // 2) % 2 == 1


def connector_column(row: int, columns: int = DEFAULT_COLUMNS) -> int:
    """Column of the connector square on connector row `row`."""
    return 0 if is_reverse_flow(row) else columns - 1


def snake_row_count(item_count: int, columns: int = DEFAULT_COLUMNS) -> int:
    """Table rows needed to place `item_count` squares."""
    rows = 0
    remaining = item_count
    while remaining > 0:
        remaining -= columns if rows % 2 == 0 else 1
        rows += 1
    return rows


def place_snake_grid(
    items: Sequence[GameBoardItem],
    columns: int = DEFAULT_COLUMNS,
) -> GridPlacement:
    """
    Place one page of items on the snake grid.

    Args:
        items: Items of a single page, in path order
        columns: Squares per main row

    Returns:
        GridPlacement with placed cells in path order and every other
        grid position listed as empty
    """
    rows = snake_row_count(len(items), columns)
    cells: list[GridCell] = []
    occupied: set[tuple[int, int]] = set()
    next_item = 0

    for row in range(rows):
        reverse = is_reverse_flow(row)

        if row % 2 == 1:
            positions = [connector_column(row, columns)]
        else:
            positions = list(range(columns))
            if reverse:
                positions.reverse()

        for col in positions:
            if next_item >= len(items):
                break
            cells.append(GridCell(row=row, col=col, item=items[next_item]))
            occupied.add((row, col))
            next_item += 1

    empty_cells = tuple(
        (row, col)
        for row in range(rows)
        for col in range(columns)
        if (row, col) not in occupied
    )

    return GridPlacement(
        rows=rows,
        columns=columns,
        cells=tuple(cells),
        empty_cells=empty_cells,
    )
