"""
Module: exporter.layout.models

Purpose:
    Data models for game board grid placement.
    Immutable dataclasses for placed squares and whole-page grids.

Key Classes:
    - GridCell: An item placed at a row/column
    - GridPlacement: Complete grid for one board page

Dependencies:
    - dataclasses (std)
    - core.models.board: GameBoardItem

Used By:
    - exporter.layout.snake_grid: Creates GridPlacements
    - exporter.operations.gameboard: Maps cells to document indices
    - exporter.output.renderer: Draws squares
"""

from __future__ import annotations

from dataclasses import dataclass

from printables_toolkit.core.models import GameBoardItem


@dataclass(frozen=True)
class GridCell:
    """
    An item placed on the grid.

    Attributes:
        row: Table row (0-indexed)
        col: Table column (0-indexed)
        item: The board item drawn in this square
    """

    row: int
    col: int
    item: GameBoardItem

    @property
    def is_connector(self) -> bool:
        """Connector squares sit on odd rows."""
        return self.row % 2 == 1


@dataclass(frozen=True)
class GridPlacement:
    """
    Snake layout of one board page.

    Attributes:
        rows: Table rows needed
        columns: Table columns
        cells: Placed items, in path order
        empty_cells: (row, col) of every grid cell without an item

    Example:
        >>> placement = place_snake_grid(items, columns=7)
        >>> placement.rows * placement.columns == len(placement.cells) + len(placement.empty_cells)
        True
    """

    rows: int
    columns: int
    cells: tuple[GridCell, ...]
    empty_cells: tuple[tuple[int, int], ...]

    @property
    def item_count(self) -> int:
        return len(self.cells)

    def cell_at(self, row: int, col: int) -> GridCell | None:
        for cell in self.cells:
            if cell.row == row and cell.col == col:
                return cell
        return None
