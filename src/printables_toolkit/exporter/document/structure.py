"""
Module: exporter.document.structure

Purpose:
    Local view of a table as the remote service laid it out. Positions are
    assigned by the server, so these objects only exist after a table was
    committed and the document re-fetched.

Key Classes:
    - ResolvedCell: Cell with its server-assigned start offset
    - ResolvedRow: Row of cells
    - ResolvedTable: Table with its start offset and rows

Key Functions:
    - ResolvedTable.from_element(): Parse a body structural element

Dependencies:
    - dataclasses (std)

Used By:
    - exporter.document.tracker
    - exporter.operations.checklist, exporter.operations.gameboard
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class DocumentStateError(Exception):
    """The fetched document does not have the expected structure."""
    pass


@dataclass(frozen=True)
class ResolvedCell:
    start_index: int
    end_index: int

    @property
    def content_index(self) -> int:
        """Insertion point: just past the cell's implicit empty paragraph."""
        return self.start_index + 1


@dataclass(frozen=True)
class ResolvedRow:
    start_index: int
    cells: tuple[ResolvedCell, ...]


@dataclass(frozen=True)
class ResolvedTable:
    """
    Table resolved from a fetched document (immutable).

    Attributes:
        start_index: Offset of the table element; table-level requests
            address the table by this index
        end_index: Offset just past the table
        rows: Rows in order

    Example:
        >>> table = ResolvedTable.from_element(element)
        >>> table.content_index(0, 0)
        table.rows[0].cells[0].start_index + 1
    """

    start_index: int
    end_index: int
    rows: tuple[ResolvedRow, ...]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return max((len(r.cells) for r in self.rows), default=0)

    def cell(self, row: int, col: int) -> ResolvedCell:
        """
        Resolved cell at row/col.

        Raises:
            DocumentStateError: If the cell does not exist
        """
        if not 0 <= row < len(self.rows):
            raise DocumentStateError(f"Row {row} not in table at {self.start_index}")
        cells = self.rows[row].cells
        if not 0 <= col < len(cells):
            raise DocumentStateError(
                f"Column {col} not in row {row} of table at {self.start_index}"
            )
        return cells[col]

    def cell_start(self, row: int, col: int) -> int:
        return self.cell(row, col).start_index

    def content_index(self, row: int, col: int) -> int:
        return self.cell(row, col).content_index

    def require_shape(self, rows: int, columns: int) -> None:
        """
        Check the table has the shape that was inserted.

        Raises:
            DocumentStateError: On mismatch
        """
        if self.row_count != rows or any(len(r.cells) != columns for r in self.rows):
            raise DocumentStateError(
                f"Table at {self.start_index} is {self.row_count}x{self.column_count}, "
                f"expected {rows}x{columns}"
            )

    @classmethod
    def from_element(cls, element: dict[str, Any]) -> ResolvedTable:
        """
        Parse a structural element holding a table.

        Raises:
            DocumentStateError: If the element is not a table or lacks offsets
        """
        table = element.get("table")
        if table is None:
            raise DocumentStateError("Structural element is not a table")
        if "startIndex" not in element:
            raise DocumentStateError("Table element has no startIndex")

        rows = []
        for row_index, raw_row in enumerate(table.get("tableRows") or []):
            cells = []
            for col_index, raw_cell in enumerate(raw_row.get("tableCells") or []):
                if "startIndex" not in raw_cell:
                    raise DocumentStateError(
                        f"Cell ({row_index}, {col_index}) has no startIndex"
                    )
                cells.append(ResolvedCell(
                    start_index=raw_cell["startIndex"],
                    end_index=raw_cell.get("endIndex", raw_cell["startIndex"]),
                ))
            rows.append(ResolvedRow(
                start_index=raw_row.get("startIndex", cells[0].start_index if cells else 0),
                cells=tuple(cells),
            ))

        return cls(
            start_index=element["startIndex"],
            end_index=element.get("endIndex", element["startIndex"]),
            rows=tuple(rows),
        )
