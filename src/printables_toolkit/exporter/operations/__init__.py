"""
Module: exporter.operations

Purpose:
    Edit-operation vocabulary and the index-safe emission of cell writes.
    The checklist, game board, header and footer builders live in
    submodules and are imported directly by the controller.
"""

from .batching import chunk_operations
from .cells import CellWrite, TextRun, emit_cell_writes, order_cell_writes, run_operations
from .models import (
    BLACK,
    WHITE,
    BorderStyle,
    CellStyle,
    CreateFooter,
    CreateParagraphBullets,
    EditOperation,
    InsertInlineImage,
    InsertPageBreak,
    InsertTable,
    InsertText,
    MergeTableCells,
    RgbColor,
    TextStyle,
    UpdateDocumentStyle,
    UpdateParagraphStyle,
    UpdateTableCellStyle,
    UpdateTableColumnProperties,
    UpdateTableRowStyle,
    UpdateTextStyle,
    serialize_operations,
    text_length,
)

__all__ = [
    "chunk_operations",
    "CellWrite",
    "TextRun",
    "emit_cell_writes",
    "order_cell_writes",
    "run_operations",
    "BLACK",
    "WHITE",
    "BorderStyle",
    "CellStyle",
    "CreateFooter",
    "CreateParagraphBullets",
    "EditOperation",
    "InsertInlineImage",
    "InsertPageBreak",
    "InsertTable",
    "InsertText",
    "MergeTableCells",
    "RgbColor",
    "TextStyle",
    "UpdateDocumentStyle",
    "UpdateParagraphStyle",
    "UpdateTableCellStyle",
    "UpdateTableColumnProperties",
    "UpdateTableRowStyle",
    "UpdateTextStyle",
    "serialize_operations",
    "text_length",
]
