"""
Module: exporter.operations.models

Purpose:
    The edit-operation vocabulary sent to the remote document service.
    Every operation is an immutable value that serializes itself to one
    Google Docs ``batchUpdate`` request.

Key Classes:
    - RgbColor, TextStyle, BorderStyle, CellStyle: Style values
    - EditOperation: Base class of all operations
    - InsertText, UpdateTextStyle, UpdateParagraphStyle,
      CreateParagraphBullets: Text-range operations
    - InsertTable, MergeTableCells, UpdateTableColumnProperties,
      UpdateTableRowStyle, UpdateTableCellStyle: Table operations
    - InsertPageBreak, CreateFooter, InsertInlineImage,
      UpdateDocumentStyle: Document-level operations

Key Functions:
    - text_length(): Length of text in the service's index units

Dependencies:
    - dataclasses (std)

Used By:
    - exporter.operations.*: Request builders
    - exporter.document.service: Serialization before sending
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

PT = "PT"
CHECKBOX_PRESET = "BULLET_CHECKBOX"


def text_length(text: str) -> int:
    """
    Length of `text` in UTF-16 code units.

    Document indices count UTF-16 code units, so characters outside the
    Basic Multilingual Plane (most emoji) take two positions.

    Example:
        >>> text_length("ok")
        2
        >>> text_length("👥")
        2
    """
    return len(text.encode("utf-16-le")) // 2


def _dimension(magnitude: float) -> dict[str, Any]:
    return {"magnitude": magnitude, "unit": PT}


@dataclass(frozen=True)
class RgbColor:
    """Colour with float channels in [0, 1]."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    @classmethod
    def from_hex(cls, value: str) -> RgbColor:
        """
        Parse "#RGB" or "#RRGGBB".

        Raises:
            ValueError: If the string is not a hex colour
        """
        clean = value[1:] if value.startswith("#") else value
        clean = clean.upper()
        if len(clean) == 3:
            clean = "".join(ch * 2 for ch in clean)
        if len(clean) != 6 or any(ch not in "0123456789ABCDEF" for ch in clean):
            raise ValueError(f"Invalid hex color: {value!r}")
        return cls(
            red=int(clean[0:2], 16) / 255.0,
            green=int(clean[2:4], 16) / 255.0,
            blue=int(clean[4:6], 16) / 255.0,
        )

    def to_dict(self) -> dict[str, float]:
        return {"red": self.red, "green": self.green, "blue": self.blue}

    def to_color(self) -> dict[str, Any]:
        """OptionalColor wrapper used by text and cell styles."""
        return {"color": {"rgbColor": self.to_dict()}}


BLACK = RgbColor(0.0, 0.0, 0.0)
WHITE = RgbColor(1.0, 1.0, 1.0)


@dataclass(frozen=True)
class TextStyle:
    """
    Character style. Only fields that are set are sent.

    Attributes:
        bold, italic, underline: Flags
        font_size: Size in points
        color: Foreground colour
        link: Hyperlink URL
    """

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    font_size: Optional[float] = None
    color: Optional[RgbColor] = None
    link: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        style: dict[str, Any] = {}
        if self.bold is not None:
            style["bold"] = self.bold
        if self.italic is not None:
            style["italic"] = self.italic
        if self.underline is not None:
            style["underline"] = self.underline
        if self.font_size is not None:
            style["fontSize"] = _dimension(self.font_size)
        if self.color is not None:
            style["foregroundColor"] = self.color.to_color()
        if self.link is not None:
            style["link"] = {"url": self.link}
        return style

    @property
    def is_empty(self) -> bool:
        return not self.to_dict()


@dataclass(frozen=True)
class BorderStyle:
    width: float = 1.0
    color: RgbColor = BLACK
    dash_style: str = "SOLID"

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": _dimension(self.width),
            "dashStyle": self.dash_style,
            "color": self.color.to_color(),
        }


HIDDEN_BORDER = BorderStyle(width=0.0, color=WHITE)


@dataclass(frozen=True)
class CellStyle:
    """
    Table cell style. Only fields that are set are sent.

    Attributes:
        background: Background fill
        border: Applied to all four sides
        padding_vertical: Top/bottom padding
        padding_horizontal: Left/right padding
        content_alignment: TOP, MIDDLE or BOTTOM
    """

    background: Optional[RgbColor] = None
    border: Optional[BorderStyle] = None
    padding_vertical: Optional[float] = None
    padding_horizontal: Optional[float] = None
    content_alignment: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        style: dict[str, Any] = {}
        if self.background is not None:
            style["backgroundColor"] = self.background.to_color()
        if self.padding_vertical is not None:
            style["paddingTop"] = _dimension(self.padding_vertical)
            style["paddingBottom"] = _dimension(self.padding_vertical)
        if self.padding_horizontal is not None:
            style["paddingLeft"] = _dimension(self.padding_horizontal)
            style["paddingRight"] = _dimension(self.padding_horizontal)
        if self.border is not None:
            border = self.border.to_dict()
            for side in ("borderTop", "borderBottom", "borderLeft", "borderRight"):
                style[side] = border
        if self.content_alignment is not None:
            style["contentAlignment"] = self.content_alignment
        return style


HIDDEN_CELL_STYLE = CellStyle(background=WHITE, border=HIDDEN_BORDER)


def _table_cell_location(table_start: int, row: int, col: int) -> dict[str, Any]:
    return {
        "tableStartLocation": {"index": table_start},
        "rowIndex": row,
        "columnIndex": col,
    }


class EditOperation(ABC):
    """One instruction of a batch, applied in order by the service."""

    kind: ClassVar[str]

    @abstractmethod
    def to_request(self) -> dict[str, Any]:
        """Serialize to a single batchUpdate request."""


class RangeOperation(EditOperation):
    """Operation over a text range [start, end)."""

    start: int
    end: int


@dataclass(frozen=True)
class InsertText(EditOperation):
    """
    Insert text at an index, or at the end of a segment when index is None.

    Example:
        >>> InsertText("Hi", index=5).to_request()
        {'insertText': {'text': 'Hi', 'location': {'index': 5}}}
    """

    kind: ClassVar[str] = "insertText"

    text: str
    index: Optional[int] = None
    segment_id: str = ""

    @property
    def end(self) -> int:
        if self.index is None:
            raise ValueError("End-of-segment insert has no resolved index")
        return self.index + text_length(self.text)

    def to_request(self) -> dict[str, Any]:
        if self.index is None:
            return {"insertText": {
                "text": self.text,
                "endOfSegmentLocation": {"segmentId": self.segment_id},
            }}
        location: dict[str, Any] = {"index": self.index}
        if self.segment_id:
            location["segmentId"] = self.segment_id
        return {"insertText": {"text": self.text, "location": location}}


@dataclass(frozen=True)
class UpdateTextStyle(RangeOperation):
    kind: ClassVar[str] = "updateTextStyle"

    start: int
    end: int
    style: TextStyle

    def to_request(self) -> dict[str, Any]:
        style = self.style.to_dict()
        return {"updateTextStyle": {
            "range": {"startIndex": self.start, "endIndex": self.end},
            "textStyle": style,
            "fields": ",".join(style.keys()),
        }}


@dataclass(frozen=True)
class UpdateParagraphStyle(RangeOperation):
    kind: ClassVar[str] = "updateParagraphStyle"

    start: int
    end: int
    alignment: Optional[str] = None
    indent_start: Optional[float] = None
    indent_first_line: Optional[float] = None
    segment_id: str = ""

    def to_request(self) -> dict[str, Any]:
        style: dict[str, Any] = {}
        if self.alignment is not None:
            style["alignment"] = self.alignment
        if self.indent_start is not None:
            style["indentStart"] = _dimension(self.indent_start)
        if self.indent_first_line is not None:
            style["indentFirstLine"] = _dimension(self.indent_first_line)

        text_range: dict[str, Any] = {"startIndex": self.start, "endIndex": self.end}
        if self.segment_id:
            text_range["segmentId"] = self.segment_id

        return {"updateParagraphStyle": {
            "range": text_range,
            "paragraphStyle": style,
            "fields": ",".join(style.keys()),
        }}


@dataclass(frozen=True)
class CreateParagraphBullets(RangeOperation):
    kind: ClassVar[str] = "createParagraphBullets"

    start: int
    end: int
    preset: str = CHECKBOX_PRESET

    def to_request(self) -> dict[str, Any]:
        return {"createParagraphBullets": {
            "range": {"startIndex": self.start, "endIndex": self.end},
            "bulletPreset": self.preset,
        }}


@dataclass(frozen=True)
class InsertTable(EditOperation):
    """Empty table appended at the end of the body."""

    kind: ClassVar[str] = "insertTable"

    rows: int
    columns: int

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.columns <= 0:
            raise ValueError(f"Table must have rows and columns: {self.rows}x{self.columns}")

    def to_request(self) -> dict[str, Any]:
        return {"insertTable": {
            "rows": self.rows,
            "columns": self.columns,
            "endOfSegmentLocation": {"segmentId": ""},
        }}


@dataclass(frozen=True)
class MergeTableCells(EditOperation):
    kind: ClassVar[str] = "mergeTableCells"

    table_start: int
    row: int
    col: int
    row_span: int = 1
    col_span: int = 1

    def to_request(self) -> dict[str, Any]:
        return {"mergeTableCells": {"tableRange": {
            "tableCellLocation": _table_cell_location(self.table_start, self.row, self.col),
            "rowSpan": self.row_span,
            "columnSpan": self.col_span,
        }}}


@dataclass(frozen=True)
class UpdateTableColumnProperties(EditOperation):
    kind: ClassVar[str] = "updateTableColumnProperties"

    table_start: int
    column: int
    width: float

    def to_request(self) -> dict[str, Any]:
        return {"updateTableColumnProperties": {
            "tableStartLocation": {"index": self.table_start},
            "columnIndices": [self.column],
            "tableColumnProperties": {
                "widthType": "FIXED_WIDTH",
                "width": _dimension(self.width),
            },
            "fields": "width,widthType",
        }}


@dataclass(frozen=True)
class UpdateTableRowStyle(EditOperation):
    """Minimum row height; applies to every row when `rows` is empty."""

    kind: ClassVar[str] = "updateTableRowStyle"

    table_start: int
    min_height: float
    rows: tuple[int, ...] = ()

    def to_request(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "tableStartLocation": {"index": self.table_start},
            "tableRowStyle": {"minRowHeight": _dimension(self.min_height)},
            "fields": "minRowHeight",
        }
        if self.rows:
            body["rowIndices"] = list(self.rows)
        return {"updateTableRowStyle": body}


@dataclass(frozen=True)
class UpdateTableCellStyle(EditOperation):
    kind: ClassVar[str] = "updateTableCellStyle"

    table_start: int
    row: int
    col: int
    style: CellStyle
    row_span: int = 1
    col_span: int = 1

    def to_request(self) -> dict[str, Any]:
        style = self.style.to_dict()
        return {"updateTableCellStyle": {
            "tableRange": {
                "tableCellLocation": _table_cell_location(self.table_start, self.row, self.col),
                "rowSpan": self.row_span,
                "columnSpan": self.col_span,
            },
            "tableCellStyle": style,
            "fields": ",".join(style.keys()),
        }}


@dataclass(frozen=True)
class InsertPageBreak(EditOperation):
    kind: ClassVar[str] = "insertPageBreak"

    def to_request(self) -> dict[str, Any]:
        return {"insertPageBreak": {"endOfSegmentLocation": {"segmentId": ""}}}


@dataclass(frozen=True)
class CreateFooter(EditOperation):
    """Creates the default footer; the reply carries its segment id."""

    kind: ClassVar[str] = "createFooter"

    def to_request(self) -> dict[str, Any]:
        return {"createFooter": {"type": "DEFAULT"}}


@dataclass(frozen=True)
class InsertInlineImage(EditOperation):
    kind: ClassVar[str] = "insertInlineImage"

    uri: str
    width: float
    segment_id: str = ""

    def to_request(self) -> dict[str, Any]:
        return {"insertInlineImage": {
            "uri": self.uri,
            "endOfSegmentLocation": {"segmentId": self.segment_id},
            "objectSize": {"width": _dimension(self.width)},
        }}


@dataclass(frozen=True)
class UpdateDocumentStyle(EditOperation):
    """Page margins and, optionally, page size."""

    kind: ClassVar[str] = "updateDocumentStyle"

    margin_top: float
    margin_bottom: float
    margin_left: float
    margin_right: float
    page_width: Optional[float] = None
    page_height: Optional[float] = None

    def to_request(self) -> dict[str, Any]:
        style: dict[str, Any] = {
            "marginTop": _dimension(self.margin_top),
            "marginBottom": _dimension(self.margin_bottom),
            "marginLeft": _dimension(self.margin_left),
            "marginRight": _dimension(self.margin_right),
        }
        if self.page_width is not None and self.page_height is not None:
            style["pageSize"] = {
                "width": _dimension(self.page_width),
                "height": _dimension(self.page_height),
            }
        return {"updateDocumentStyle": {
            "documentStyle": style,
            "fields": ",".join(style.keys()),
        }}


def serialize_operations(operations: list[EditOperation]) -> list[dict[str, Any]]:
    """Serialize a batch, preserving order."""
    return [op.to_request() for op in operations]

