import pytest
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

# Add src to sys.path so we can import printables_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from printables_toolkit.core.models import (
    Activity,
    ActivityType,
    ClassActivity,
    Classification,
    Lesson,
    Resource,
    Workstyle,
)
from printables_toolkit.exporter.config import ExportConfig
from printables_toolkit.exporter.document.service import DocumentService, DocumentServiceError
from printables_toolkit.exporter.operations.models import (
    CreateFooter,
    CreateParagraphBullets,
    EditOperation,
    InsertInlineImage,
    InsertPageBreak,
    InsertTable,
    InsertText,
    MergeTableCells,
    UpdateDocumentStyle,
    UpdateParagraphStyle,
    UpdateTableCellStyle,
    UpdateTableColumnProperties,
    UpdateTableRowStyle,
    UpdateTextStyle,
    text_length,
)


# ─────────────────────────────────────────────────────────────────────────────
# In-memory document service
# ─────────────────────────────────────────────────────────────────────────────

def _insert_units(text: str, offset: int, new: str) -> str:
    """Insert `new` at a UTF-16 offset of `text`."""
    raw = text.encode("utf-16-le", "surrogatepass")
    raw = raw[: offset * 2] + new.encode("utf-16-le", "surrogatepass") + raw[offset * 2:]
    return raw.decode("utf-16-le", "surrogatepass")


class FakeTable:
    """Table whose cells each hold text ending in the implicit newline."""

    def __init__(self, rows: int, columns: int):
        self.rows = rows
        self.columns = columns
        self.cells = [["\n" for _ in range(columns)] for _ in range(rows)]
        self.cell_styles: dict[tuple[int, int], Any] = {}
        self.merges: list[MergeTableCells] = []
        self.column_widths: dict[int, float] = {}
        self.min_row_height: Optional[float] = None

    def text(self, row: int, col: int) -> str:
        return self.cells[row][col][:-1]

    @property
    def length(self) -> int:
        return 1 + sum(1 + sum(1 + text_length(cell) for cell in row) for row in self.cells)


class FakeDocument:
    """
    Body laid out like the remote service: indices start at 1, a table
    takes one index for itself, one per row, one per cell plus the cell's
    text, and every table is followed by a paragraph.
    """

    def __init__(self, document_id: str, title: str):
        self.document_id = document_id
        self.title = title
        self.blocks: list[Any] = ["\n"]
        self.footers: dict[str, list[str]] = {}
        self.document_style: Optional[UpdateDocumentStyle] = None
        self.range_operations: list[EditOperation] = []

    @property
    def tables(self) -> list[FakeTable]:
        return [b for b in self.blocks if isinstance(b, FakeTable)]

    @property
    def body_text(self) -> str:
        return "".join(b for b in self.blocks if isinstance(b, str))

    @property
    def end_index(self) -> int:
        return 1 + sum(b.length if isinstance(b, FakeTable) else text_length(b) for b in self.blocks)

    def _positions(self):
        index = 1
        for position, block in enumerate(self.blocks):
            yield position, index, block
            index += block.length if isinstance(block, FakeTable) else text_length(block)

    def _append_text(self, text: str) -> None:
        if isinstance(self.blocks[-1], str):
            # End-of-segment inserts land before the final newline
            last = self.blocks[-1]
            self.blocks[-1] = last[:-1] + text + last[-1]
        else:
            self.blocks.append(text + "\n")

    def _insert_at(self, index: int, text: str) -> None:
        for position, start, block in self._positions():
            if isinstance(block, str):
                if start <= index < start + text_length(block):
                    self.blocks[position] = _insert_units(block, index - start, text)
                    return
                continue

            row_start = start + 1
            for r, row in enumerate(block.cells):
                cell_start = row_start + 1
                for c, cell in enumerate(row):
                    content_start = cell_start + 1
                    if content_start <= index < content_start + text_length(cell):
                        block.cells[r][c] = _insert_units(cell, index - content_start, text)
                        return
                    cell_start = content_start + text_length(cell)
                row_start = cell_start

        raise DocumentServiceError(f"Invalid insertion index {index}", status=400)

    def _table_at(self, table_start: int) -> FakeTable:
        for _, start, block in self._positions():
            if isinstance(block, FakeTable) and start == table_start:
                return block
        raise DocumentServiceError(f"No table starts at index {table_start}", status=400)

    def _check_range(self, start: int, end: int, segment_id: str = "") -> None:
        if segment_id:
            if segment_id not in self.footers:
                raise DocumentServiceError(f"Unknown segment {segment_id}", status=400)
            return
        if not 1 <= start < end <= self.end_index:
            raise DocumentServiceError(f"Invalid range [{start}, {end})", status=400)

    def apply(self, op: EditOperation) -> dict[str, Any]:
        if isinstance(op, InsertText):
            if op.index is None:
                self._append_text(op.text)
            else:
                self._insert_at(op.index, op.text)
        elif isinstance(op, (UpdateTextStyle, CreateParagraphBullets)):
            self._check_range(op.start, op.end)
            self.range_operations.append(op)
        elif isinstance(op, UpdateParagraphStyle):
            self._check_range(op.start, op.end, op.segment_id)
            self.range_operations.append(op)
        elif isinstance(op, InsertTable):
            self.blocks.append(FakeTable(op.rows, op.columns))
            self.blocks.append("\n")
        elif isinstance(op, InsertPageBreak):
            self._append_text("\x0c")
        elif isinstance(op, MergeTableCells):
            self._table_at(op.table_start).merges.append(op)
        elif isinstance(op, UpdateTableColumnProperties):
            self._table_at(op.table_start).column_widths[op.column] = op.width
        elif isinstance(op, UpdateTableRowStyle):
            self._table_at(op.table_start).min_row_height = op.min_height
        elif isinstance(op, UpdateTableCellStyle):
            table = self._table_at(op.table_start)
            if not (0 <= op.row < table.rows and 0 <= op.col < table.columns):
                raise DocumentServiceError(f"Cell ({op.row}, {op.col}) out of range", status=400)
            table.cell_styles[(op.row, op.col)] = op.style
        elif isinstance(op, UpdateDocumentStyle):
            self.document_style = op
        elif isinstance(op, CreateFooter):
            footer_id = f"kix.footer{len(self.footers) + 1}"
            self.footers[footer_id] = []
            return {"createFooter": {"footerId": footer_id}}
        elif isinstance(op, InsertInlineImage):
            if op.segment_id not in self.footers:
                raise DocumentServiceError(f"Unknown segment {op.segment_id}", status=400)
            self.footers[op.segment_id].append(op.uri)
            return {"insertInlineImage": {"objectId": "kix.image1"}}
        else:
            raise DocumentServiceError(f"Unsupported request {op.kind}", status=400)
        return {}

    def to_dict(self) -> dict[str, Any]:
        content = []
        for _, start, block in self._positions():
            if isinstance(block, str):
                content.append({
                    "startIndex": start,
                    "endIndex": start + text_length(block),
                    "paragraph": {"elements": [{"textRun": {"content": block}}]},
                })
                continue

            rows = []
            row_start = start + 1
            for row in block.cells:
                cells = []
                cell_start = row_start + 1
                for cell in row:
                    cell_end = cell_start + 1 + text_length(cell)
                    cells.append({"startIndex": cell_start, "endIndex": cell_end, "content": []})
                    cell_start = cell_end
                rows.append({"startIndex": row_start, "endIndex": cell_start, "tableCells": cells})
                row_start = cell_start
            content.append({
                "startIndex": start,
                "endIndex": start + block.length,
                "table": {"rows": block.rows, "columns": block.columns, "tableRows": rows},
            })
        return {"documentId": self.document_id, "title": self.title, "body": {"content": content}}


class FakeDocumentService(DocumentService):
    """
    In-memory stand-in for the remote service.

    Args:
        fail_on_batch: 1-based batch number that raises DocumentServiceError
        drop_tables: Accept InsertTable without creating a table
    """

    def __init__(self, fail_on_batch: Optional[int] = None, drop_tables: bool = False):
        self.documents: dict[str, FakeDocument] = {}
        self.batches: list[tuple[str, list[EditOperation]]] = []
        self.fetch_count = 0
        self.fail_on_batch = fail_on_batch
        self.drop_tables = drop_tables

    def create_document(self, name: str) -> str:
        document_id = f"doc-{len(self.documents) + 1}"
        self.documents[document_id] = FakeDocument(document_id, name)
        return document_id

    def batch_apply(self, document_id: str, operations: Sequence[EditOperation]) -> list[dict[str, Any]]:
        self.batches.append((document_id, list(operations)))
        if self.fail_on_batch is not None and len(self.batches) == self.fail_on_batch:
            raise DocumentServiceError("Backend error", status=500)
        document = self.documents[document_id]
        replies = []
        for op in operations:
            if self.drop_tables and isinstance(op, InsertTable):
                replies.append({})
                continue
            replies.append(document.apply(op))
        return replies

    def fetch_document(self, document_id: str) -> dict[str, Any]:
        self.fetch_count += 1
        return self.documents[document_id].to_dict()

    def document_url(self, document_id: str) -> str:
        return f"https://docs.google.com/document/d/{document_id}/edit"

    @property
    def document(self) -> FakeDocument:
        """The only document created (most tests create one)."""
        assert len(self.documents) == 1
        return next(iter(self.documents.values()))

    @property
    def all_operations(self) -> list[EditOperation]:
        return [op for _, batch in self.batches for op in batch]


# ─────────────────────────────────────────────────────────────────────────────
# Common test fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def fake_service():
    """Fresh in-memory document service."""
    return FakeDocumentService()


@pytest.fixture
def make_service():
    """Factory for in-memory services with failure injection."""
    def _create(**kwargs) -> FakeDocumentService:
        return FakeDocumentService(**kwargs)
    return _create


@pytest.fixture
def make_activity():
    """Factory to create activities."""
    def _create(
        name: str = "Warm Up",
        activity_id: Optional[str] = None,
        classification: Classification = Classification.MUST_DO,
        due_date: Optional[str] = None,
        activity_type: Optional[ActivityType] = None,
        workstyle: Workstyle = Workstyle.INDEPENDENT,
        url: Optional[str] = None,
    ) -> Activity:
        activity_id = activity_id or name.lower().replace(" ", "-")
        class_activities = ()
        if due_date is not None:
            class_activities = (ClassActivity(activity_id=activity_id, class_id="c1", due_date=due_date),)
        resources = ()
        if url is not None:
            resources = (Resource(id="r1", name="Video", url=url),)
        return Activity(
            id=activity_id,
            name=name,
            classification=classification,
            type=activity_type,
            workstyle=workstyle,
            resources=resources,
            class_activities=class_activities,
        )
    return _create


@pytest.fixture
def make_lesson(make_activity):
    """Factory to create a lesson with `activity_count` generated activities."""
    def _create(
        activity_count: int = 2,
        number: int = 1,
        name: Optional[str] = None,
        learning_target: str = "",
        activities: Optional[Sequence[Activity]] = None,
    ) -> Lesson:
        if activities is None:
            activities = [
                make_activity(name=f"Activity {number}.{i + 1}")
                for i in range(activity_count)
            ]
        return Lesson(
            id=f"lesson-{number}",
            name=name or f"Lesson {number} Title",
            learning_target=learning_target,
            lesson_number=str(number),
            activities=tuple(activities),
        )
    return _create


@pytest.fixture
def export_config():
    """Factory to create export configs with test names."""
    def _create(**overrides) -> ExportConfig:
        values = dict(course_name="Algebra 1", section_name="Section A", unit_name="Unit 2")
        values.update(overrides)
        return ExportConfig(**values)
    return _create
