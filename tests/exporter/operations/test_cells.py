"""
Unit tests for index-safe cell write emission.
"""

import pytest

from printables_toolkit.exporter.operations import chunk_operations
from printables_toolkit.exporter.operations.cells import (
    CellWrite,
    TextRun,
    emit_cell_writes,
    order_cell_writes,
)
from printables_toolkit.exporter.operations.models import (
    CreateParagraphBullets,
    InsertText,
    RangeOperation,
    TextStyle,
    UpdateParagraphStyle,
    UpdateTextStyle,
    text_length,
)


def _write(index: int, *texts: str) -> CellWrite:
    return CellWrite(target_index=index, row=0, col=0, runs=tuple(TextRun(t) for t in texts))


class TestOrdering:
    def test_order_when_mixed_then_descending(self):
        writes = [_write(10, "a"), _write(30, "b"), _write(20, "c")]

        assert [w.target_index for w in order_cell_writes(writes)] == [30, 20, 10]

    def test_order_when_equal_indices_then_stable(self):
        first, second = _write(10, "a"), _write(10, "b")

        assert order_cell_writes([first, second]) == [first, second]

    def test_emit_when_several_cells_then_inserts_descending(self):
        ops = emit_cell_writes([_write(5, "x"), _write(50, "y"), _write(25, "z")])

        inserts = [op for op in ops if isinstance(op, InsertText)]
        assert [op.index for op in inserts] == [50, 25, 5]


class TestRuns:
    def test_emit_when_runs_then_cursor_advances_forward(self):
        ops = emit_cell_writes([_write(100, "ab", "👤", "c")])

        assert [(op.text, op.index) for op in ops] == [("ab", 100), ("👤", 102), ("c", 104)]

    def test_emit_when_empty_run_then_skipped(self):
        ops = emit_cell_writes([_write(100, "", "x")])

        assert [(op.text, op.index) for op in ops] == [("x", 100)]

    def test_emit_when_styled_run_then_follow_ups_cover_insert(self):
        run = TextRun(
            "Name 🗓️",
            style=TextStyle(bold=True),
            checkbox=True,
            alignment="CENTER",
        )

        ops = emit_cell_writes([CellWrite(target_index=7, row=1, col=1, runs=(run,))])

        assert [type(op) for op in ops] == [
            InsertText, UpdateTextStyle, CreateParagraphBullets, UpdateParagraphStyle,
        ]
        end = 7 + text_length("Name 🗓️")
        assert all((op.start, op.end) == (7, end) for op in ops[1:])

    def test_emit_when_any_writes_then_every_range_matches_preceding_insert(self):
        writes = [
            CellWrite(10, 0, 0, (TextRun("Start!\n\n⮕", style=TextStyle(bold=True), alignment="CENTER"),)),
            CellWrite(40, 0, 1, (
                TextRun("Sep 5\n\n", style=TextStyle(font_size=10)),
                TextRun("Quiz\n", style=TextStyle(bold=True), checkbox=True, indent_start=15),
                TextRun("\n"),
                TextRun("Must Do", style=TextStyle(bold=True)),
                TextRun(" "),
                TextRun("👥+", style=TextStyle(font_size=11)),
            )),
        ]

        last_insert = None
        for op in emit_cell_writes(writes):
            if isinstance(op, InsertText):
                last_insert = op
            else:
                assert isinstance(op, RangeOperation)
                assert (op.start, op.end) == (last_insert.index, last_insert.end)

    def test_emit_when_unstyled_run_then_insert_only(self):
        ops = emit_cell_writes([_write(3, " ")])

        assert len(ops) == 1


class TestChunking:
    def test_chunk_when_longer_than_size_then_consecutive_batches(self):
        ops = emit_cell_writes([_write(i * 10, "x") for i in range(1, 8)])

        batches = chunk_operations(ops, 3)

        assert [len(b) for b in batches] == [3, 3, 1]
        assert [op for b in batches for op in b] == ops

    def test_chunk_when_empty_then_no_batches(self):
        assert chunk_operations([], 40) == []

    def test_chunk_when_size_zero_then_raises(self):
        with pytest.raises(ValueError):
            chunk_operations([], 0)
