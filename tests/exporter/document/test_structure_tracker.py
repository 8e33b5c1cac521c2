"""
Unit tests for resolved table structure and index discovery.
"""

import pytest

from printables_toolkit.exporter.document import DocumentStateTracker
from printables_toolkit.exporter.document.structure import DocumentStateError, ResolvedTable
from printables_toolkit.exporter.document.tracker import count_tables, find_last_table
from printables_toolkit.exporter.operations.models import InsertTable, InsertText


def _table_element(start: int = 10) -> dict:
    return {
        "startIndex": start,
        "endIndex": start + 9,
        "table": {
            "rows": 2,
            "columns": 2,
            "tableRows": [
                {"startIndex": start + 1, "tableCells": [
                    {"startIndex": start + 2, "endIndex": start + 4},
                    {"startIndex": start + 4, "endIndex": start + 6},
                ]},
                {"startIndex": start + 6, "tableCells": [
                    {"startIndex": start + 7},
                    {"startIndex": start + 8, "endIndex": start + 9},
                ]},
            ],
        },
    }


class TestResolvedTable:
    def test_from_element_when_table_then_offsets_parsed(self):
        table = ResolvedTable.from_element(_table_element(10))

        assert table.start_index == 10
        assert (table.row_count, table.column_count) == (2, 2)
        assert table.cell_start(1, 1) == 18
        assert table.content_index(0, 1) == 15

    def test_from_element_when_cell_has_no_end_then_start_used(self):
        table = ResolvedTable.from_element(_table_element(10))

        assert table.cell(1, 0).end_index == 17

    def test_from_element_when_paragraph_then_raises(self):
        with pytest.raises(DocumentStateError):
            ResolvedTable.from_element({"startIndex": 1, "paragraph": {}})

    def test_from_element_when_cell_missing_start_then_raises(self):
        element = _table_element()
        del element["table"]["tableRows"][0]["tableCells"][1]["startIndex"]

        with pytest.raises(DocumentStateError, match=r"\(0, 1\)"):
            ResolvedTable.from_element(element)

    def test_cell_when_out_of_range_then_raises(self):
        table = ResolvedTable.from_element(_table_element())

        with pytest.raises(DocumentStateError):
            table.cell(2, 0)
        with pytest.raises(DocumentStateError):
            table.cell(0, 5)

    def test_require_shape_when_matches_then_passes(self):
        ResolvedTable.from_element(_table_element()).require_shape(2, 2)

    def test_require_shape_when_mismatch_then_raises(self):
        with pytest.raises(DocumentStateError, match="expected 3x2"):
            ResolvedTable.from_element(_table_element()).require_shape(3, 2)


class TestBodyScan:
    def test_find_last_table_when_several_then_last(self):
        document = {"body": {"content": [
            {"startIndex": 1, "paragraph": {}},
            _table_element(10),
            {"startIndex": 19, "paragraph": {}},
            _table_element(40),
            {"startIndex": 49, "paragraph": {}},
        ]}}

        assert find_last_table(document)["startIndex"] == 40
        assert count_tables(document) == 2

    def test_find_last_table_when_empty_body_then_none(self):
        assert find_last_table({}) is None
        assert count_tables({"body": {}}) == 0


class TestTracker:
    def test_resolve_new_when_table_inserted_then_resolved_after_body_text(self, fake_service):
        # Arrange
        doc_id = fake_service.create_document("Doc")
        fake_service.batch_apply(doc_id, [InsertText("Title\n", index=1), InsertTable(rows=2, columns=3)])
        tracker = DocumentStateTracker(fake_service, doc_id)

        # Act
        table = tracker.resolve_new_table(rows=2, columns=3)

        # Assert
        assert table.start_index == 1 + len("Title\n\n")
        assert table.content_index(0, 0) == table.start_index + 3
        assert tracker.known_tables == 1

    def test_resolve_new_when_second_table_then_later_offset(self, fake_service):
        doc_id = fake_service.create_document("Doc")
        tracker = DocumentStateTracker(fake_service, doc_id)
        fake_service.batch_apply(doc_id, [InsertTable(rows=1, columns=1)])
        first = tracker.resolve_new_table()

        fake_service.batch_apply(doc_id, [InsertTable(rows=1, columns=1)])
        second = tracker.resolve_new_table()

        assert second.start_index > first.end_index
        assert tracker.known_tables == 2

    def test_resolve_new_when_no_table_then_raises(self, fake_service):
        doc_id = fake_service.create_document("Doc")
        tracker = DocumentStateTracker(fake_service, doc_id)

        with pytest.raises(DocumentStateError, match="No table"):
            tracker.resolve_new_table()

    def test_resolve_new_when_insert_dropped_then_raises(self, fake_service):
        doc_id = fake_service.create_document("Doc")
        tracker = DocumentStateTracker(fake_service, doc_id)
        fake_service.batch_apply(doc_id, [InsertTable(rows=1, columns=1)])
        tracker.resolve_new_table()

        # No new table committed since the last resolution
        with pytest.raises(DocumentStateError, match="Expected 2 tables"):
            tracker.resolve_new_table()

    def test_resolve_new_when_shape_wrong_then_raises(self, fake_service):
        doc_id = fake_service.create_document("Doc")
        fake_service.batch_apply(doc_id, [InsertTable(rows=2, columns=2)])

        with pytest.raises(DocumentStateError):
            DocumentStateTracker(fake_service, doc_id).resolve_new_table(rows=3, columns=2)

    def test_refresh_when_unchanged_then_same_start_and_refetched(self, fake_service):
        doc_id = fake_service.create_document("Doc")
        fake_service.batch_apply(doc_id, [InsertTable(rows=1, columns=2)])
        tracker = DocumentStateTracker(fake_service, doc_id)
        table = tracker.resolve_new_table()
        fetches = fake_service.fetch_count

        refreshed = tracker.refresh(table)

        assert refreshed.start_index == table.start_index
        assert fake_service.fetch_count == fetches + 1

    def test_refresh_when_table_moved_then_raises(self, fake_service):
        doc_id = fake_service.create_document("Doc")
        fake_service.batch_apply(doc_id, [InsertTable(rows=1, columns=2)])
        tracker = DocumentStateTracker(fake_service, doc_id)
        table = tracker.resolve_new_table()

        fake_service.batch_apply(doc_id, [InsertText("Moved\n", index=1)])

        with pytest.raises(DocumentStateError, match="moved"):
            tracker.refresh(table)
