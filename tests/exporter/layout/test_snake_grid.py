"""
Unit tests for the snake grid layout engine.
"""

import pytest

from printables_toolkit.core.models import ActivityItem, EndItem, LessonItem, StartItem
from printables_toolkit.exporter.layout import (
    connector_column,
    is_reverse_flow,
    paginate_game_board_items,
    place_snake_grid,
    prepare_game_board_items,
    snake_row_count,
)


@pytest.fixture
def path_items(make_lesson):
    """Start, 3 lessons of 5 activities, end: 20 squares."""
    lessons = [make_lesson(activity_count=5, number=n) for n in (1, 2, 3)]
    return prepare_game_board_items(lessons)


class TestPrepareItems:
    def test_prepare_when_lessons_then_start_dividers_activities_end(self, make_lesson):
        lessons = [make_lesson(activity_count=2, number=1), make_lesson(activity_count=0, number=2)]

        items = prepare_game_board_items(lessons)

        assert [type(i) for i in items] == [
            StartItem, LessonItem, ActivityItem, ActivityItem, LessonItem, EndItem,
        ]
        assert items[-1].is_last_page

    def test_prepare_when_no_lessons_then_start_and_end(self):
        assert prepare_game_board_items([]) == [StartItem(), EndItem()]


class TestPaginate:
    def test_paginate_when_fits_then_single_page(self, path_items):
        pages = paginate_game_board_items(path_items[:10], items_per_page=15)

        assert len(pages) == 1
        assert list(pages[0]) == path_items[:10]

    def test_paginate_when_overflow_then_continuation_ends(self, path_items):
        pages = paginate_game_board_items(path_items, items_per_page=15)

        assert [len(p) for p in pages] == [15, 6]
        assert pages[0][-1] == EndItem(is_last_page=False, page_number=2)
        assert pages[-1][-1] == EndItem(is_last_page=True)

    @pytest.mark.parametrize("size", [2, 3, 7, 15, 19, 20, 21])
    def test_paginate_when_any_size_then_sequence_reconstructed(self, path_items, size):
        pages = paginate_game_board_items(path_items, items_per_page=size)

        assert all(len(p) <= size for p in pages)
        assert all(isinstance(p[-1], EndItem) for p in pages)
        for number, page in enumerate(pages[:-1], start=1):
            assert page[-1].page_number == number + 1

        rebuilt = [
            item for page in pages for item in page
            if not (isinstance(item, EndItem) and item.is_continuation)
        ]
        assert rebuilt == path_items

    def test_paginate_when_size_below_two_then_raises(self, path_items):
        with pytest.raises(ValueError):
            paginate_game_board_items(path_items, items_per_page=1)


class TestDirection:
    @pytest.mark.parametrize("row,reverse", [(0, False), (1, False), (2, True), (3, True), (4, False)])
    def test_reverse_flow_when_row_then_by_row_group(self, row, reverse):
        assert is_reverse_flow(row) is reverse

    def test_connector_when_forward_group_then_last_column(self):
        assert connector_column(1, 7) == 6

    def test_connector_when_reverse_group_then_first_column(self):
        assert connector_column(3, 7) == 0


class TestPlaceSnakeGrid:
    @pytest.mark.parametrize("count,rows", [(1, 1), (7, 1), (8, 2), (9, 3), (15, 3), (16, 4), (17, 5)])
    def test_row_count_when_items_then_exact(self, count, rows):
        assert snake_row_count(count, 7) == rows

    def test_place_when_full_page_then_snake_path(self, path_items):
        page = path_items[:15]

        placement = place_snake_grid(page, columns=7)

        positions = [(c.row, c.col) for c in placement.cells]
        assert positions[:7] == [(0, c) for c in range(7)]
        assert positions[7] == (1, 6)
        assert positions[8:] == [(2, c) for c in range(6, -1, -1)]
        assert [c.item for c in placement.cells] == page

    def test_place_when_second_group_then_connector_at_zero(self, path_items):
        placement = place_snake_grid(path_items[:17], columns=7)

        assert placement.rows == 5
        assert (placement.cells[15].row, placement.cells[15].col) == (3, 0)
        assert (placement.cells[16].row, placement.cells[16].col) == (4, 0)

    def test_place_when_partial_then_empty_cells_fill_grid(self, path_items):
        placement = place_snake_grid(path_items[:9], columns=7)

        assert placement.rows * placement.columns == placement.item_count + len(placement.empty_cells)
        assert (1, 0) in placement.empty_cells
        assert placement.cell_at(2, 6).item == path_items[8]
        assert placement.cell_at(2, 0) is None

    def test_place_when_connector_then_flagged(self, path_items):
        placement = place_snake_grid(path_items[:9], columns=7)

        assert [c.is_connector for c in placement.cells].count(True) == 1
