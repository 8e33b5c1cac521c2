"""
Unit tests for checklist page-break estimation.
"""

import pytest

from printables_toolkit.exporter.layout import (
    ChecklistPageConfig,
    PageTracker,
    estimate_table_height,
    plan_checklist_pages,
    should_insert_page_break,
    table_row_count,
)


class TestEstimateTableHeight:
    def test_estimate_when_two_activities_with_sign_off_then_five_rows(self, make_lesson):
        lesson = make_lesson(activity_count=2)

        assert table_row_count(lesson, sign_off=True) == 5
        assert estimate_table_height(lesson, sign_off=True) == 5 * 30 + 20

    def test_estimate_when_no_activities_without_sign_off_then_fixed_rows(self, make_lesson):
        lesson = make_lesson(activity_count=0)

        assert estimate_table_height(lesson, sign_off=False) == 2 * 30 + 20

    def test_estimate_when_called_twice_then_same_result(self, make_lesson):
        lesson = make_lesson(activity_count=4)

        first = estimate_table_height(lesson, True)
        should_insert_page_break(500, 100, False)
        assert estimate_table_height(lesson, True) == first


class TestShouldInsertPageBreak:
    def test_break_when_first_table_then_never(self):
        assert should_insert_page_break(10_000, 10_000, True) is False

    def test_break_when_exactly_fills_then_no_break(self):
        config = ChecklistPageConfig()

        assert should_insert_page_break(700, config.available_height - 700, False, config) is False

    def test_break_when_one_over_then_break(self):
        config = ChecklistPageConfig()

        assert should_insert_page_break(700, config.available_height - 699, False, config) is True


class TestPageTracker:
    def test_tracker_when_new_then_starts_at_header_height(self):
        assert PageTracker().current_height == 100

    def test_tracker_when_table_added_then_includes_spacing(self):
        tracker = PageTracker()

        tracker.add_table(170)

        assert tracker.current_height == 100 + 170 + 15

    def test_tracker_when_reset_then_zero(self):
        tracker = PageTracker()
        tracker.add_table(170)

        tracker.reset_page()

        assert tracker.current_height == 0


class TestPlanChecklistPages:
    @pytest.fixture
    def three_lessons(self, make_lesson):
        return [
            make_lesson(activity_count=2, number=1),
            make_lesson(activity_count=0, number=2),
            make_lesson(activity_count=4, number=3),
        ]

    def test_plan_when_third_table_overflows_then_single_break_before_it(self, three_lessons):
        """
        Heights 170, 110, 230. After two tables the page holds
        100 + 185 + 125 = 410, so with 500pt available the third table
        (410 + 230 = 640) moves to a new page.
        """
        # Arrange
        config = ChecklistPageConfig(page_height=572)
        assert config.available_height == 500

        # Act
        pages = plan_checklist_pages(three_lessons, sign_off=True, config=config)

        # Assert
        assert [table_row_count(l, True) for l in three_lessons] == [5, 3, 7]
        assert len(pages) == 2
        assert [l.id for l in pages[0].lessons] == ["lesson-1", "lesson-2"]
        assert [l.id for l in pages[1].lessons] == ["lesson-3"]
        assert pages[1].height_used == 230 + 15

    def test_plan_when_everything_fits_then_one_page(self, three_lessons):
        pages = plan_checklist_pages(three_lessons, sign_off=True)

        assert len(pages) == 1
        assert pages[0].height_used == 100 + 185 + 125 + 245

    def test_plan_when_no_lessons_then_empty(self):
        assert plan_checklist_pages([], sign_off=False) == ()

    def test_plan_when_table_larger_than_page_then_still_placed(self, make_lesson):
        lessons = [make_lesson(activity_count=1, number=1), make_lesson(activity_count=40, number=2)]

        pages = plan_checklist_pages(lessons, sign_off=False)

        assert len(pages) == 2
        assert pages[1].lessons[0].id == "lesson-2"
