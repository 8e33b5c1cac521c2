"""
Module: exporter.layout.pagination

Purpose:
    Decide where the checklist needs forced page breaks. The remote document
    has no layout engine we can query, so table heights are estimated from
    row counts and accumulated per page.

Key Functions:
    - table_row_count(): Rows in a lesson's checklist table
    - estimate_table_height(): Estimated table height (pure)
    - should_insert_page_break(): Break decision (pure)
    - plan_checklist_pages(): Lessons grouped onto pages

Key Classes:
    - PageTracker: Height accumulator owned by one export call
    - ChecklistPagePlan: Lessons placed on one page

Algorithm:
    1. First table never breaks (it shares the page with the header)
    2. Otherwise break iff current height + table height > available height
    3. After a table, add its height plus the table spacing
    4. A forced break resets the accumulator to zero

Dependencies:
    - exporter.layout.config: ChecklistPageConfig
    - core.models: Lesson

Used By:
    - exporter.controller: Checklist export
    - exporter.output.renderer: Local PDF rendering
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from printables_toolkit.core.models import Lesson

from .config import ChecklistPageConfig

logger = logging.getLogger(__name__)

DEFAULT_PAGE_CONFIG = ChecklistPageConfig()

# Title row + learning goal row
FIXED_TABLE_ROWS = 2


def table_row_count(lesson: Lesson, sign_off: bool) -> int:
    """Rows in the lesson's table: title, learning goal, activities, sign-off."""
    return FIXED_TABLE_ROWS + len(lesson.activities) + (1 if sign_off else 0)


def estimate_table_height(
    lesson: Lesson,
    sign_off: bool,
    config: ChecklistPageConfig = DEFAULT_PAGE_CONFIG,
) -> int:
    """
    Estimate the rendered height of a lesson's checklist table.

    Args:
        lesson: Lesson to render
        sign_off: Whether the teacher sign-off row is included
        config: Page geometry

    Returns:
        rows × row_height + table_padding

    Example:
        >>> estimate_table_height(lesson_with_two_activities, sign_off=True)
        170  # (2 + 2 + 1) × 30 + 20
    """
    return table_row_count(lesson, sign_off) * config.row_height + config.table_padding


def should_insert_page_break(
    current_height: int,
    table_height: int,
    is_first: bool,
    config: ChecklistPageConfig = DEFAULT_PAGE_CONFIG,
) -> bool:
    """
    Decide whether a forced page break goes before the next table.

    Args:
        current_height: Height used on the current page
        table_height: Estimated height of the next table
        is_first: True for the first table of the document
        config: Page geometry

    Returns:
        False for the first table; otherwise True iff the table would
        overflow the available height (exactly filling it does not break)
    """
    if is_first:
        return False
    return current_height + table_height > config.available_height


class PageTracker:
    """
    Accumulated page height for one export call.

    Starts at the header height since the first page carries the title block.

    Example:
        >>> tracker = PageTracker(ChecklistPageConfig())
        >>> tracker.add_table(170)
        >>> tracker.current_height
        285  # 100 + 170 + 15
    """

    def __init__(self, config: ChecklistPageConfig = DEFAULT_PAGE_CONFIG):
        self._config = config
        self._current_height = config.header_height

    @property
    def current_height(self) -> int:
        return self._current_height

    def add_table(self, table_height: int) -> None:
        self._current_height += table_height + self._config.table_spacing

    def reset_page(self) -> None:
        self._current_height = 0


@dataclass(frozen=True)
class ChecklistPagePlan:
    """
    Lessons that land on one checklist page.

    Attributes:
        index: Page number (0-indexed)
        lessons: Lessons on this page, in order
        height_used: Estimated height used, header included on page 0
    """

    index: int
    lessons: tuple[Lesson, ...]
    height_used: int


def plan_checklist_pages(
    lessons: Sequence[Lesson],
    sign_off: bool,
    config: ChecklistPageConfig = DEFAULT_PAGE_CONFIG,
) -> tuple[ChecklistPagePlan, ...]:
    """
    Group lessons onto pages with the same decisions the exporter makes.

    Args:
        lessons: Lessons in export order
        sign_off: Whether tables carry a sign-off row
        config: Page geometry

    Returns:
        Tuple of ChecklistPagePlans (empty when there are no lessons)
    """
    if not lessons:
        return ()

    pages: list[ChecklistPagePlan] = []
    tracker = PageTracker(config)
    current: list[Lesson] = []

    for i, lesson in enumerate(lessons):
        table_height = estimate_table_height(lesson, sign_off, config)

        if table_height > config.available_height:
            logger.warning(
                f"Lesson {lesson.id} table overflows a page: "
                f"{table_height}pt needed, {config.available_height}pt available"
            )

        if should_insert_page_break(tracker.current_height, table_height, i == 0, config):
            pages.append(ChecklistPagePlan(
                index=len(pages),
                lessons=tuple(current),
                height_used=tracker.current_height,
            ))
            current = []
            tracker.reset_page()

        current.append(lesson)
        tracker.add_table(table_height)

    pages.append(ChecklistPagePlan(
        index=len(pages),
        lessons=tuple(current),
        height_used=tracker.current_height,
    ))

    logger.info(f"Planned {len(lessons)} checklist tables onto {len(pages)} pages")
    return tuple(pages)
