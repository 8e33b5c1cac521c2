"""
Module: board

Purpose:
    Game board items - the linear path of squares a student walks through.
    Modelled as a closed union of frozen dataclasses so that every consumer
    matches all four variants explicitly.

Key Classes:
    - StartItem: First square of the board
    - LessonItem: Lesson divider square
    - ActivityItem: One activity square
    - EndItem: Finish square, or a "continue to page N" square
    - GameBoardItem: Union of the above

Dependencies:
    - dataclasses (std)
    - .curriculum: Lesson, Activity

Used By:
    - exporter.layout.snake_grid
    - exporter.operations.gameboard
    - exporter.output.renderer
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .curriculum import Activity, Lesson


@dataclass(frozen=True)
class StartItem:
    pass


@dataclass(frozen=True)
class LessonItem:
    lesson: Lesson


@dataclass(frozen=True)
class ActivityItem:
    lesson: Lesson
    activity: Activity


@dataclass(frozen=True)
class EndItem:
    """
    Terminal square of a page.

    Attributes:
        is_last_page: True for the real finish, False for a continuation
        page_number: Display number (1-based) of the page to continue on;
            only set on continuations
    """

    is_last_page: bool = True
    page_number: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.is_last_page and (self.page_number is None or self.page_number < 2):
            raise ValueError(
                f"Continuation end needs a next page number >= 2: {self.page_number}"
            )

    @property
    def is_continuation(self) -> bool:
        return not self.is_last_page


GameBoardItem = Union[StartItem, LessonItem, ActivityItem, EndItem]
