"""
Core Models Package

Immutable curriculum and game board models shared by the exporters.

All models in this package are frozen dataclasses: the export pipeline
rebuilds its local view on every call and never mutates its input.
"""

from .curriculum import (
    Activity,
    ActivityType,
    ClassActivity,
    Classification,
    Lesson,
    Resource,
    Workstyle,
)
from .board import ActivityItem, EndItem, GameBoardItem, LessonItem, StartItem

__all__ = [
    "Activity",
    "ActivityType",
    "ClassActivity",
    "Classification",
    "Lesson",
    "Resource",
    "Workstyle",
    "ActivityItem",
    "EndItem",
    "GameBoardItem",
    "LessonItem",
    "StartItem",
]
