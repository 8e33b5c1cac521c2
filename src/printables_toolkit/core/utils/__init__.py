"""Serialization helpers for curriculum payloads."""

from .serialization import (
    CurriculumPayload,
    activity_from_dict,
    lesson_from_dict,
    lessons_from_payload,
    load_lessons,
)

__all__ = [
    "CurriculumPayload",
    "activity_from_dict",
    "lesson_from_dict",
    "lessons_from_payload",
    "load_lessons",
]
