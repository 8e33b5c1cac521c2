"""
Serialization Utilities

Turns curriculum API JSON (camelCase keys) into the frozen curriculum
models.

- ``lesson_from_dict`` / ``activity_from_dict``: single entities
- ``lessons_from_payload``: list or ``{"lessons": [...]}`` wrapper
- ``load_lessons``: read, validate and parse a JSON file
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..models.curriculum import (
    Activity,
    ActivityType,
    ClassActivity,
    Classification,
    Lesson,
    Resource,
    Workstyle,
)
from ..schemas.validator import validate_lessons_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurriculumPayload:
    """
    Parsed curriculum file.

    Attributes:
        lessons: Lessons in source order
        course_name: Course name if the payload carried one
        section_name: Section name if the payload carried one
        unit_name: Unit name if the payload carried one
        class_name: Class name if the payload carried one
    """

    lessons: tuple[Lesson, ...]
    course_name: Optional[str] = None
    section_name: Optional[str] = None
    unit_name: Optional[str] = None
    class_name: Optional[str] = None


def resource_from_dict(data: dict[str, Any]) -> Resource:
    return Resource(
        id=str(data.get("id", "")),
        name=data.get("name") or "",
        url=data.get("url") or None,
        type=data.get("type") or "OTHER",
    )


def class_activity_from_dict(data: dict[str, Any]) -> ClassActivity:
    return ClassActivity(
        activity_id=str(data.get("activityId", "")),
        class_id=str(data.get("classId", "")),
        due_date=data.get("dueDate") or None,
    )


def activity_from_dict(data: dict[str, Any]) -> Activity:
    """
    Deserialize an activity.

    Missing classification falls back to MUST_DO and unknown activity
    types are kept as None rather than rejected.
    """
    raw_type = data.get("type")
    try:
        activity_type = ActivityType(raw_type) if raw_type else None
    except ValueError:
        logger.debug(f"Unknown activity type {raw_type!r}")
        activity_type = None

    workstyle = (
        Workstyle.COLLABORATIVE
        if data.get("workstyle") == Workstyle.COLLABORATIVE.value
        else Workstyle.INDEPENDENT
    )

    return Activity(
        id=str(data.get("id", "")),
        name=data.get("name") or "",
        classification=Classification.parse(data.get("classification")),
        type=activity_type,
        workstyle=workstyle,
        resources=tuple(resource_from_dict(r) for r in data.get("resources") or []),
        class_activities=tuple(
            class_activity_from_dict(c) for c in data.get("classActivities") or []
        ),
    )


def lesson_from_dict(data: dict[str, Any]) -> Lesson:
    number = data.get("lessonNumber")
    return Lesson(
        id=str(data["id"]),
        name=data.get("name") or "",
        learning_target=data.get("learningTarget") or "",
        lesson_number=str(number) if number not in (None, "") else "1",
        activities=tuple(activity_from_dict(a) for a in data.get("activities") or []),
    )


def lessons_from_payload(data: Any, *, validate: bool = True) -> CurriculumPayload:
    """
    Deserialize a curriculum payload.

    Args:
        data: Parsed JSON (list of lessons or object with ``lessons``)
        validate: Run basic validation first

    Returns:
        CurriculumPayload

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_lessons_payload(data)

    if isinstance(data, dict):
        raw_lessons = data.get("lessons") or []
        meta = data
    else:
        raw_lessons = data
        meta = {}

    return CurriculumPayload(
        lessons=tuple(lesson_from_dict(item) for item in raw_lessons),
        course_name=meta.get("courseName"),
        section_name=meta.get("sectionName"),
        unit_name=meta.get("unitName"),
        class_name=meta.get("className"),
    )


def load_lessons(path: Path, *, strict: bool = False) -> CurriculumPayload:
    """
    Load a curriculum JSON file.

    Args:
        path: JSON file path
        strict: Validate against the full JSON schema

    Raises:
        ValidationError: If the payload is invalid
        OSError: If the file cannot be read
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if strict:
        validate_lessons_payload(data, strict=True)

    payload = lessons_from_payload(data, validate=not strict)
    logger.info(f"Loaded {len(payload.lessons)} lessons from {path}")
    return payload
