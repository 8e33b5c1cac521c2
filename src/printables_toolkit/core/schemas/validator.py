"""
Schema Validation Utilities

Validates curriculum JSON payloads before they are turned into models.

Two levels:
- Basic checks (always): required fields and container types, with a
  dotted path to the offending value.
- Strict mode: full JSON Schema validation against
  ``curriculum.schema.json`` using jsonschema.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_lessons_payload(data: Any, *, strict: bool = False) -> None:
    """
    Validate a curriculum payload.

    Accepts either a bare list of lessons or an object with a
    ``lessons`` list (plus optional course/section/unit names).

    Args:
        data: Parsed JSON
        strict: If True, also validate against the JSON schema

    Raises:
        ValidationError: If data is invalid
    """
    if isinstance(data, dict):
        if "lessons" not in data:
            raise ValidationError(
                "Missing required fields: ['lessons']",
                errors=["Missing field: lessons"],
            )
        lessons = data["lessons"]
        base = "lessons"
    else:
        lessons = data
        base = ""

    if not isinstance(lessons, list):
        raise ValidationError("lessons must be a list", path=base)

    for i, lesson in enumerate(lessons):
        _validate_lesson(lesson, f"{base}[{i}]")

    if strict:
        schema = _load_schema("curriculum")
        payload = data if isinstance(data, dict) else {"lessons": data}
        try:
            jsonschema.validate(payload, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e


def _validate_lesson(data: Any, path: str) -> None:
    """Validate one lesson and its activities."""
    if not isinstance(data, dict):
        raise ValidationError("lesson must be an object", path=path)

    missing = [f for f in ("id", "name") if f not in data]
    if missing:
        raise ValidationError(
            f"Lesson missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )

    activities = data.get("activities", [])
    if activities is None:
        return
    if not isinstance(activities, list):
        raise ValidationError("activities must be a list", path=f"{path}.activities")

    for i, activity in enumerate(activities):
        _validate_activity(activity, f"{path}.activities[{i}]")


def _validate_activity(data: Any, path: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError("activity must be an object", path=path)
    if "name" not in data:
        raise ValidationError(
            "Activity missing required fields: ['name']",
            path=path,
            errors=["Missing field: name"],
        )

    for key in ("resources", "classActivities"):
        value = data.get(key)
        if value is not None and not isinstance(value, list):
            raise ValidationError(f"{key} must be a list", path=f"{path}.{key}")
