"""Schema validation for curriculum payloads."""

from .validator import ValidationError, validate_lessons_payload

__all__ = ["ValidationError", "validate_lessons_payload"]
