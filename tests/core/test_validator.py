"""
Unit Tests for Curriculum Payload Validation

Tests for the validator module.
"""

import pytest

from printables_toolkit.core.schemas.validator import ValidationError, validate_lessons_payload


class TestValidateLessonsPayload:
    """Tests for validate_lessons_payload function."""

    @pytest.fixture
    def valid_payload(self) -> dict:
        return {
            "sectionName": "Section A",
            "lessons": [
                {
                    "id": "l1",
                    "name": "Lesson One",
                    "lessonNumber": "1",
                    "activities": [
                        {"id": "a1", "name": "Warm Up", "classification": "MUST_DO"},
                    ],
                },
            ],
        }

    def test_validate_when_valid_then_no_error(self, valid_payload):
        validate_lessons_payload(valid_payload)

    def test_validate_when_valid_and_strict_then_no_error(self, valid_payload):
        validate_lessons_payload(valid_payload, strict=True)

    def test_validate_when_bare_list_then_no_error(self, valid_payload):
        validate_lessons_payload(valid_payload["lessons"])

    def test_validate_when_lessons_key_missing_then_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_lessons_payload({"sectionName": "Section A"})

        assert "lessons" in str(exc_info.value)

    def test_validate_when_lesson_missing_name_then_path_reported(self, valid_payload):
        del valid_payload["lessons"][0]["name"]

        with pytest.raises(ValidationError) as exc_info:
            validate_lessons_payload(valid_payload)

        assert exc_info.value.path == "lessons[0]"
        assert "Missing field: name" in exc_info.value.errors

    def test_validate_when_activity_not_object_then_raises(self, valid_payload):
        valid_payload["lessons"][0]["activities"].append("not an activity")

        with pytest.raises(ValidationError) as exc_info:
            validate_lessons_payload(valid_payload)

        assert exc_info.value.path == "lessons[0].activities[1]"

    def test_validate_when_resources_not_list_then_raises(self, valid_payload):
        valid_payload["lessons"][0]["activities"][0]["resources"] = {"url": "x"}

        with pytest.raises(ValidationError):
            validate_lessons_payload(valid_payload)

    def test_validate_when_strict_and_wrong_type_then_schema_error(self, valid_payload):
        valid_payload["lessons"][0]["name"] = 42

        with pytest.raises(ValidationError) as exc_info:
            validate_lessons_payload(valid_payload, strict=True)

        assert "Schema validation failed" in str(exc_info.value)
