"""
Module: curriculum

Purpose:
    Provides the read-only curriculum entities consumed by the exporters:
    Lesson, Activity, Resource and ClassActivity. Mirrors the shape of the
    curriculum API (course → unit → section → lesson → activity) but keeps
    only the fields the printables need.

Key Classes:
    - Classification: Priority tag driving badge colour/label
    - Workstyle: Independent or collaborative activity
    - Resource: Linked material for an activity
    - ClassActivity: Per-class scheduling (due date)
    - Activity: One row of a checklist / one square of a game board
    - Lesson: Ordered group of activities with a learning target

Dependencies:
    - dataclasses (std)
    - datetime (std)
    - enum (std)

Used By:
    - core.utils.serialization
    - core.models.board
    - exporter.layout, exporter.operations
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class Classification(str, Enum):
    """Activity priority."""

    MUST_DO = "MUST_DO"
    SHOULD_DO = "SHOULD_DO"
    ASPIRE_TO_DO = "ASPIRE_TO_DO"

    @classmethod
    def parse(cls, value: Optional[str]) -> Classification:
        """
        Parse a raw classification, defaulting to MUST_DO.

        Unknown or missing values are not errors: the curriculum API
        leaves classification blank on older activities.
        """
        if not value:
            return cls.MUST_DO
        try:
            return cls(value)
        except ValueError:
            logger.warning(f"Unknown classification {value!r}, using MUST_DO")
            return cls.MUST_DO

    @property
    def display_name(self) -> str:
        """Title-cased label, e.g. "Aspire To Do"."""
        return " ".join(word.capitalize() for word in self.value.split("_"))


class Workstyle(str, Enum):
    INDEPENDENT = "INDEPENDENT"
    COLLABORATIVE = "COLLABORATIVE"


class ActivityType(str, Enum):
    INQUIRY_ACTIVITY = "INQUIRY_ACTIVITY"
    VIDEO_AND_NOTES = "VIDEO_AND_NOTES"
    PRACTICE_PROBLEMS = "PRACTICE_PROBLEMS"
    ADDITIONAL_PRACTICE = "ADDITIONAL_PRACTICE"
    MASTERY_CHECK = "MASTERY_CHECK"
    EXTENSION = "EXTENSION"
    WARM_UP = "WARM_UP"
    PROBLEM_SET = "PROBLEM_SET"


@dataclass(frozen=True)
class Resource:
    """
    Material attached to an activity.

    Attributes:
        id: Resource identifier
        name: Display name
        url: Link to the material (may be None for uploaded files)
        type: Resource type string as sent by the API
    """

    id: str
    name: str
    url: Optional[str] = None
    type: str = "OTHER"


@dataclass(frozen=True)
class ClassActivity:
    """Scheduling of an activity for one class."""

    activity_id: str
    class_id: str
    due_date: Optional[str] = None


@dataclass(frozen=True)
class Activity:
    """
    Single activity within a lesson (immutable).

    Attributes:
        id: Activity identifier
        name: Display name
        classification: Priority tag (defaults to MUST_DO)
        type: Activity type
        workstyle: Independent or collaborative
        resources: Linked materials, first one is the primary link
        class_activities: Scheduling entries, first one carries the due date

    Example:
        >>> act = Activity(id="a1", name="Warm Up")
        >>> act.classification
        <Classification.MUST_DO: 'MUST_DO'>
    """

    id: str
    name: str
    classification: Classification = Classification.MUST_DO
    type: Optional[ActivityType] = None
    workstyle: Workstyle = Workstyle.INDEPENDENT
    resources: tuple[Resource, ...] = ()
    class_activities: tuple[ClassActivity, ...] = ()

    @property
    def due_date(self) -> Optional[date]:
        """Due date of the first class activity, if it has a parseable one."""
        if not self.class_activities:
            return None
        raw = self.class_activities[0].due_date
        if not raw:
            return None
        try:
            # API sends ISO 8601 with a trailing Z
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError:
            logger.warning(f"Unparseable due date {raw!r} on activity {self.id}")
            return None

    @property
    def primary_resource_url(self) -> Optional[str]:
        """URL of the first resource, or None."""
        if self.resources and self.resources[0].url:
            return self.resources[0].url
        return None

    @property
    def is_collaborative(self) -> bool:
        return self.workstyle is Workstyle.COLLABORATIVE


@dataclass(frozen=True)
class Lesson:
    """
    Lesson with its ordered activities (immutable).

    Attributes:
        id: Lesson identifier
        name: Lesson title
        learning_target: Learning goal sentence (may be empty)
        lesson_number: Number as displayed, e.g. "3"
        activities: Activities in source order
    """

    id: str
    name: str
    learning_target: str = ""
    lesson_number: str = "1"
    activities: tuple[Activity, ...] = field(default_factory=tuple)

    @property
    def activity_count(self) -> int:
        return len(self.activities)

    @property
    def number_value(self) -> int:
        """Lesson number as int for colour/emoji cycling (1 when not numeric)."""
        try:
            return int(self.lesson_number)
        except (TypeError, ValueError):
            return 1
