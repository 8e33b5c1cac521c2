"""
Module: exporter.config

Purpose:
    Configuration dataclasses for the export pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - ExportConfig: Everything one checklist / game board export needs
    - AuthConfig: Where OAuth client secrets and cached tokens live

Dependencies:
    - dataclasses (std)
    - pathlib (std)
    - exporter.styles: Themes and presets
    - exporter.layout.config: Page geometry

Used By:
    - exporter.controller: Export orchestration
    - exporter.operations.*: Request builders
    - exporter.document.auth: Credential loading
    - printables_toolkit.cli
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence

from printables_toolkit.core.models import Classification, Lesson

from .layout.config import BoardGridConfig, ChecklistPageConfig
from .styles import (
    DEFAULT_CLASSIFICATION_LABELS,
    Border,
    ClassificationLabel,
    ColorTheme,
    GraphicTheme,
    LessonDivider,
    StylePreset,
    get_preset,
)

DEFAULT_MAX_REQUESTS_PER_BATCH = 40

DOCS_SCOPES = (
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/drive.file",
)


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for one export (immutable).

    Attributes:
        course_name: Course shown in the subtitle
        section_name: Section shown as the title and in the document name
        unit_name: Unit shown in the subtitle
        class_name: Class name for the form line
        include_class_name: Print class_name instead of a blank
        color_theme: Colour or black-and-white output
        border: Footer artwork variant
        teacher_sign_off: Add a sign-off row to each checklist table
        include_video_hyperlinks: Link checklist activities to their resource
        lesson_divider: How lesson squares are drawn on the game board
        graphic_theme: Emoji set for graphic lesson dividers
        preset: Name of the cosmetic StylePreset
        classification_labels: Game board badge labels/colours
        max_requests_per_batch: Cap on operations per remote call for
            game board content (remote payload limit)
        lesson_ids: Optional subset of lessons to export (source order kept)
        checklist_page: Checklist page geometry
        board_grid: Game board geometry

    Example:
        >>> config = ExportConfig(
        ...     course_name="Algebra 1",
        ...     section_name="Section A",
        ...     unit_name="Unit 2",
        ... )
    """

    course_name: str
    section_name: str
    unit_name: str

    # Form line
    class_name: str = ""
    include_class_name: bool = False

    # Appearance
    color_theme: ColorTheme = ColorTheme.COLOR
    border: Border = Border.BORDER_1
    preset: str = "classic"

    # Checklist
    teacher_sign_off: bool = False
    include_video_hyperlinks: bool = False

    # Game board
    lesson_divider: LessonDivider = LessonDivider.LESSON_NUMBER
    graphic_theme: GraphicTheme = GraphicTheme.SCHOOL
    classification_labels: Mapping[Classification, ClassificationLabel] = field(
        default_factory=lambda: dict(DEFAULT_CLASSIFICATION_LABELS)
    )

    # Remote payload limit
    max_requests_per_batch: int = DEFAULT_MAX_REQUESTS_PER_BATCH

    # Filtering
    lesson_ids: Optional[tuple[str, ...]] = None

    # Geometry
    checklist_page: ChecklistPageConfig = field(default_factory=ChecklistPageConfig)
    board_grid: BoardGridConfig = field(default_factory=BoardGridConfig)

    _style: StylePreset = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.max_requests_per_batch <= 0:
            raise ValueError(
                f"max_requests_per_batch must be positive: {self.max_requests_per_batch}"
            )
        missing = [c for c in Classification if c not in self.classification_labels]
        if missing:
            raise ValueError(f"classification_labels missing: {[c.value for c in missing]}")
        object.__setattr__(self, "_style", get_preset(self.preset))

    @property
    def style(self) -> StylePreset:
        return self._style

    @property
    def show_class_name(self) -> bool:
        return self.include_class_name and bool(self.class_name)

    def label_for(self, classification: Classification) -> ClassificationLabel:
        return self.classification_labels[classification]

    def select_lessons(self, lessons: Sequence[Lesson]) -> list[Lesson]:
        """Apply the lesson_ids filter, keeping source order."""
        if self.lesson_ids is None:
            return list(lessons)
        wanted = set(self.lesson_ids)
        return [lesson for lesson in lessons if lesson.id in wanted]


@dataclass(frozen=True)
class AuthConfig:
    """
    OAuth configuration (immutable).

    Attributes:
        token_path: Cached authorized-user token (read and rewritten)
        client_secrets_path: OAuth client secrets for the interactive flow
        scopes: Requested scopes
        interactive: Allow opening a browser when no valid token is cached
    """

    token_path: Path
    client_secrets_path: Optional[Path] = None
    scopes: tuple[str, ...] = DOCS_SCOPES
    interactive: bool = True
