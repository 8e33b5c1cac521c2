"""
Module: exporter.styles

Purpose:
    Themes, colours and cosmetic presets shared by the checklist and game
    board exporters. Cosmetic differences between generator variants
    (column widths, icons, footer artwork) live in StylePreset values so
    the request builders carry one code path.

Key Classes:
    - ColorTheme, Border, LessonDivider, GraphicTheme: User-facing options
    - ClassificationLabel: Badge label and colour per classification
    - StylePreset: Cosmetic preset

Key Functions:
    - get_preset(): Look up a preset, falling back to the default
    - border_image_url(): Footer artwork for a border and theme
    - lesson_colors(), graphic_emoji(): Game board lesson divider styling

Dependencies:
    - exporter.operations.models: RgbColor

Used By:
    - exporter.config
    - exporter.operations.*
    - exporter.output.renderer
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Mapping

from printables_toolkit.core.models import Classification

from .operations.models import BLACK, WHITE, RgbColor

logger = logging.getLogger(__name__)


class ColorTheme(str, Enum):
    COLOR = "COLOR"
    BLACK_AND_WHITE = "BLACK_AND_WHITE"


class Border(str, Enum):
    BORDER_1 = "BORDER_1"
    BORDER_2 = "BORDER_2"
    BORDER_3 = "BORDER_3"
    BORDER_4 = "BORDER_4"


class LessonDivider(str, Enum):
    LESSON_NAME = "LESSON_NAME"
    LESSON_NUMBER = "LESSON_NUMBER"
    LESSON_NAME_AND_GRAPHIC = "LESSON_NAME_AND_GRAPHIC"
    LESSON_NUMBER_AND_GRAPHIC = "LESSON_NUMBER_AND_GRAPHIC"

    @property
    def has_graphic(self) -> bool:
        return self in (LessonDivider.LESSON_NAME_AND_GRAPHIC, LessonDivider.LESSON_NUMBER_AND_GRAPHIC)


class GraphicTheme(str, Enum):
    NATURE = "NATURE"
    SCHOOL = "SCHOOL"
    SPORTS = "SPORTS"


# ─────────────────────────────────────────────────────────────────────────────
# Colours
# ─────────────────────────────────────────────────────────────────────────────

BRAND_BLUE = RgbColor(0.06, 0.33, 0.56)
BOARD_BLUE = RgbColor(0.04, 0.32, 0.58)
LINK_BLUE = RgbColor(0.1, 0.3, 0.8)
SIGN_OFF_GREEN = RgbColor(0.13, 0.69, 0.3)
GOLD = RgbColor(0.98, 0.75, 0.14)
GREY_TEXT = RgbColor(0.39, 0.45, 0.55)
LIGHT_GREY = RgbColor(0.9, 0.9, 0.9)

STATUS_COLORS: dict[Classification, RgbColor] = {
    Classification.MUST_DO: RgbColor(0.04, 0.32, 0.58),
    Classification.SHOULD_DO: RgbColor(0.96, 0.62, 0.04),
    Classification.ASPIRE_TO_DO: RgbColor(0.84, 0.69, 0.0),
}


@dataclass(frozen=True)
class LessonColors:
    background: RgbColor
    text: RgbColor


# Cycled by lesson number
LESSON_COLORS: tuple[LessonColors, ...] = (
    LessonColors(RgbColor(0.96, 1.0, 0.85), RgbColor(0.55, 0.74, 0.05)),
    LessonColors(RgbColor(1.0, 0.93, 0.9), RgbColor(0.93, 0.35, 0.22)),
    LessonColors(RgbColor(0.93, 1.0, 1.0), RgbColor(0.12, 0.59, 0.63)),
    LessonColors(RgbColor(1.0, 0.95, 0.89), RgbColor(0.98, 0.65, 0.22)),
)

GRAPHIC_EMOJIS: dict[GraphicTheme, tuple[str, ...]] = {
    GraphicTheme.NATURE: ("🌿", "🌸", "🍃", "🌻", "🌺", "🌼", "🌷", "🌴"),
    GraphicTheme.SCHOOL: ("📚", "✏️", "📝", "🎓", "📖", "🖊️", "📐", "🔬"),
    GraphicTheme.SPORTS: ("⚽", "🏀", "⚾", "🎾", "🏈", "🏐", "🏓", "⛳"),
}


def themed(color: RgbColor, theme: ColorTheme) -> RgbColor:
    """Return `color`, or black for the black-and-white theme."""
    return BLACK if theme is ColorTheme.BLACK_AND_WHITE else color


def status_color(classification: Classification, theme: ColorTheme) -> RgbColor:
    return themed(STATUS_COLORS[classification], theme)


def lesson_colors(lesson_number: int, theme: ColorTheme, divider: LessonDivider) -> LessonColors:
    """Background/text colours of a lesson divider square."""
    if divider.has_graphic:
        return LessonColors(background=WHITE, text=BLACK)
    if theme is ColorTheme.BLACK_AND_WHITE:
        return LessonColors(background=LIGHT_GREY, text=BLACK)
    return LESSON_COLORS[(lesson_number - 1) % len(LESSON_COLORS)]


def graphic_emoji(lesson_number: int, theme: GraphicTheme) -> str:
    emojis = GRAPHIC_EMOJIS[theme]
    return emojis[(lesson_number - 1) % len(emojis)]


def format_due_date(value: date) -> str:
    """Short month and day, e.g. "Sep 5"."""
    return f"{value.strftime('%b')} {value.day}"


# ─────────────────────────────────────────────────────────────────────────────
# Classification labels
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ClassificationLabel:
    """
    Badge shown on a game board activity.

    Attributes:
        label: Text shown on the badge
        color_hex: Badge text colour as "#RRGGBB"
    """

    label: str
    color_hex: str

    @property
    def color(self) -> RgbColor:
        return RgbColor.from_hex(self.color_hex)


DEFAULT_CLASSIFICATION_LABELS: Mapping[Classification, ClassificationLabel] = {
    Classification.MUST_DO: ClassificationLabel("Must Do", "#0A5294"),
    Classification.SHOULD_DO: ClassificationLabel("Should Do", "#F59E0B"),
    Classification.ASPIRE_TO_DO: ClassificationLabel("Aspire To Do", "#D6B000"),
}


# ─────────────────────────────────────────────────────────────────────────────
# Presets
# ─────────────────────────────────────────────────────────────────────────────

BORDER_IMAGE_URLS: dict[Border, str] = {
    Border.BORDER_1: "https://res.cloudinary.com/dgixwid5g/image/upload/v1763829060/border-1_tpjndr.png",
    Border.BORDER_2: "https://res.cloudinary.com/dgixwid5g/image/upload/v1763829100/border-2_ojxjr3.png",
    Border.BORDER_3: "https://res.cloudinary.com/dgixwid5g/image/upload/v1763829122/border-3_l6jm4h.png",
    Border.BORDER_4: "https://res.cloudinary.com/dgixwid5g/image/upload/v1763829149/border-4_shvqha.png",
}


@dataclass(frozen=True)
class StylePreset:
    """
    Cosmetic preset (immutable).

    Attributes:
        name: Registry key
        checklist_column_widths: Widths of date / activity / status columns
        star_icon: Suffix on ASPIRE_TO_DO activities, colour theme
        star_icon_mono: Suffix on ASPIRE_TO_DO activities, black-and-white
        calendar_icon: Prefix of checklist due dates
        border_urls: Footer artwork per border variant
        footer_image_width: Footer artwork width
        board_cell_padding: Padding of board squares
        activity_cell_padding: Horizontal padding of activity squares
        collaborative_icon: Workstyle icon for collaborative activities
        independent_icon: Workstyle icon for independent activities
    """

    name: str
    checklist_column_widths: tuple[float, float, float] = (72, 360, 108)
    star_icon: str = " ⭐"
    star_icon_mono: str = " ★"
    calendar_icon: str = "🗓️ "
    border_urls: Mapping[Border, str] = field(default_factory=lambda: dict(BORDER_IMAGE_URLS))
    footer_image_width: float = 450
    board_cell_padding: float = 4
    activity_cell_padding: float = 8
    collaborative_icon: str = "👥+"
    independent_icon: str = "👤"

    def star(self, theme: ColorTheme) -> str:
        return self.star_icon_mono if theme is ColorTheme.BLACK_AND_WHITE else self.star_icon

    def workstyle_icon(self, collaborative: bool) -> str:
        return self.collaborative_icon if collaborative else self.independent_icon


DEFAULT_PRESET_NAME = "classic"

PRESETS: dict[str, StylePreset] = {
    "classic": StylePreset(name="classic"),
    "compact": StylePreset(
        name="compact",
        checklist_column_widths=(64, 384, 92),
        star_icon=" ★",
        calendar_icon="",
        footer_image_width=400,
        board_cell_padding=2,
        activity_cell_padding=4,
    ),
}


def get_preset(name: str | None) -> StylePreset:
    """
    Look up a style preset.

    Unknown names fall back to the default preset rather than failing the
    export.
    """
    if name is None:
        return PRESETS[DEFAULT_PRESET_NAME]
    preset = PRESETS.get(name)
    if preset is None:
        logger.warning(f"Unknown style preset {name!r}, using {DEFAULT_PRESET_NAME!r}")
        return PRESETS[DEFAULT_PRESET_NAME]
    return preset


def border_image_url(preset: StylePreset, border: Border, theme: ColorTheme) -> str:
    """Footer artwork URL; black-and-white requests the grayscale variant."""
    url = preset.border_urls.get(border) or preset.border_urls[Border.BORDER_1]
    if theme is ColorTheme.BLACK_AND_WHITE:
        url = url.replace("/upload/", "/upload/e_grayscale/")
    return url
