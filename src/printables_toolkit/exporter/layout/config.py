"""
Module: exporter.layout.config

Purpose:
    Configuration for the two layout problems solved without a layout engine:
    checklist page-break estimation and game board grid placement.
    All measurements are in points.

Key Classes:
    - ChecklistPageConfig: Portrait page geometry and table height constants
    - BoardGridConfig: Landscape board page and snake grid geometry

Dependencies:
    - dataclasses (std)

Used By:
    - exporter.layout.pagination: Break decisions
    - exporter.layout.snake_grid: Pagination and placement
    - exporter.operations: Document style and table sizing
"""

from __future__ import annotations

from dataclasses import dataclass


# US Letter, portrait
DEFAULT_CHECKLIST_PAGE_HEIGHT = 792
DEFAULT_CHECKLIST_PAGE_WIDTH = 612

# US Letter, landscape
DEFAULT_BOARD_PAGE_WIDTH = 792
DEFAULT_BOARD_PAGE_HEIGHT = 612


@dataclass(frozen=True)
class ChecklistPageConfig:
    """
    Checklist page geometry (immutable).

    Attributes:
        page_width: Page width
        page_height: Page height
        margin_top: Top margin
        margin_bottom: Bottom margin
        margin_side: Left/right margin
        header_height: Height taken by the title block on the first page
        row_height: Estimated height of one table row
        table_padding: Fixed extra height per table
        table_spacing: Gap between consecutive tables

    Example:
        >>> ChecklistPageConfig().available_height
        720
    """

    page_width: int = DEFAULT_CHECKLIST_PAGE_WIDTH
    page_height: int = DEFAULT_CHECKLIST_PAGE_HEIGHT
    margin_top: int = 36
    margin_bottom: int = 36
    margin_side: int = 36
    header_height: int = 100
    row_height: int = 30
    table_padding: int = 20
    table_spacing: int = 15

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.row_height <= 0:
            raise ValueError(f"row_height must be positive: {self.row_height}")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")
        if self.page_width - 2 * self.margin_side <= 0:
            raise ValueError("Margins exceed page width")

    @property
    def available_height(self) -> int:
        """Height available for content (excluding margins)."""
        return self.page_height - self.margin_top - self.margin_bottom


@dataclass(frozen=True)
class BoardGridConfig:
    """
    Game board geometry (immutable).

    Attributes:
        columns: Squares per main row
        items_per_page: Maximum squares on one page, terminal square included
        square_size: Width and minimum height of one square
        page_width: Page width (landscape)
        page_height: Page height (landscape)
        page_margin: Margin on all four sides
    """

    columns: int = 7
    items_per_page: int = 15
    square_size: int = 96
    page_width: int = DEFAULT_BOARD_PAGE_WIDTH
    page_height: int = DEFAULT_BOARD_PAGE_HEIGHT
    page_margin: int = 40

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.columns < 2:
            raise ValueError(f"columns must be at least 2: {self.columns}")
        if self.items_per_page < 2:
            raise ValueError(f"items_per_page must be at least 2: {self.items_per_page}")
        if self.square_size <= 0:
            raise ValueError(f"square_size must be positive: {self.square_size}")
        if self.page_width - 2 * self.page_margin <= 0:
            raise ValueError("Margins exceed page width")
        if self.page_height - 2 * self.page_margin <= 0:
            raise ValueError("Margins exceed page height")
