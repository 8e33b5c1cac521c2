"""
Module: exporter.layout

Purpose:
    Layout decisions made locally, without a layout engine.
    Checklist page-break estimation and game board snake placement.

Key Functions:
    - estimate_table_height(), should_insert_page_break(): Checklist breaks
    - plan_checklist_pages(): Lessons grouped onto pages
    - prepare_game_board_items(), paginate_game_board_items(): Board pages
    - place_snake_grid(): Snake placement of one page

Key Classes:
    - ChecklistPageConfig, BoardGridConfig: Geometry
    - PageTracker: Per-export height accumulator
    - GridCell, GridPlacement: Placed squares

Used By:
    - exporter.controller
    - exporter.operations
    - exporter.output.renderer
"""

from .config import BoardGridConfig, ChecklistPageConfig
from .models import GridCell, GridPlacement
from .pagination import (
    ChecklistPagePlan,
    PageTracker,
    estimate_table_height,
    plan_checklist_pages,
    should_insert_page_break,
    table_row_count,
)
from .snake_grid import (
    connector_column,
    is_reverse_flow,
    paginate_game_board_items,
    place_snake_grid,
    prepare_game_board_items,
    snake_row_count,
)

__all__ = [
    # Config
    "BoardGridConfig",
    "ChecklistPageConfig",
    # Models
    "GridCell",
    "GridPlacement",
    "ChecklistPagePlan",
    # Checklist
    "PageTracker",
    "estimate_table_height",
    "plan_checklist_pages",
    "should_insert_page_break",
    "table_row_count",
    # Game board
    "connector_column",
    "is_reverse_flow",
    "paginate_game_board_items",
    "place_snake_grid",
    "prepare_game_board_items",
    "snake_row_count",
]
