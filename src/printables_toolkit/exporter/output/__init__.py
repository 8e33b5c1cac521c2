"""Local PDF rendering of checklists and game boards."""

from .renderer import render_checklist_pdf, render_game_board_pdf

__all__ = ["render_checklist_pdf", "render_game_board_pdf"]
