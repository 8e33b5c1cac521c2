"""
Module: exporter

Purpose:
    Export curriculum lessons as a checklist or game board document.

Key Functions:
    - export_checklist(), export_game_board(): Remote document export

Key Classes:
    - ExportConfig: Export configuration
    - Exporter: Single-flight export runner
"""

from .config import AuthConfig, ExportConfig
from .controller import (
    ExportBusyError,
    ExportError,
    Exporter,
    ExportResult,
    export_checklist,
    export_game_board,
)

__all__ = [
    "AuthConfig",
    "ExportConfig",
    "ExportBusyError",
    "ExportError",
    "Exporter",
    "ExportResult",
    "export_checklist",
    "export_game_board",
]
