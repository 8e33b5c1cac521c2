"""
Module: exporter.document

Purpose:
    Remote document service seam, resolved table structure and index
    discovery. The Google-backed service and OAuth helpers are imported
    from their own modules so the rest of the package does not need the
    Google client libraries loaded.
"""

from .service import DocumentService, DocumentServiceError
from .structure import DocumentStateError, ResolvedCell, ResolvedRow, ResolvedTable
from .tracker import DocumentStateTracker

__all__ = [
    "DocumentService",
    "DocumentServiceError",
    "DocumentStateError",
    "DocumentStateTracker",
    "ResolvedCell",
    "ResolvedRow",
    "ResolvedTable",
]
