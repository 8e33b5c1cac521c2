"""
Module: exporter.operations.footer

Purpose:
    Decorative footer. Two round-trips: the footer is created first, and its
    segment id (only known from the reply) addresses the image insert.

Key Functions:
    - footer_create_operations(): Batch creating the default footer
    - footer_id_from_replies(): Segment id from the create reply
    - footer_content_operations(): Centred border image in the footer

Dependencies:
    - exporter.styles: border_image_url

Used By:
    - exporter.controller
"""

from __future__ import annotations

from typing import Any, Sequence

from printables_toolkit.exporter.config import ExportConfig
from printables_toolkit.exporter.document.structure import DocumentStateError
from printables_toolkit.exporter.styles import border_image_url

from .models import CreateFooter, EditOperation, InsertInlineImage, UpdateParagraphStyle


def footer_create_operations() -> list[EditOperation]:
    return [CreateFooter()]


def footer_id_from_replies(replies: Sequence[dict[str, Any]]) -> str:
    """
    Raises:
        DocumentStateError: If no createFooter reply carries a footer id
    """
    for reply in replies:
        footer_id = (reply.get("createFooter") or {}).get("footerId")
        if footer_id:
            return footer_id
    raise DocumentStateError("createFooter reply has no footerId")


def footer_content_operations(footer_id: str, config: ExportConfig) -> list[EditOperation]:
    preset = config.style
    return [
        InsertInlineImage(
            uri=border_image_url(preset, config.border, config.color_theme),
            width=preset.footer_image_width,
            segment_id=footer_id,
        ),
        UpdateParagraphStyle(start=0, end=1, alignment="CENTER", segment_id=footer_id),
    ]
