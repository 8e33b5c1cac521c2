"""
Module: cli

Purpose:
    Command line entry point. Loads a curriculum JSON file and either
    exports it to a Google Doc or renders it to a local PDF.

Usage:
    printables checklist --input lessons.json --section "Section A"
    printables gameboard --input lessons.json --pdf board.pdf

Dependencies:
    - argparse (std)
    - exporter: Export pipeline and PDF renderer

Used By:
    - run_export.py
    - console script "printables"
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from printables_toolkit import __version__
from printables_toolkit.core.schemas import ValidationError
from printables_toolkit.core.utils import CurriculumPayload, load_lessons
from printables_toolkit.exporter.config import DEFAULT_MAX_REQUESTS_PER_BATCH, AuthConfig, ExportConfig
from printables_toolkit.exporter.controller import ExportError, Exporter
from printables_toolkit.exporter.document.auth import AuthenticationError, load_credentials
from printables_toolkit.exporter.document.google_service import GoogleDocsService
from printables_toolkit.exporter.output import render_checklist_pdf, render_game_board_pdf
from printables_toolkit.exporter.styles import PRESETS, Border, ColorTheme, GraphicTheme, LessonDivider

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_PATH = Path.home() / ".printables_toolkit" / "token.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="printables",
        description="Export curriculum lessons as a checklist or game board",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--input", "-i", type=Path, required=True, help="Curriculum JSON file")
    common.add_argument("--strict", action="store_true", help="Validate against the full JSON schema")
    common.add_argument("--pdf", type=Path, help="Render to this PDF instead of a Google Doc")

    common.add_argument("--course", help="Course name (default: from input file)")
    common.add_argument("--section", help="Section name (default: from input file)")
    common.add_argument("--unit", help="Unit name (default: from input file)")
    common.add_argument("--class-name", help="Class name printed on the form line")
    common.add_argument("--lesson", action="append", dest="lesson_ids", help="Export only this lesson id (repeatable)")

    common.add_argument("--theme", choices=[t.value for t in ColorTheme], default=ColorTheme.COLOR.value)
    common.add_argument("--border", choices=[b.value for b in Border], default=Border.BORDER_1.value)
    common.add_argument("--preset", choices=sorted(PRESETS), default="classic")
    common.add_argument(
        "--max-requests",
        type=int,
        default=DEFAULT_MAX_REQUESTS_PER_BATCH,
        help="Maximum operations per remote call",
    )

    common.add_argument("--token", type=Path, default=DEFAULT_TOKEN_PATH, help="Cached OAuth token")
    common.add_argument("--client-secrets", type=Path, default=Path("credentials.json"),
                        help="OAuth client secrets for first sign-in")
    common.add_argument("--no-browser", action="store_true", help="Fail instead of opening a browser")

    subparsers = parser.add_subparsers(dest="command", required=True)

    checklist = subparsers.add_parser("checklist", parents=[common], help="Per-lesson checklist tables")
    checklist.add_argument("--sign-off", action="store_true", help="Add a teacher sign-off row")
    checklist.add_argument("--hyperlinks", action="store_true", help="Link activities to their resource")

    gameboard = subparsers.add_parser("gameboard", parents=[common], help="Snake-path game board")
    gameboard.add_argument(
        "--divider",
        choices=[d.value for d in LessonDivider],
        default=LessonDivider.LESSON_NUMBER.value,
    )
    gameboard.add_argument(
        "--graphics",
        choices=[g.value for g in GraphicTheme],
        default=GraphicTheme.SCHOOL.value,
    )

    return parser


def config_from_args(args: argparse.Namespace, payload: CurriculumPayload) -> ExportConfig:
    """
    Build the export configuration; command line values win over the file.

    Raises:
        ValueError: If a required name is missing or a value is invalid
    """
    course = args.course or payload.course_name
    section = args.section or payload.section_name
    unit = args.unit or payload.unit_name
    missing = [name for name, value in (("course", course), ("section", section), ("unit", unit)) if not value]
    if missing:
        raise ValueError(f"Missing {', '.join(missing)} name (pass --{' / --'.join(missing)})")

    class_name = args.class_name or payload.class_name or ""
    return ExportConfig(
        course_name=course,
        section_name=section,
        unit_name=unit,
        class_name=class_name,
        include_class_name=bool(class_name),
        color_theme=ColorTheme(args.theme),
        border=Border(args.border),
        preset=args.preset,
        teacher_sign_off=getattr(args, "sign_off", False),
        include_video_hyperlinks=getattr(args, "hyperlinks", False),
        lesson_divider=LessonDivider(getattr(args, "divider", LessonDivider.LESSON_NUMBER.value)),
        graphic_theme=GraphicTheme(getattr(args, "graphics", GraphicTheme.SCHOOL.value)),
        max_requests_per_batch=args.max_requests,
        lesson_ids=tuple(args.lesson_ids) if args.lesson_ids else None,
    )


def _render_pdf(args: argparse.Namespace, payload: CurriculumPayload, config: ExportConfig) -> None:
    render = render_checklist_pdf if args.command == "checklist" else render_game_board_pdf
    pages = render(payload.lessons, args.pdf, config)
    print(f"Wrote {pages} pages to {args.pdf}")


def _export(args: argparse.Namespace, payload: CurriculumPayload, config: ExportConfig) -> None:
    credentials = load_credentials(AuthConfig(
        token_path=args.token,
        client_secrets_path=args.client_secrets,
        interactive=not args.no_browser,
    ))
    exporter = Exporter(GoogleDocsService(credentials))

    if args.command == "checklist":
        result = exporter.run_checklist(payload.lessons, config)
    else:
        result = exporter.run_game_board(payload.lessons, config)
    print(result.url)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        payload = load_lessons(args.input, strict=args.strict)
        config = config_from_args(args, payload)
        if args.pdf:
            _render_pdf(args, payload, config)
        else:
            _export(args, payload, config)
    except (ValidationError, AuthenticationError, ExportError, OSError, ValueError) as e:
        logger.debug("Export failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
