#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/cli.py
"""Command line renderer.

    zmarkdown INPUT [--target html|latex] [--output FILE] [--document]
              [--no-typography] [--log-level LEVEL] [--log-file FILE] [--trace]

``INPUT`` is a markdown file, or ``-`` for standard input. The output goes
to standard output unless ``--output`` is given.

Exit codes
----------
0
    Success
1
    Render or I/O error
2
    Configuration or usage error

"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from zmarkdown import __version__
from zmarkdown.api import create_zmarkdown
from zmarkdown.config import default_config_bundle
from zmarkdown.constants import NO_TYPOGRAPHY_FLAG, SUPPORTED_TARGETS, TARGET_HTML, TARGET_LATEX
from zmarkdown.exceptions import ConfigurationError, PipelineError, ZmarkdownError
from zmarkdown.file import RenderedFile
from zmarkdown.logging_utils import configure_logging
from zmarkdown.templates.latex_document import render_latex_document

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="zmarkdown",
        description="Render extended markdown to HTML or LaTeX.",
    )
    parser.add_argument("input", help="Markdown file to render, or '-' for standard input")
    parser.add_argument("--target", choices=SUPPORTED_TARGETS, default=TARGET_HTML, help="Output format")
    parser.add_argument("-o", "--output", help="Write the output to this file instead of standard output")
    parser.add_argument(
        "--document", action="store_true", help="Wrap LaTeX output in a complete document (latex target only)"
    )
    parser.add_argument("--title", default="", help="Document title used with --document")
    parser.add_argument("--no-typography", action="store_true", help="Skip typographic replacements")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Log with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(text: str, destination: Optional[str]) -> None:
    if destination:
        Path(destination).write_text(text, encoding="utf-8")
        logger.info(f"Wrote {destination}")
    else:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")


def main(args: list[str] | None = None) -> int:
    """Execute the command line renderer and return the exit code."""
    parser = create_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as exc:
        return int(exc.code) if isinstance(exc.code, int) else EXIT_USAGE_ERROR

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    if parsed_args.document and parsed_args.target != TARGET_LATEX:
        print("Error: --document requires --target latex", file=sys.stderr)
        return EXIT_USAGE_ERROR

    bundle = default_config_bundle()
    if parsed_args.no_typography:
        bundle.tree_config[NO_TYPOGRAPHY_FLAG] = True

    try:
        zmd = create_zmarkdown(bundle, target=parsed_args.target)
    except (ConfigurationError, PipelineError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        text = _read_input(parsed_args.input)
        rendered: RenderedFile = asyncio.run(zmd.render_string(text))  # type: ignore[arg-type]
        output = str(rendered)
        if parsed_args.document:
            output = render_latex_document(rendered, title=parsed_args.title)
        _write_output(output, parsed_args.output)
    except ZmarkdownError as exc:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    for message in rendered.messages:
        logger.info(f"{message.stage or 'pipeline'}: {message.reason}")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
