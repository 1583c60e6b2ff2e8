#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/sub_super.py
"""Subscript (``H~2~O``) and superscript (``2^10^``), as ``sub`` and ``sup`` nodes."""

from __future__ import annotations

from typing import Any

from mistune.plugins.formatting import subscript, superscript

from zmarkdown.parsers.markdown import MarkdownParser


def parser_plugin(parser: MarkdownParser, options: Any) -> None:
    """Enable the subscript and superscript grammar."""
    parser.use(superscript)
    parser.use(subscript)
