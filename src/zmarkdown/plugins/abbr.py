#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/abbr.py
"""Abbreviations.

Definitions use the PHP Markdown Extra syntax and apply to every occurrence
of the abbreviation in the document::

    The HTML standard is maintained by the W3C.

    *[HTML]: Hyper Text Markup Language
    *[W3C]: World Wide Web Consortium

Matches become ``abbr`` nodes with a ``title`` property.

"""

from __future__ import annotations

from typing import Any

from mistune.plugins.abbr import abbr as mistune_abbr

from zmarkdown.parsers.markdown import MarkdownParser


def parser_plugin(parser: MarkdownParser, options: Any) -> None:
    """Enable abbreviation definitions."""
    parser.use(mistune_abbr)
