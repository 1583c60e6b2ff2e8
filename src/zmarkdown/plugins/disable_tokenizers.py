#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/disable_tokenizers.py
"""Switch off grammar rules by name.

Options
-------
block : list of str
    Block rules to remove (``indent_code`` by default, so indented text is a
    paragraph rather than a code block)
inline : list of str
    Inline rules to remove

Rule names are mistune's (``fenced_code``, ``block_quote``, ``codespan``,
``emphasis``, ...) plus the names registered by the stages before this one.

"""

from __future__ import annotations

from typing import Any, Mapping

from zmarkdown.parsers.markdown import MarkdownParser


def parser_plugin(parser: MarkdownParser, options: Mapping[str, Any]) -> None:
    """Remove the configured rules from the parser."""
    options = options or {}
    parser.disable_rules(block=list(options.get("block", [])), inline=list(options.get("inline", [])))
