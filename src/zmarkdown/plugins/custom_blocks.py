#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/custom_blocks.py
"""Custom blocks (spoilers, information boxes, warnings, ...).

A block starts with its type between double brackets, optionally followed by
a title, and continues over the following lines prefixed with a pipe::

    [[information | Before you start]]
    | You will need **Python 3.10**.
    |
    | And some patience.

Options
-------
blocks : dict
    Block type to ``{"classes": str, "title": "optional" | "required" | "none"}``.
    Types missing from the mapping are not custom blocks.

The result is a ``customBlock`` node (``blockType``, ``classes``) holding an
optional ``customBlockHeading`` with the title and a ``customBlockBody``
with the parsed content.

"""

from __future__ import annotations

import re
from typing import Any, Mapping, Match, Optional

from zmarkdown.parsers.markdown import MarkdownParser

CUSTOM_BLOCK_PATTERN = (
    r"^ {0,3}\[\[(?P<custom_block_type>[\w-]+)"
    r"(?:[ \t]*\|[ \t]*(?P<custom_block_title>[^\]\n]*?))?[ \t]*\]\][ \t]*$"
)

_CONTENT_LINE = re.compile(r"^ {0,3}\|(?: |$)?(.*)$")


def make_grammar(blocks: Mapping[str, Mapping[str, Any]]) -> Any:
    """Build the mistune plugin registering the custom block rule."""

    def parse_custom_block(block: Any, m: Match[str], state: Any) -> Optional[int]:
        block_type = m.group("custom_block_type")
        definition = blocks.get(block_type)
        if definition is None:
            return None

        title = (m.group("custom_block_title") or "").strip()
        title_mode = definition.get("title", "optional")
        if title_mode == "required" and not title:
            return None
        if title_mode == "none":
            title = ""

        pos = state.find_line_end_at(m.end())
        lines: list[str] = []
        while pos < state.cursor_max:
            line = state.get_line(pos)
            content = _CONTENT_LINE.match(line.rstrip("\n"))
            if content is None:
                break
            lines.append(content.group(1))
            pos += len(line)

        children: list[dict[str, Any]] = []
        if title:
            children.append({"type": "customBlockHeading", "text": title})
        body = state.child_state("\n".join(lines) + "\n")
        block.parse(body)
        children.append({"type": "customBlockBody", "children": body.tokens})

        state.append_token(
            {
                "type": "customBlock",
                "attrs": {"blockType": block_type, "classes": definition.get("classes", block_type)},
                "children": children,
            }
        )
        return pos

    def plugin(md: Any) -> None:
        md.block.register("custom_block", CUSTOM_BLOCK_PATTERN, parse_custom_block, before="ref_link")
        md.block.insert_rule(md.block.block_quote_rules, "custom_block", before="ref_link")
        md.block.insert_rule(md.block.list_rules, "custom_block", before="ref_link")

    return plugin


def parser_plugin(parser: MarkdownParser, options: Mapping[str, Any]) -> None:
    """Enable custom blocks of the configured types."""
    options = options or {}
    parser.use(make_grammar(dict(options.get("blocks", {}))))
