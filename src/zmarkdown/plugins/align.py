#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/align.py
"""Aligned blocks.

A block opened with an arrow at the start of a line and closed with an arrow
at the end of a line is aligned according to the arrows::

    ->centered<-

    ->
    Right aligned,
    over several lines
    ->

    <-left aligned<-

The content is parsed as block markdown and becomes the children of a
``centerAligned``, ``rightAligned`` or ``leftAligned`` node whose ``class``
property comes from the ``classes`` option.

"""

from __future__ import annotations

import re
from typing import Any, Mapping, Match, Optional

from zmarkdown.parsers.markdown import MarkdownParser

ALIGN_PATTERN = r"^ {0,3}(?P<align_open>->|<-(?!-))"

_ALIGNMENTS = {
    ("->", "<-"): ("centerAligned", "center"),
    ("->", "->"): ("rightAligned", "right"),
    ("<-", "<-"): ("leftAligned", "left"),
}

_CLOSER = re.compile(r"(->|<-)[ \t]*$")


def _find_block(src: str, start: int) -> Optional[tuple[str, str, int]]:
    """Return ``(content, closer, end)`` of the block starting at ``start``."""
    pos = start
    while pos < len(src):
        line_end = src.find("\n", pos)
        line_end = len(src) if line_end == -1 else line_end
        line = src[pos:line_end]
        if not line.strip() and pos > start:
            return None
        closer = _CLOSER.search(line)
        if closer:
            content = src[start : pos + closer.start()]
            return content, closer.group(1), min(line_end + 1, len(src))
        pos = line_end + 1
    return None


def make_grammar(classes: Mapping[str, str]) -> Any:
    """Build the mistune plugin registering the aligned block rule."""

    def parse_align(block: Any, m: Match[str], state: Any) -> Optional[int]:
        opener = m.group("align_open")
        found = _find_block(state.src, m.end())
        if found is None:
            return None
        content, closer, end_pos = found
        alignment = _ALIGNMENTS.get((opener, closer))
        if alignment is None or not content.strip():
            return None

        node_type, name = alignment
        child = state.child_state(content.strip("\n") + "\n")
        block.parse(child)
        state.append_token(
            {"type": node_type, "attrs": {"class": classes.get(name, f"align-{name}")}, "children": child.tokens}
        )
        return end_pos

    def plugin(md: Any) -> None:
        md.block.register("align_block", ALIGN_PATTERN, parse_align, before="list")
        md.block.insert_rule(md.block.block_quote_rules, "align_block", before="list")

    return plugin


def parser_plugin(parser: MarkdownParser, options: Mapping[str, Any]) -> None:
    """Enable aligned blocks."""
    options = options or {}
    parser.use(make_grammar(dict(options.get("classes", {}))))
