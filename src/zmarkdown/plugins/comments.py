#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/comments.py
"""Author comments.

Text between ``<--COMMENTS`` and ``COMMENTS-->`` is kept in the tree as a
``comment`` node but never reaches the output::

    Some text <--COMMENTS to be reviewed COMMENTS--> more text.

    <--COMMENTS
    A whole block of notes.
    COMMENTS-->

"""

from __future__ import annotations

from typing import Any, Match, Optional

from zmarkdown.parsers.markdown import MarkdownParser

START_MARKER = "<--COMMENTS"
END_MARKER = "COMMENTS-->"

BLOCK_COMMENT_PATTERN = r"^ {0,3}<--COMMENTS"
INLINE_COMMENT_PATTERN = r"<--COMMENTS(?P<comment_text>[\s\S]*?)COMMENTS-->"


def parse_block_comment(block: Any, m: Match[str], state: Any) -> Optional[int]:
    end = state.src.find(END_MARKER, m.end())
    if end == -1:
        return None
    line_end = state.src.find("\n", end)
    line_end = len(state.src) if line_end == -1 else line_end + 1
    if state.src[end + len(END_MARKER) : line_end].strip():
        # Trailing text: let the inline rule handle it inside a paragraph
        return None
    state.append_token({"type": "comment", "raw": state.src[m.end() : end].strip()})
    return line_end


def parse_inline_comment(inline: Any, m: Match[str], state: Any) -> int:
    state.append_token({"type": "comment", "raw": m.group("comment_text").strip()})
    return m.end()


def comments(md: Any) -> None:
    """Mistune plugin registering the comment rules."""
    md.block.register("block_comment", BLOCK_COMMENT_PATTERN, parse_block_comment, before="raw_html")
    md.inline.register("inline_comment", INLINE_COMMENT_PATTERN, parse_inline_comment, before="inline_html")


def parser_plugin(parser: MarkdownParser, options: Any) -> None:
    """Enable comments."""
    parser.use(comments)
