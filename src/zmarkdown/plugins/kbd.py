#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/kbd.py
"""Keyboard keys: ``||Ctrl|| + ||C||`` becomes two ``kbd`` nodes."""

from __future__ import annotations

from typing import Any, Match

from zmarkdown.parsers.markdown import MarkdownParser

KBD_PATTERN = r"\|\|(?P<kbd_text>[^|\n]+?)\|\|"


def parse_kbd(inline: Any, m: Match[str], state: Any) -> int:
    state.append_token({"type": "kbd", "children": [{"type": "text", "raw": m.group("kbd_text")}]})
    return m.end()


def kbd(md: Any) -> None:
    """Mistune plugin registering the keyboard key rule."""
    md.inline.register("kbd", KBD_PATTERN, parse_kbd, before="link")


def parser_plugin(parser: MarkdownParser, options: Any) -> None:
    """Enable keyboard keys."""
    parser.use(kbd)
