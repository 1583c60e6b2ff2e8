#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/math.py
"""TeX math.

Display math is a block fenced by ``$$`` lines; inline math sits between
single dollars::

    Euler: $e^{i\\pi} + 1 = 0$

    $$
    \\int_0^1 x\\,dx = \\frac{1}{2}
    $$

With the ``inline_double_dollar`` option, ``$$...$$`` inside a paragraph is
inline math rendered in display style (``display`` property set).

Produces ``math`` and ``inlineMath`` nodes holding the TeX source. A dollar
followed by a digit never closes inline math, so prices are safe.

"""

from __future__ import annotations

from typing import Any, Mapping, Match

from zmarkdown.parsers.markdown import MarkdownParser

BLOCK_MATH_PATTERN = (
    r"^ {0,3}\$\$(?P<zmath_single>[^\n]*?)\$\$[ \t]*(?:\n|$)|"
    r"^ {0,3}\$\$[ \t]*\n(?P<zmath_multi>[\s\S]*?)\n {0,3}\$\$[ \t]*(?:\n|$)"
)
INLINE_MATH_PATTERN = r"\$(?!\$)(?!\s)(?P<zmath_inline>(?:[^$\\\n]|\\.)+?)\$(?!\d)"
INLINE_DISPLAY_MATH_PATTERN = r"\$\$(?P<zmath_inline_display>(?:[^$\\]|\\.)+?)\$\$"


def parse_block_math(block: Any, m: Match[str], state: Any) -> int:
    text = m.group("zmath_single")
    if text is None:
        text = m.group("zmath_multi")
    state.append_token({"type": "math", "raw": text.strip()})
    return m.end()


def parse_inline_math(inline: Any, m: Match[str], state: Any) -> int:
    state.append_token({"type": "inlineMath", "raw": m.group("zmath_inline"), "attrs": {"display": False}})
    return m.end()


def parse_inline_display_math(inline: Any, m: Match[str], state: Any) -> int:
    state.append_token(
        {"type": "inlineMath", "raw": m.group("zmath_inline_display").strip(), "attrs": {"display": True}}
    )
    return m.end()


def make_grammar(inline_double_dollar: bool) -> Any:
    """Build the mistune plugin registering the math rules."""

    def plugin(md: Any) -> None:
        md.block.register("math_block", BLOCK_MATH_PATTERN, parse_block_math, before="list")
        md.block.insert_rule(md.block.block_quote_rules, "math_block", before="list")
        md.block.insert_rule(md.block.list_rules, "math_block", before="list")
        if inline_double_dollar:
            md.inline.register(
                "math_inline_display", INLINE_DISPLAY_MATH_PATTERN, parse_inline_display_math, before="codespan"
            )
        md.inline.register("math_inline", INLINE_MATH_PATTERN, parse_inline_math, before="codespan")

    return plugin


def parser_plugin(parser: MarkdownParser, options: Mapping[str, Any]) -> None:
    """Enable math."""
    options = options or {}
    parser.use(make_grammar(bool(options.get("inline_double_dollar", True))))
