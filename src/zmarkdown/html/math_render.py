#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/html/math_render.py
"""Math elements left for client-side typesetting.

The TeX source of ``.math-inline`` and ``.math-display`` elements is wrapped
in the configured delimiters (``\\(...\\)`` and ``\\[...\\]`` by default)
so MathJax or KaTeX auto-render picks it up. Formulas with unbalanced braces
are flagged instead: they get the ``math-error`` class and are colored with
``error_color``.

No math is rendered to markup here: the output keeps the TeX source between
delimiters, and turning it into HTML or MathML is left to the page (MathJax,
KaTeX auto-render).

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from bs4 import BeautifulSoup

from zmarkdown.file import RenderedFile

logger = logging.getLogger(__name__)


def balanced_braces(tex: str) -> bool:
    """Whether the unescaped braces of ``tex`` are balanced."""
    depth = 0
    escaped = False
    for char in tex:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def transform(soup: BeautifulSoup, file: RenderedFile, options: Optional[Mapping[str, Any]]) -> None:
    """Delimit the TeX source of every math element."""
    options = options or {}
    inline: Sequence[str] = options.get("inline_delimiters", ["\\(", "\\)"])
    display: Sequence[str] = options.get("display_delimiters", ["\\[", "\\]"])
    error_color = options.get("error_color", "#cc0000")

    for element in soup.select(".math"):
        classes = element.get("class") or []
        opening, closing = display if "math-display" in classes else inline
        tex = element.get_text()
        if not balanced_braces(tex):
            file.warn(f"Unbalanced braces in formula: {tex}", stage="math_render")
            element["class"] = [*classes, "math-error"]
            element["style"] = f"color:{error_color}"
            element["title"] = "Unbalanced braces"
            continue
        element.string = f"{opening}{tex}{closing}"
