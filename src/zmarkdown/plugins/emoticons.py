#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/emoticons.py
"""Emoticons.

Codes from the ``emoticons`` option (``":)"`` -> image URL) standing alone
between whitespace become ``emoticon`` nodes carrying the code, the image URL
and the configured ``classes``. Codes inside code, math, links and comments
are left alone.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.utils import replace_text
from zmarkdown.file import RenderedFile

logger = logging.getLogger(__name__)


def build_pattern(codes: list[str]) -> Optional[re.Pattern[str]]:
    """Compile a pattern matching any of ``codes`` between whitespace (longest first)."""
    if not codes:
        return None
    alternatives = "|".join(re.escape(code) for code in sorted(codes, key=len, reverse=True))
    return re.compile(rf"(?:(?<=\s)|^)(?P<code>{alternatives})(?=\s|$)")


def transform(tree: Node, file: RenderedFile, options: Mapping[str, Any]) -> None:
    """Replace emoticon codes with ``emoticon`` nodes."""
    options = options or {}
    emoticons: Mapping[str, str] = options.get("emoticons", {})
    pattern = build_pattern(list(emoticons))
    if pattern is None:
        return

    classes = options.get("classes", "")

    def make_nodes(match: re.Match[str]) -> list[Node]:
        code = match.group("code")
        return [Node("emoticon", {"code": code, "url": emoticons[code], "classes": classes}, value=code)]

    count = replace_text(tree, pattern, make_nodes)
    if count:
        logger.debug(f"Replaced {count} emoticons")
