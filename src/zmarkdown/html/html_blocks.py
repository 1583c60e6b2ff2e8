#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/html/html_blocks.py
"""Resolution of raw HTML placeholders.

``to_html`` keeps raw HTML as text inside placeholder elements. When
``allow_dangerous_html`` is set the placeholders are replaced by the parsed
markup; otherwise block placeholders stay as ``div`` elements showing the
escaped source, with ``block_classes``, and inline placeholders become plain
text.

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from bs4 import BeautifulSoup

from zmarkdown.file import RenderedFile
from zmarkdown.html.to_html import RAW_HTML_ATTRIBUTE, RAW_HTML_BLOCK

logger = logging.getLogger(__name__)


def transform(soup: BeautifulSoup, file: RenderedFile, options: Optional[Mapping[str, Any]]) -> None:
    """Resolve every raw HTML placeholder of ``soup``."""
    options = options or {}
    allow_dangerous_html = bool(options.get("allow_dangerous_html", False))
    block_classes = list(options.get("block_classes", []))

    placeholders = soup.find_all(attrs={RAW_HTML_ATTRIBUTE: True})
    for placeholder in placeholders:
        raw = placeholder.get_text()
        block = placeholder.get(RAW_HTML_ATTRIBUTE) == RAW_HTML_BLOCK
        if allow_dangerous_html:
            parsed = list(BeautifulSoup(raw, "html.parser").contents)
            if parsed:
                placeholder.replace_with(*parsed)
            else:
                placeholder.decompose()
        elif block:
            del placeholder[RAW_HTML_ATTRIBUTE]
            if block_classes:
                placeholder["class"] = list(block_classes)
        else:
            placeholder.replace_with(soup.new_string(raw))
    if placeholders:
        logger.debug(f"Resolved {len(placeholders)} raw HTML fragments")
