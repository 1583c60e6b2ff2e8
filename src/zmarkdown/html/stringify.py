#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/html/stringify.py
"""HTML tree serialization."""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup

from zmarkdown.file import RenderedFile


def compile_html(soup: BeautifulSoup, file: RenderedFile, options: Any) -> str:
    """Serialize the HTML tree, without a trailing newline."""
    return soup.decode().rstrip("\n")
