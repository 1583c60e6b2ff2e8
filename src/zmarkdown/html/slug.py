#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/html/slug.py
"""Heading identifiers."""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup

from zmarkdown.file import RenderedFile
from zmarkdown.utils.text import slugify

HEADING_TAGS: tuple[str, ...] = ("h1", "h2", "h3", "h4", "h5", "h6")


def transform(soup: BeautifulSoup, file: RenderedFile, options: Any) -> None:
    """Give every heading without an ``id`` a unique slug of its text."""
    seen: set[str] = {str(element["id"]) for element in soup.find_all(id=True)}
    for heading in soup.find_all(list(HEADING_TAGS)):
        if heading.get("id"):
            continue
        heading["id"] = slugify(heading.get_text(), seen_slugs=seen)
