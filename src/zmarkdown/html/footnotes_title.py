#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/html/footnotes_title.py
"""Titles of footnote links.

Options
-------
title : str
    Title of the back links of footnote definitions; ``$id`` is replaced
    with the footnote label
ref_title : str, optional
    Same, for the references in the text

"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from bs4 import BeautifulSoup

from zmarkdown.constants import DEFAULT_FOOTNOTE_BACKREF_TITLE, FOOTNOTE_ID_PLACEHOLDER
from zmarkdown.file import RenderedFile


def _label(href: str, prefix: str) -> str:
    return href[len(prefix) :] if href.startswith(prefix) else href.lstrip("#")


def transform(soup: BeautifulSoup, file: RenderedFile, options: Optional[Mapping[str, Any]]) -> None:
    """Set the ``title`` attribute of footnote links."""
    options = options or {}
    title = str(options.get("title", DEFAULT_FOOTNOTE_BACKREF_TITLE))
    for backref in soup.select("a.footnote-backref"):
        label = _label(str(backref.get("href", "")), "#fnref-")
        backref["title"] = title.replace(FOOTNOTE_ID_PLACEHOLDER, label)

    ref_title = options.get("ref_title")
    if ref_title:
        for reference in soup.select("a.footnote-ref"):
            label = _label(str(reference.get("href", "")), "#fn-")
            reference["title"] = str(ref_title).replace(FOOTNOTE_ID_PLACEHOLDER, label)
