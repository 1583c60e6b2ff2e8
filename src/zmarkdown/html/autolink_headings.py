#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/html/autolink_headings.py
"""Self links on headings.

Every heading with an ``id`` gets a link to itself.

Options
-------
behavior : str
    ``"append"`` or ``"prepend"`` an icon link to the heading content, or
    ``"wrap"`` the content in the link
properties : dict
    Attributes of the link element

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from bs4 import BeautifulSoup, Tag

from zmarkdown.exceptions import ValidationError
from zmarkdown.file import RenderedFile
from zmarkdown.html.slug import HEADING_TAGS

logger = logging.getLogger(__name__)

BEHAVIORS: tuple[str, ...] = ("append", "prepend", "wrap")


def _link(soup: BeautifulSoup, target: str, properties: Mapping[str, Any]) -> Tag:
    attrs: dict[str, Any] = {}
    for name, value in properties.items():
        attrs[name] = list(value) if isinstance(value, (list, tuple)) else value
    attrs["href"] = f"#{target}"
    return soup.new_tag("a", attrs=attrs)


def transform(soup: BeautifulSoup, file: RenderedFile, options: Optional[Mapping[str, Any]]) -> None:
    """Add a self link to every heading that has an identifier."""
    options = options or {}
    behavior = options.get("behavior", "append")
    if behavior not in BEHAVIORS:
        raise ValidationError(
            f"Invalid autolink behavior '{behavior}'. Must be one of: {', '.join(BEHAVIORS)}",
            parameter_name="autolink_headings.behavior",
            parameter_value=behavior,
        )
    properties: Mapping[str, Any] = options.get("properties", {})

    for heading in soup.find_all(list(HEADING_TAGS)):
        target = heading.get("id")
        if not target:
            continue
        link = _link(soup, str(target), properties)
        if behavior == "wrap":
            for child in list(heading.contents):
                link.append(child.extract())
            heading.append(link)
            continue
        link.append(soup.new_tag("span", attrs={"class": ["icon", "icon-link"]}))
        if behavior == "prepend":
            heading.insert(0, link)
        else:
            heading.append(link)
