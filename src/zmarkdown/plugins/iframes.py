#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/iframes.py
"""Embedded videos and iframes.

A line holding only ``!(url)`` embeds the page when the URL's host is a
configured provider::

    !(https://www.youtube.com/watch?v=FdeioVndUhs)

Options
-------
providers : dict
    Host name to provider settings:

    - ``width``, ``height``: iframe size
    - ``replace``: substring replacements turning the page URL into the embed URL
    - ``remove_after``: cut the embed URL at the first occurrence of this
      string found after the last replacement
    - ``append``: suffix added to the embed URL
    - ``match``: regular expression the page URL must match

URLs of other hosts are left as plain text.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Match, Optional
from urllib.parse import urlparse

from zmarkdown.parsers.markdown import MarkdownParser

logger = logging.getLogger(__name__)

IFRAME_PATTERN = r"^ {0,3}!\((?P<iframe_url>https?://[^\s)]+)\)[ \t]*$"


def embed_url(url: str, provider: Mapping[str, Any]) -> Optional[str]:
    """Compute the embed URL of ``url`` for ``provider``, or None if it does not match.

    Examples
    --------
    >>> embed_url("https://www.youtube.com/watch?v=abc&t=4", {"replace": {"watch?v=": "embed/"}, "remove_after": "&"})
    'https://www.youtube.com/embed/abc'

    """
    pattern = provider.get("match")
    if pattern and not re.match(pattern, url):
        return None

    resolved = url
    cursor = 0
    for old, new in (provider.get("replace") or {}).items():
        if old in resolved:
            resolved = resolved.replace(old, new)
            cursor = max(cursor, resolved.find(new) + len(new))

    remove_after = provider.get("remove_after")
    if remove_after:
        cut = resolved.find(remove_after, cursor)
        if cut != -1:
            resolved = resolved[:cut]

    append = provider.get("append")
    if append:
        resolved += append
    return resolved


def make_grammar(providers: Mapping[str, Mapping[str, Any]]) -> Any:
    """Build the mistune plugin registering the iframe rule."""

    def parse_iframe(block: Any, m: Match[str], state: Any) -> Optional[int]:
        url = m.group("iframe_url")
        host = urlparse(url).hostname or ""
        provider = providers.get(host)
        if provider is None:
            logger.debug(f"No iframe provider for host '{host}'")
            return None
        src = embed_url(url, provider)
        if src is None:
            return None
        state.append_token(
            {
                "type": "iframe",
                "attrs": {
                    "src": src,
                    "width": provider.get("width"),
                    "height": provider.get("height"),
                    "provider": host,
                    "url": url,
                },
            }
        )
        return state.find_line_end_at(m.end())

    def plugin(md: Any) -> None:
        md.block.register("iframe", IFRAME_PATTERN, parse_iframe, before="list")
        md.block.insert_rule(md.block.block_quote_rules, "iframe", before="list")

    return plugin


def parser_plugin(parser: MarkdownParser, options: Mapping[str, Any]) -> None:
    """Enable embeds for the configured providers."""
    options = options or {}
    parser.use(make_grammar(dict(options.get("providers", {}))))
