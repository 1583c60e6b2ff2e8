#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/ping.py
"""Member mentions.

``@username`` and ``@**user name**`` become ``ping`` nodes when the
``ping_username`` option accepts the name; the ``user_url`` option builds the
profile URL. Pinged names are collected in ``file.data["pings"]`` so callers
can notify them.

Options
-------
ping_username : callable
    ``ping_username(name) -> bool``
user_url : callable
    ``user_url(name) -> str``
classes : str
    Classes of the rendered link

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Match, Optional

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.visitors import iter_nodes
from zmarkdown.constants import PINGS_KEY
from zmarkdown.file import RenderedFile
from zmarkdown.parsers.markdown import MarkdownParser

logger = logging.getLogger(__name__)

PING_PATTERN = r"@(?:\*\*(?P<ping_long>[^*\n]+?)\*\*|(?P<ping_short>[\w][\w.-]*\w|\w))"


def make_grammar(
    ping_username: Callable[[str], bool], user_url: Callable[[str], str], classes: str
) -> Any:
    """Build the mistune plugin registering the mention rule."""

    def parse_ping(inline: Any, m: Match[str], state: Any) -> Optional[int]:
        start = m.start()
        if state.in_link or (start > 0 and (state.src[start - 1].isalnum() or state.src[start - 1] in "@_")):
            return None
        username = m.group("ping_long") or m.group("ping_short")
        if not ping_username(username):
            return None
        state.append_token(
            {
                "type": "ping",
                "attrs": {"username": username, "url": user_url(username), "classes": classes},
                "children": [{"type": "text", "raw": username}],
            }
        )
        return m.end()

    def plugin(md: Any) -> None:
        md.inline.register("ping", PING_PATTERN, parse_ping, before="link")

    return plugin


def parser_plugin(parser: MarkdownParser, options: Mapping[str, Any]) -> None:
    """Enable mentions."""
    options = options or {}
    ping_username = options.get("ping_username") or (lambda username: True)
    user_url = options.get("user_url") or (lambda username: f"/{username}/")
    parser.use(make_grammar(ping_username, user_url, options.get("classes", "ping")))


def transform(tree: Node, file: RenderedFile, options: Any) -> None:
    """Record pinged usernames, in document order without duplicates."""
    pings: list[str] = []
    for node in iter_nodes(tree, "ping"):
        username = node.get("username")
        if username not in pings:
            pings.append(username)
    file.data[PINGS_KEY] = pings
    if pings:
        logger.debug(f"Pinged {len(pings)} members")
