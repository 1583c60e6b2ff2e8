#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/escape_escaped.py
"""Show character references literally.

Writers type ``&copy;`` to talk about the entity, not to get a copyright
sign, so named and numeric character references in text are escaped (their
``&`` becomes ``&amp;``) and render as typed. References listed in the
``ignore`` option keep their usual meaning.

Text nodes carry character references verbatim; the HTML conversion decodes
them, which is what turns the escaped form back into the literal reference.

"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.utils import PROTECTED_TYPES
from zmarkdown.ast.visitors import SKIP, visit
from zmarkdown.file import RenderedFile

ENTITY_PATTERN = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")


def escape_entities(value: str, ignore: frozenset[str]) -> str:
    """Escape the character references of ``value`` that are not in ``ignore``.

    Examples
    --------
    >>> escape_entities("&copy; and &nbsp;", frozenset({"&nbsp;"}))
    '&amp;copy; and &nbsp;'

    """
    return ENTITY_PATTERN.sub(lambda m: m.group(0) if m.group(0) in ignore else "&amp;" + m.group(0)[1:], value)


def transform(tree: Node, file: RenderedFile, options: Mapping[str, Any]) -> None:
    """Escape character references in every text node outside code and math."""
    options = options or {}
    ignore = frozenset(options.get("ignore", []))

    def on_node(node: Node, index: Optional[int], parent: Optional[Node]) -> Optional[str]:
        if node.type in PROTECTED_TYPES:
            return SKIP
        if node.type == "text" and node.value and "&" in node.value:
            node.value = escape_entities(node.value, ignore)
        return None

    visit(tree, None, on_node)
