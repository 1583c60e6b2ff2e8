#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/heading_trailing_spaces.py
"""Strip whitespace left at the end of heading text."""

from __future__ import annotations

from typing import Any

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.visitors import iter_nodes
from zmarkdown.file import RenderedFile


def transform(tree: Node, file: RenderedFile, options: Any) -> None:
    """Trim trailing whitespace (including non-breaking spaces) from headings."""
    for heading in iter_nodes(tree, "heading"):
        while heading.children:
            last = heading.children[-1]
            if last.type != "text":
                break
            trimmed = (last.value or "").rstrip()
            if trimmed:
                last.value = trimmed
                break
            heading.children.pop()
