#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/captions.py
"""Figure captions.

External captions are written in the paragraph that follows a table, a code
block, display math or an embed, starting with the configured prefix::

    | a | b |
    |---|---|
    | 1 | 2 |
    Table: Numbers

Internal captions are the last line inside a block quote, or the line below
an image alone in its paragraph::

    > Knowledge is power.
    > Source: Francis Bacon

    ![A cat](cat.png)
    Figure: The office cat

Either way the captioned node and a ``figcaption`` holding the caption
(prefix removed) become the children of a ``figure`` node.

Options
-------
external : dict
    Node type to caption prefix, for captions following the node
internal : dict
    ``blockquote`` and ``image`` prefixes, for captions inside the node

"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.utils import block_text_lines, strip_leading_text
from zmarkdown.ast.visitors import iter_nodes
from zmarkdown.file import RenderedFile


def _caption_from(nodes: list[Node], prefix: str) -> Optional[Node]:
    """Build a figcaption from inline ``nodes`` starting with ``prefix``, or None."""
    nodes = list(nodes)
    if not strip_leading_text(nodes, prefix):
        return None
    if nodes and nodes[0].type == "text":
        remainder = (nodes[0].value or "").lstrip()
        if remainder:
            nodes[0] = Node("text", value=remainder)
        else:
            del nodes[0]
    return Node("figcaption", children=nodes)


def _join_lines(lines: list[list[Node]]) -> list[Node]:
    joined: list[Node] = []
    for index, line in enumerate(lines):
        if index:
            joined.append(Node("text", value="\n"))
        joined.extend(line)
    return joined


def _external(parent: Node, prefixes: Mapping[str, str]) -> None:
    index = 0
    while index < len(parent.children) - 1:
        node = parent.children[index]
        following = parent.children[index + 1]
        prefix = prefixes.get(node.type)
        if prefix and following.type == "paragraph":
            lines = block_text_lines(following)
            caption = _caption_from(lines[0], prefix)
            if caption is not None:
                parent.children[index : index + 2] = [Node("figure", children=[node, caption])]
                if len(lines) > 1:
                    # Lines below the caption stay a paragraph of their own
                    parent.children.insert(index + 1, Node("paragraph", children=_join_lines(lines[1:])))
        index += 1


def _blockquote(parent: Node, prefix: str) -> None:
    for index, node in enumerate(parent.children):
        if node.type != "blockquote" or not node.children or node.children[-1].type != "paragraph":
            continue
        lines = block_text_lines(node.children[-1])
        caption = _caption_from(lines[-1], prefix)
        if caption is None:
            continue
        if len(lines) > 1:
            node.children[-1] = Node("paragraph", children=_join_lines(lines[:-1]))
        else:
            node.children.pop()
        parent.children[index] = Node("figure", children=[node, caption])


def _image(parent: Node, prefix: str) -> None:
    for index, node in enumerate(parent.children):
        if node.type != "paragraph":
            continue
        lines = block_text_lines(node)
        if len(lines) < 2 or len(lines[0]) != 1 or lines[0][0].type != "image":
            continue
        caption = _caption_from(_join_lines(lines[1:]), prefix)
        if caption is not None:
            parent.children[index] = Node("figure", children=[lines[0][0], caption])


def transform(tree: Node, file: RenderedFile, options: Mapping[str, Any]) -> None:
    """Turn captioned nodes into figures."""
    options = options or {}
    external: Mapping[str, str] = options.get("external", {})
    internal: Mapping[str, str] = options.get("internal", {})

    parents = [node for node in iter_nodes(tree) if node.children and node.type != "figure"]
    for parent in parents:
        if external:
            _external(parent, external)
        if internal.get("blockquote"):
            _blockquote(parent, internal["blockquote"])
        if internal.get("image"):
            _image(parent, internal["image"])
