#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/ast/utils.py
"""Utility functions for working with the intermediate tree.

Functions
---------
inspect : Render a tree as an indented, human readable outline
replace_text : Split text nodes around regex matches and splice in new nodes
block_text_lines : Split a paragraph's inline children into source lines

"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional, Pattern

from zmarkdown.ast.nodes import Node

# Literal containers whose text must never be rewritten by inline syntax stages
PROTECTED_TYPES: tuple[str, ...] = ("code", "inlineCode", "math", "inlineMath", "html", "link", "comment")

_MAX_INSPECT_VALUE = 40


def inspect(tree: Node) -> str:
    """Render ``tree`` as an outline, one node per line.

    Parameters
    ----------
    tree : Node
        Tree to render

    Returns
    -------
    str
        Outline such as::

            root[2]
            ├─ heading[1] depth=1
            │  └─ text 'Title'
            └─ paragraph[1]
               └─ text 'Body'

    """
    lines: list[str] = []
    _inspect_node(tree, "", "", lines)
    return "\n".join(lines)


def _describe(node: Node) -> str:
    label = node.type
    if node.children:
        label += f"[{len(node.children)}]"
    if node.properties:
        label += " " + " ".join(f"{key}={value!r}" for key, value in node.properties.items())
    if node.value is not None:
        shown = node.value if len(node.value) <= _MAX_INSPECT_VALUE else node.value[:_MAX_INSPECT_VALUE] + "…"
        label += f" {shown!r}"
    if node.position is not None:
        end = node.position.end_line if node.position.end_line is not None else node.position.start_line
        label += f" ({node.position.start_line}-{end})"
    return label


def _inspect_node(node: Node, prefix: str, child_prefix: str, lines: list[str]) -> None:
    lines.append(prefix + _describe(node))
    for position, child in enumerate(node.children):
        last = position == len(node.children) - 1
        _inspect_node(
            child,
            child_prefix + ("└─ " if last else "├─ "),
            child_prefix + ("   " if last else "│  "),
            lines,
        )


def replace_text(
    tree: Node,
    pattern: Pattern[str],
    make_nodes: Callable[[re.Match[str]], Optional[Iterable[Node]]],
    protected: tuple[str, ...] = PROTECTED_TYPES,
) -> int:
    """Split text nodes around matches of ``pattern``.

    For every match, ``make_nodes`` returns the nodes that replace the matched
    text; returning ``None`` keeps the match as plain text. Text under a
    protected node type is left alone.

    Parameters
    ----------
    tree : Node
        Tree to rewrite in place
    pattern : Pattern
        Compiled regular expression
    make_nodes : callable
        Factory called with each match
    protected : tuple of str
        Node types whose subtrees are skipped

    Returns
    -------
    int
        Number of matches that were replaced

    """
    return _replace_in(tree, pattern, make_nodes, protected)


def _replace_in(
    node: Node,
    pattern: Pattern[str],
    make_nodes: Callable[[re.Match[str]], Optional[Iterable[Node]]],
    protected: tuple[str, ...],
) -> int:
    if node.type in protected:
        return 0

    replaced = 0
    new_children: list[Node] = []
    for child in node.children:
        if child.type != "text" or not child.value:
            replaced += _replace_in(child, pattern, make_nodes, protected)
            new_children.append(child)
            continue

        cursor = 0
        pieces: list[Node] = []
        for match in pattern.finditer(child.value):
            produced = make_nodes(match)
            if produced is None:
                continue
            if match.start() > cursor:
                pieces.append(Node("text", value=child.value[cursor : match.start()]))
            pieces.extend(produced)
            cursor = match.end()
            replaced += 1

        if not pieces:
            new_children.append(child)
            continue
        if cursor < len(child.value):
            pieces.append(Node("text", value=child.value[cursor:]))
        new_children.extend(pieces)

    node.children = new_children
    return replaced


def block_text_lines(paragraph: Node) -> list[list[Node]]:
    """Split the inline children of a paragraph on soft line endings.

    Soft line endings are text nodes containing ``\\n``; the newline itself is
    dropped and the surrounding text is kept in the neighbouring lines.

    Returns
    -------
    list of list of Node
        Inline nodes of each source line

    """
    lines: list[list[Node]] = [[]]
    for child in paragraph.children:
        if child.type == "text" and child.value and "\n" in child.value:
            parts = child.value.split("\n")
            for index, part in enumerate(parts):
                if index:
                    lines.append([])
                if part:
                    lines[-1].append(Node("text", value=part))
        else:
            lines[-1].append(child)
    return lines


def strip_leading_text(nodes: list[Node], prefix: str) -> bool:
    """Remove ``prefix`` from the first text node of ``nodes`` in place.

    Returns
    -------
    bool
        True when the prefix was present and removed

    """
    if not nodes or nodes[0].type != "text" or not (nodes[0].value or "").startswith(prefix):
        return False
    remainder = (nodes[0].value or "")[len(prefix) :]
    if remainder:
        nodes[0] = Node("text", value=remainder)
    else:
        del nodes[0]
    return True


def strip_trailing_text(nodes: list[Node], suffix: str) -> bool:
    """Remove ``suffix`` from the last text node of ``nodes`` in place."""
    if not nodes or nodes[-1].type != "text" or not (nodes[-1].value or "").endswith(suffix):
        return False
    remainder = (nodes[-1].value or "")[: -len(suffix)]
    if remainder:
        nodes[-1] = Node("text", value=remainder)
    else:
        del nodes[-1]
    return True
