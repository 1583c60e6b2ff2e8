#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/ast/visitors.py
"""Traversal helpers for the intermediate tree.

Stages walk the tree with :func:`visit`, which calls a visitor for every node
matching a type (or predicate) together with its parent and its index in the
parent. Visitors may rewrite the parent's child list in place; the return
value tells the walker how to continue.

Examples
--------
Count headings:

    >>> count = 0
    >>> def on_heading(node, index, parent):
    ...     global count
    ...     count += 1
    >>> visit(tree, "heading", on_heading)

Replace a node and skip over the replacement:

    >>> def unwrap(node, index, parent):
    ...     parent.children[index:index + 1] = node.children
    ...     return index + len(node.children)
    >>> visit(tree, "emphasis", unwrap)

"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional, Union

from zmarkdown.ast.nodes import Node

SKIP = "skip"
"""Visitor result: do not descend into the current node's children."""

EXIT = "exit"
"""Visitor result: stop the whole traversal."""

NodeTest = Union[None, str, tuple[str, ...], Callable[[Node], bool]]
Visitor = Callable[[Node, Optional[int], Optional[Node]], Any]


def matches(node: Node, test: NodeTest) -> bool:
    """Check a node against a type name, a tuple of names or a predicate.

    Parameters
    ----------
    node : Node
        Node to test
    test : str, tuple of str, callable or None
        ``None`` matches every node

    Returns
    -------
    bool
        True when the node passes the test

    """
    if test is None:
        return True
    if isinstance(test, str):
        return node.type == test
    if isinstance(test, tuple):
        return node.type in test
    return bool(test(node))


def visit(tree: Node, test: NodeTest, visitor: Visitor) -> None:
    """Walk ``tree`` depth-first and call ``visitor`` on matching nodes.

    The visitor receives ``(node, index, parent)``; for the root both index and
    parent are ``None``. Its return value controls the walk:

    - ``None``: continue, descending into the node's children
    - :data:`SKIP`: continue without descending into this node
    - :data:`EXIT`: stop immediately
    - an ``int``: continue with the sibling at that index (used after the
      visitor replaced or removed siblings)

    Parameters
    ----------
    tree : Node
        Root of the walk
    test : str, tuple of str, callable or None
        Which nodes the visitor is called for
    visitor : callable
        Callback as described above

    """
    _visit(tree, None, None, test, visitor)


def _visit(node: Node, index: Optional[int], parent: Optional[Node], test: NodeTest, visitor: Visitor) -> Any:
    result = visitor(node, index, parent) if matches(node, test) else None

    if result == EXIT:
        return EXIT
    if isinstance(result, int) and not isinstance(result, bool):
        return result
    if result == SKIP:
        return None

    position = 0
    while position < len(node.children):
        child = node.children[position]
        child_result = _visit(child, position, node, test, visitor)
        if child_result == EXIT:
            return EXIT
        if isinstance(child_result, int) and not isinstance(child_result, bool):
            position = child_result
        else:
            position += 1
    return None


def iter_nodes(tree: Node, test: NodeTest = None) -> Iterator[Node]:
    """Yield matching nodes in document order (the tree itself included).

    The child lists are read while iterating; callers that restructure the tree
    should collect the nodes into a list first.

    """
    if matches(tree, test):
        yield tree
    for child in tree.children:
        yield from iter_nodes(child, test)


def iter_with_parents(tree: Node, test: NodeTest = None) -> Iterator[tuple[Node, Optional[Node], Optional[int]]]:
    """Yield ``(node, parent, index)`` triples in document order."""
    stack: list[tuple[Node, Optional[Node], Optional[int]]] = [(tree, None, None)]
    while stack:
        node, parent, index = stack.pop()
        if matches(node, test):
            yield node, parent, index
        for child_index in range(len(node.children) - 1, -1, -1):
            stack.append((node.children[child_index], node, child_index))


def find_first(tree: Node, test: NodeTest) -> Optional[Node]:
    """Return the first node matching ``test`` in document order, or None."""
    return next(iter_nodes(tree, test), None)
