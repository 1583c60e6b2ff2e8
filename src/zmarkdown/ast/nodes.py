#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/ast/nodes.py
"""Tree model shared by the source-tree stages.

Every stage between parsing and stringification reads and rewrites the same
kind of tree: an ordered, typed node tree in which each node carries a type
tag, a property mapping, an ordered list of children and, when known, the
span of source lines it came from.

Node Vocabulary
---------------
Block-level types:
    root, paragraph, heading, code, blockquote, list, listItem,
    thematicBreak, html, table, tableRow, tableCell, footnoteDefinition,
    math, iframe, figure, figcaption, customBlock, customBlockHeading,
    customBlockBody, centerAligned, rightAligned, leftAligned

Inline types:
    text, emphasis, strong, delete, inlineCode, break, link, image,
    footnoteReference, inlineMath, abbr, sub, sup, kbd, ping, emoticon,
    comment

Children order is document order. A node belongs to exactly one parent;
stages must never share a subtree between two parents.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

LITERAL_TYPES: frozenset[str] = frozenset(
    {"text", "inlineCode", "code", "html", "math", "inlineMath", "comment"}
)


@dataclass
class Position:
    """Source span of a node.

    Parameters
    ----------
    start_line : int
        First source line of the node (1-based)
    end_line : int or None, default = None
        Last source line of the node (1-based, inclusive)

    """

    start_line: int
    end_line: Optional[int] = None


@dataclass
class Node:
    """A node of the intermediate tree.

    Parameters
    ----------
    type : str
        Type tag (e.g. ``"heading"``, ``"text"``)
    properties : dict, default = empty dict
        Type-specific data (``depth`` for headings, ``url`` for links, ...)
    children : list of Node, default = empty list
        Child nodes in document order
    value : str or None, default = None
        Literal content of leaf nodes (text, code, math, raw html)
    position : Position or None, default = None
        Source span, when the tokenizer reports one

    Examples
    --------
        >>> heading = Node("heading", {"depth": 1}, [Node("text", value="Title")])
        >>> heading.text_content()
        'Title'

    """

    type: str
    properties: dict[str, Any] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    value: Optional[str] = None
    position: Optional[Position] = None

    @property
    def is_literal(self) -> bool:
        """Whether the node carries its content in ``value`` rather than children."""
        return self.type in LITERAL_TYPES

    def get(self, name: str, default: Any = None) -> Any:
        """Return a property value, or ``default`` when the property is absent."""
        return self.properties.get(name, default)

    def text_content(self) -> str:
        """Concatenate the literal content of this node and all its descendants.

        Returns
        -------
        str
            Plain text of the subtree, in document order

        """
        if self.value is not None and not self.children:
            return self.value
        return "".join(child.text_content() for child in self.children)

    def iter_descendants(self) -> Iterator[Node]:
        """Yield every descendant in depth-first pre-order (the node itself excluded)."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()


def text(value: str) -> Node:
    """Build a text node."""
    return Node("text", value=value)


def root(children: list[Node] | None = None) -> Node:
    """Build a root node."""
    return Node("root", children=list(children or []))
