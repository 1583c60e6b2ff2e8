#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/ast/__init__.py
"""Intermediate tree used by the source-tree stages."""

from zmarkdown.ast.nodes import LITERAL_TYPES, Node, Position, root, text
from zmarkdown.ast.utils import inspect, replace_text
from zmarkdown.ast.visitors import EXIT, SKIP, find_first, iter_nodes, iter_with_parents, visit

__all__ = [
    "EXIT",
    "LITERAL_TYPES",
    "Node",
    "Position",
    "SKIP",
    "find_first",
    "inspect",
    "iter_nodes",
    "iter_with_parents",
    "replace_text",
    "root",
    "text",
    "visit",
]
