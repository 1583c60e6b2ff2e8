#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/heading_shift.py
"""Shift heading depths by a configured amount, clamped to 1..6."""

from __future__ import annotations

from typing import Any

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.visitors import iter_nodes
from zmarkdown.exceptions import ValidationError
from zmarkdown.file import RenderedFile


def transform(tree: Node, file: RenderedFile, options: Any) -> None:
    """Add ``options`` (an int) to the depth of every heading."""
    shift = options or 0
    if isinstance(shift, bool) or not isinstance(shift, int):
        raise ValidationError(
            f"heading_shift must be an integer, got {type(shift).__name__}",
            parameter_name="heading_shift",
            parameter_value=shift,
        )
    if not shift:
        return
    for heading in iter_nodes(tree, "heading"):
        heading.properties["depth"] = min(max(heading.get("depth", 1) + shift, 1), 6)
