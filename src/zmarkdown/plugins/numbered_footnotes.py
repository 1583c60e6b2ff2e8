#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/numbered_footnotes.py
"""Number footnotes in reference order.

Footnote labels chosen by the writer (``[^note]``, ``[^source]``) are
replaced with ``1``, ``2``, ... in the order the notes are first referenced,
and the definitions are reordered to match. The original labels are kept in
``file.data["footnote_order"]``.

"""

from __future__ import annotations

from typing import Any

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.visitors import iter_nodes
from zmarkdown.constants import FOOTNOTE_ORDER_KEY
from zmarkdown.file import RenderedFile


def transform(tree: Node, file: RenderedFile, options: Any) -> None:
    """Renumber footnote references and definitions."""
    numbers: dict[str, str] = {}
    for reference in iter_nodes(tree, "footnoteReference"):
        identifier = reference.get("identifier")
        if identifier not in numbers:
            numbers[identifier] = str(len(numbers) + 1)
        reference.properties.update(identifier=numbers[identifier], label=numbers[identifier])

    file.data[FOOTNOTE_ORDER_KEY] = list(numbers)
    if not numbers:
        return

    definitions = [child for child in tree.children if child.type == "footnoteDefinition"]
    if not definitions:
        return
    tree.children = [child for child in tree.children if child.type != "footnoteDefinition"]

    referenced = [definition for definition in definitions if definition.get("identifier") in numbers]
    referenced.sort(key=lambda definition: int(numbers[definition.get("identifier")]))
    for definition in referenced:
        number = numbers[definition.get("identifier")]
        definition.properties.update(identifier=number, label=number)
    tree.children.extend(referenced)
