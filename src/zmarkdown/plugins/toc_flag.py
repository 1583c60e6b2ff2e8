#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/toc_flag.py
"""Table-of-contents flag.

Documents without any heading get ``file.data["disable_toc"] = True`` so the
LaTeX document template can leave out ``\\tableofcontents``; any heading,
however deeply nested, sets it back to ``False``.

"""

from __future__ import annotations

from typing import Any

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.visitors import EXIT, visit
from zmarkdown.constants import DISABLE_TOC_KEY
from zmarkdown.file import RenderedFile


def transform(tree: Node, file: RenderedFile, options: Any) -> None:
    """Set the ``disable_toc`` flag from the presence of headings."""
    file.data[DISABLE_TOC_KEY] = True

    def on_heading(node: Node, index: Any, parent: Any) -> str:
        file.data[DISABLE_TOC_KEY] = False
        return EXIT

    visit(tree, "heading", on_heading)
