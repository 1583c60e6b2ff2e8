#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/templates/__init__.py
"""Document templates."""

from zmarkdown.templates.latex_document import latex_document_template, render_latex_document

__all__ = ["latex_document_template", "render_latex_document"]
