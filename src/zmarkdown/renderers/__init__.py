#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/renderers/__init__.py
"""Output renderers for the intermediate tree."""

from zmarkdown.renderers.latex import LatexStringifier, escape_latex

__all__ = ["LatexStringifier", "escape_latex"]
