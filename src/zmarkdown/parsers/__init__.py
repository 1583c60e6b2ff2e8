#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/parsers/__init__.py
"""Markdown parsing."""

from zmarkdown.parsers.markdown import MarkdownParser

__all__ = ["MarkdownParser"]
