#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/utils/__init__.py
"""Shared helpers."""
