#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/html/__init__.py
"""HTML-tree stages.

``to_html`` turns the intermediate tree into a BeautifulSoup fragment; the
other modules of this package mutate that fragment, and
:mod:`zmarkdown.html.stringify` serializes it.
"""

from zmarkdown.html.to_html import HtmlTreeBuilder
from zmarkdown.html.wrappers import DEFAULT_WRAPPERS, WrapperRule, apply_wrappers

__all__ = ["DEFAULT_WRAPPERS", "HtmlTreeBuilder", "WrapperRule", "apply_wrappers"]
