#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/html/highlight.py
"""Syntax highlighting of fenced code.

Every ``<pre><code class="language-X">`` element is highlighted with Pygments;
the token spans replace the element's text and the ``code`` element gains the
``hljs`` class. The stage is left out of the pipeline in test mode so output
does not depend on the installed Pygments version.

Options
-------
ignore_missing : bool
    Leave code in an unknown language untouched instead of failing the render
plain_text : list of str
    Languages never highlighted
class_prefix : str
    Prefix of the CSS classes of token spans

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from bs4 import BeautifulSoup, Tag
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from zmarkdown.exceptions import RenderingError
from zmarkdown.file import RenderedFile

logger = logging.getLogger(__name__)

LANGUAGE_CLASS_PREFIX = "language-"


def code_language(code: Tag) -> Optional[str]:
    """Language of a ``code`` element, from its ``language-X`` class."""
    for css_class in code.get("class") or []:
        if css_class.startswith(LANGUAGE_CLASS_PREFIX):
            return css_class[len(LANGUAGE_CLASS_PREFIX) :]
    return None


def highlight_code(source: str, language: str, class_prefix: str = "hljs-") -> str:
    """Highlight ``source`` and return the HTML of its token spans.

    Raises
    ------
    pygments.util.ClassNotFound
        If Pygments has no lexer for ``language``

    """
    lexer = get_lexer_by_name(language)
    formatter = HtmlFormatter(nowrap=True, classprefix=class_prefix)
    return highlight(source, lexer, formatter)


def transform(soup: BeautifulSoup, file: RenderedFile, options: Optional[Mapping[str, Any]]) -> None:
    """Highlight every fenced code element of ``soup``."""
    options = options or {}
    ignore_missing = bool(options.get("ignore_missing", True))
    plain_text = set(options.get("plain_text", []))
    class_prefix = str(options.get("class_prefix", "hljs-"))

    for code in soup.select("pre > code"):
        language = code_language(code)
        if not language or language in plain_text:
            continue
        try:
            highlighted = highlight_code(code.get_text(), language, class_prefix)
        except ClassNotFound as exc:
            if ignore_missing:
                logger.debug(f"No lexer for '{language}', leaving code as is")
                continue
            raise RenderingError(
                f"Unknown language '{language}' in fenced code", rendering_stage="highlight", original_error=exc
            ) from exc
        code.clear()
        for element in list(BeautifulSoup(highlighted, "html.parser").contents):
            code.append(element)
        code["class"] = [*code.get("class", []), "hljs"]
