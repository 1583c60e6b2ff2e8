#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/templates/latex_document.py
"""Full LaTeX document around a rendered body.

The template uses LaTeX-friendly Jinja2 delimiters (``\\VAR{...}`` and
``\\BLOCK{...}``) so braces in the template stay plain LaTeX. The table of
contents is emitted unless ``disable_toc`` is true; a render stores that
flag in ``file.data["disable_toc"]``, which :func:`render_latex_document`
forwards.

Template variables
------------------
content : str
    LaTeX body
title : str
    Document title (escaped)
authors : list of str
    Author names (escaped)
license : str, optional
    License shown below the title (escaped)
disable_toc : bool
    Leave out ``\\tableofcontents``
document_class : str
    Document class (``"article"`` by default)
packages : list of str
    Extra packages to load

"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from jinja2 import Environment, StrictUndefined, Template

from zmarkdown.constants import DISABLE_TOC_KEY
from zmarkdown.file import RenderedFile
from zmarkdown.renderers.latex import escape_latex

logger = logging.getLogger(__name__)

DEFAULT_PACKAGES: tuple[str, ...] = ("fontspec", "graphicx", "hyperref", "ulem", "menukeys", "amsmath")

LATEX_DOCUMENT_TEMPLATE = r"""\documentclass{\VAR{document_class}}
\BLOCK{for package in packages}
\usepackage{\VAR{package}}
\BLOCK{endfor}

\title{\VAR{title|escape_latex}}
\author{\VAR{authors|map('escape_latex')|join(' \\and ')}}
\date{}

\begin{document}
\maketitle
\BLOCK{if license}
\begin{center}\VAR{license|escape_latex}\end{center}
\BLOCK{endif}
\BLOCK{if not disable_toc}
\tableofcontents
\BLOCK{endif}

\VAR{content}
\end{document}
"""


def create_environment() -> Environment:
    """Build the Jinja2 environment with LaTeX delimiters and the ``escape_latex`` filter."""
    # Output is LaTeX, not HTML
    environment = Environment(  # nosec B701
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        block_start_string=r"\BLOCK{",
        block_end_string="}",
        variable_start_string=r"\VAR{",
        variable_end_string="}",
        comment_start_string=r"\#{",
        comment_end_string="}",
    )
    environment.filters["escape_latex"] = escape_latex
    return environment


def get_template() -> Template:
    """Return the compiled document template."""
    return create_environment().from_string(LATEX_DOCUMENT_TEMPLATE)


def latex_document_template(
    content: str,
    *,
    title: str = "",
    authors: Sequence[str] = (),
    license: Optional[str] = None,
    disable_toc: bool = False,
    document_class: str = "article",
    packages: Sequence[str] = DEFAULT_PACKAGES,
) -> str:
    """Render a complete LaTeX document around ``content``.

    Parameters
    ----------
    content : str
        Rendered LaTeX body
    title : str, default ""
        Document title
    authors : Sequence[str], default ()
        Author names
    license : str or None, default None
        License notice
    disable_toc : bool, default False
        Leave out the table of contents
    document_class : str, default "article"
        LaTeX document class
    packages : Sequence[str], default DEFAULT_PACKAGES
        Packages loaded in the preamble

    Returns
    -------
    str
        The LaTeX document

    """
    return get_template().render(
        content=content,
        title=title,
        authors=list(authors),
        license=license,
        disable_toc=disable_toc,
        document_class=document_class,
        packages=list(packages),
    )


def render_latex_document(file: RenderedFile, **variables: Any) -> str:
    """Wrap the output of a LaTeX render in the document template.

    The table of contents follows ``file.data["disable_toc"]`` unless
    ``disable_toc`` is passed explicitly.
    """
    variables.setdefault("disable_toc", bool(file.data.get(DISABLE_TOC_KEY, False)))
    logger.debug(f"Rendering LaTeX document (disable_toc={variables['disable_toc']})")
    return latex_document_template(str(file), **variables)
