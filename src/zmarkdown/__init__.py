#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/__init__.py
"""zmarkdown - rendering of an extended markdown dialect to HTML and LaTeX.

Documents go through a declarative, ordered list of stages over a shared
tree: mistune tokenizes the source, syntax-extension stages rewrite the
intermediate tree, and the target decides the tail of the pipeline.

- ``html``: the tree becomes a BeautifulSoup fragment, refined by the HTML
  stages (highlighting, heading anchors, wrappers) and serialized
- ``latex``: the tree is serialized to a LaTeX body, which
  :func:`render_latex_document` can wrap in a complete document

Every render works on its own copy of the configuration, so one renderer can
serve concurrent renders.

Examples
--------
    >>> import asyncio
    >>> from zmarkdown import create_zmarkdown
    >>> zmd = create_zmarkdown()
    >>> asyncio.run(zmd.render_string("Hello **world**")).contents
    '<p>Hello <strong>world</strong></p>'

"""

from zmarkdown.api import Zmarkdown, create_zmarkdown
from zmarkdown.ast.nodes import Node, Position
from zmarkdown.config import ConfigBundle, default_config_bundle, default_stringify_config, default_tree_config
from zmarkdown.exceptions import (
    ConfigurationError,
    NetworkError,
    ParsingError,
    PipelineError,
    RenderingError,
    StageError,
    ValidationError,
    WrapperConflictError,
    ZmarkdownError,
)
from zmarkdown.file import RenderedFile
from zmarkdown.pipeline.renderer import Renderer, renderer_factory
from zmarkdown.templates.latex_document import latex_document_template, render_latex_document

__version__ = "1.0.0"

__all__ = [
    "ConfigBundle",
    "ConfigurationError",
    "NetworkError",
    "Node",
    "ParsingError",
    "PipelineError",
    "Position",
    "RenderedFile",
    "Renderer",
    "RenderingError",
    "StageError",
    "ValidationError",
    "WrapperConflictError",
    "Zmarkdown",
    "ZmarkdownError",
    "create_zmarkdown",
    "default_config_bundle",
    "default_stringify_config",
    "default_tree_config",
    "latex_document_template",
    "render_latex_document",
    "renderer_factory",
]
