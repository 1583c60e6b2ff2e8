#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/api.py
"""Public entry points.

:func:`create_zmarkdown` bundles a configuration template and a target into a
:class:`Zmarkdown` object exposing everything an integrator needs: the
configuration, a tree inspector, parsing, renderer construction, string and
file rendering, and the LaTeX document template.

Examples
--------
Render a string to HTML:

    >>> import asyncio
    >>> from zmarkdown import create_zmarkdown
    >>> zmd = create_zmarkdown()
    >>> rendered = asyncio.run(zmd.render_string("# Hello *world*"))
    >>> print(rendered)

Render a file to a complete LaTeX document:

    >>> zmd = create_zmarkdown(target="latex")
    >>> rendered = asyncio.run(zmd.render_file("tutorial.md"))
    >>> document = render_latex_document(rendered, title="Tutorial")

"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Mapping, Optional, Union

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.utils import inspect as inspect_tree
from zmarkdown.config import ConfigBundle, default_config_bundle
from zmarkdown.constants import TARGET_HTML
from zmarkdown.file import RenderedFile
from zmarkdown.pipeline.renderer import RenderCallback, Renderer, deliver, renderer_factory
from zmarkdown.templates.latex_document import latex_document_template, render_latex_document

logger = logging.getLogger(__name__)

BundleLike = Union[ConfigBundle, Mapping[str, Any], None]


class Zmarkdown:
    """Configured zmarkdown instance.

    Parameters
    ----------
    bundle : ConfigBundle or Mapping
        Configuration template
    target : str, default "html"
        Output format of :meth:`render_string` and :meth:`render_file`

    Attributes
    ----------
    config : ConfigBundle
        The configuration template (never mutated by renders)
    inspect : callable
        ``inspect(tree) -> str`` outline of an intermediate tree
    latex_document_template : callable
        See :func:`zmarkdown.templates.latex_document.latex_document_template`

    """

    inspect = staticmethod(inspect_tree)
    latex_document_template = staticmethod(latex_document_template)

    def __init__(self, bundle: BundleLike, target: str = TARGET_HTML):
        """Validate the configuration and build the default renderer."""
        self._renderer = renderer_factory(bundle, target=target)
        self.config: ConfigBundle = self._renderer.config
        self.target = target

    def parse(self, text: Union[str, bytes]) -> Node:
        """Parse ``text`` into the intermediate tree (grammar plugins only, no transformers)."""
        return self._renderer.parse(text)

    def renderer_factory(self, bundle: BundleLike = None, target: Optional[str] = None) -> Renderer:
        """Build a renderer; defaults to this instance's configuration and target."""
        return renderer_factory(bundle if bundle is not None else self.config, target=target or self.target)

    def render_string(
        self, text: Union[str, bytes], callback: Optional[RenderCallback] = None
    ) -> Optional[Awaitable[RenderedFile]]:
        """Render markdown text; returns an awaitable unless ``callback`` is given."""
        return self._renderer(text, callback)

    def render_file(
        self, path: Union[str, Path], callback: Optional[RenderCallback] = None
    ) -> Optional[Awaitable[RenderedFile]]:
        """Render a UTF-8 markdown file.

        Parameters
        ----------
        path : str or Path
            File to render
        callback : callable, optional
            ``callback(error, file)``; a read error is delivered through it
            like a render error

        """
        return deliver(self._render_file(Path(path)), callback)

    async def _render_file(self, path: Path) -> RenderedFile:
        logger.debug(f"Reading {path}")
        # File I/O stays off the event loop thread
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        return await self._renderer.process(text, path=path)


def create_zmarkdown(bundle: BundleLike = None, target: str = TARGET_HTML) -> Zmarkdown:
    """Create a :class:`Zmarkdown` instance.

    Parameters
    ----------
    bundle : ConfigBundle, Mapping or None, default None
        Configuration template; ``None`` uses :func:`default_config_bundle`
    target : str, default "html"
        ``"html"`` or ``"latex"``

    Raises
    ------
    ConfigurationError
        If the configuration is missing a half or cannot be copied

    """
    return Zmarkdown(default_config_bundle() if bundle is None else bundle, target=target)


__all__ = [
    "Zmarkdown",
    "create_zmarkdown",
    "latex_document_template",
    "render_latex_document",
    "renderer_factory",
]
