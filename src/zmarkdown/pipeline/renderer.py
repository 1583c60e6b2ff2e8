#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/pipeline/renderer.py
"""Renderer factory.

:func:`renderer_factory` validates a configuration bundle once and returns a
:class:`Renderer`. Each call of the renderer isolates its own copy of the
configuration, builds the pipeline for the renderer's target and runs it
through a single coroutine, :meth:`Renderer.process`.

The same renderer serves two calling styles:

- ``renderer(source)`` returns an awaitable resolving to the rendered file
- ``renderer(source, callback)`` delivers ``callback(error, file)`` exactly
  once; ``error`` is ``None`` on success and ``file`` is ``None`` on failure

Examples
--------
Awaitable style:

    >>> render = renderer_factory(default_config_bundle())
    >>> rendered = asyncio.run(render("# Hello"))
    >>> rendered.contents

Callback style, outside an event loop (runs to completion before returning):

    >>> def done(error, rendered):
    ...     print(error or rendered.contents)
    >>> render("# Hello", done)

"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from pathlib import Path
from typing import Any, Awaitable, Callable, Coroutine, Mapping, Optional, Union

from zmarkdown.ast.nodes import Node
from zmarkdown.config import ConfigBundle
from zmarkdown.constants import NO_TYPOGRAPHY_FLAG, TARGET_HTML, TARGET_LATEX
from zmarkdown.file import RenderedFile
from zmarkdown.pipeline.builder import build_pipeline
from zmarkdown.pipeline.processor import Processor
from zmarkdown.pipeline.stages import StageRegistry

logger = logging.getLogger(__name__)

RenderCallback = Callable[[Optional[BaseException], Optional[RenderedFile]], Any]
Source = Union[str, bytes]


class Renderer:
    """Callable renderer bound to a configuration template and a target.

    Parameters
    ----------
    bundle : ConfigBundle or Mapping
        Configuration template; never mutated, copied for every render
    target : str, default "html"
        ``"html"`` or ``"latex"``
    registry : StageRegistry, optional
        Stage registry used by the pipeline builder

    Raises
    ------
    ConfigurationError
        If a configuration half is missing or empty, or if the configuration
        holds values that cannot be copied per render

    """

    def __init__(
        self,
        bundle: Union[ConfigBundle, Mapping[str, Any], None],
        target: str = TARGET_HTML,
        registry: Optional[StageRegistry] = None,
    ):
        """Validate the configuration template."""
        config = ConfigBundle.coerce(bundle)
        config.validate()
        # Surface uncopyable values now rather than on the first render
        config.isolated()
        self.config = config
        self.target = target
        self._registry = registry

    def create_processor(self) -> Processor:
        """Isolate the configuration and build this render's processor."""
        working_config = self.config.isolated()
        if self.target == TARGET_LATEX:
            working_config.tree_config[NO_TYPOGRAPHY_FLAG] = True
        return Processor(build_pipeline(working_config, self.target, self._registry))

    def parse(self, source: Source) -> Node:
        """Tokenize ``source`` with every parser plugin, without running transformers."""
        return self.create_processor().parse(_as_text(source))

    async def process(self, source: Source, path: Optional[Path] = None) -> RenderedFile:
        """Render ``source`` and return its file context.

        This is the single asynchronous core behind both calling styles.

        """
        text = _as_text(source)
        processor = self.create_processor()
        file = RenderedFile(value=text, path=path)
        logger.debug(f"Rendering {len(text)} characters to {self.target}")
        return await processor.process(text, file)

    def __call__(
        self, source: Source, callback: Optional[RenderCallback] = None, *, path: Optional[Path] = None
    ) -> Union[Awaitable[RenderedFile], "asyncio.Task[RenderedFile]", None]:
        """Render ``source``; see the module documentation for the two calling styles."""
        return deliver(self.process(source, path=path), callback)


def deliver(
    operation: Coroutine[Any, Any, RenderedFile], callback: Optional[RenderCallback]
) -> Union[Awaitable[RenderedFile], "asyncio.Task[RenderedFile]", None]:
    """Hand the outcome of ``operation`` to the caller.

    Parameters
    ----------
    operation : coroutine
        The render coroutine
    callback : callable or None
        ``callback(error, result)``

    Returns
    -------
    awaitable, Task or None
        Without a callback, ``operation`` itself. With a callback inside a
        running event loop, the scheduled task. Otherwise ``None``, after
        the callback has been invoked.

    """
    if callback is None:
        return operation
    if not callable(callback):
        operation.close()
        raise TypeError(f"callback must be callable, got {type(callback).__name__}")

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        task = loop.create_task(operation)
        task.add_done_callback(partial(_settle, callback))
        return task

    try:
        result = asyncio.run(operation)
    except Exception as exc:
        callback(exc, None)
        return None
    callback(None, result)
    return None


def _settle(callback: RenderCallback, task: "asyncio.Task[RenderedFile]") -> None:
    if task.cancelled():
        callback(asyncio.CancelledError(), None)
        return
    error = task.exception()
    if error is not None:
        callback(error, None)
    else:
        callback(None, task.result())


def _as_text(source: Source) -> str:
    if isinstance(source, bytes):
        return source.decode("utf-8")
    return source


def renderer_factory(
    bundle: Union[ConfigBundle, Mapping[str, Any], None],
    target: str = TARGET_HTML,
    registry: Optional[StageRegistry] = None,
) -> Renderer:
    """Build a renderer for ``target`` from a configuration template.

    Parameters
    ----------
    bundle : ConfigBundle or Mapping
        Configuration template with ``tree_config`` and ``stringify_config``
    target : str, default "html"
        ``"html"`` or ``"latex"``
    registry : StageRegistry, optional
        Stage registry used by the pipeline builder

    Returns
    -------
    Renderer
        Callable renderer

    Raises
    ------
    ConfigurationError
        Synchronously, when a configuration half is missing

    """
    return Renderer(bundle, target=target, registry=registry)
