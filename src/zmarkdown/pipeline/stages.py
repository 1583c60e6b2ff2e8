#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/pipeline/stages.py
"""Stage descriptors and the stage registry.

A stage is one step of the rendering pipeline. It can contribute any of:

- a *parser plugin*, called with the :class:`~zmarkdown.parsers.markdown.MarkdownParser` before
  parsing so the stage can add or remove grammar rules
- a *transformer*, called with ``(tree, file, options)`` after parsing; it
  mutates the tree in place (returning ``None``) or returns a replacement
  tree, and may be a coroutine function
- a *compiler*, called with ``(tree, file, options)`` at the end of the
  pipeline to produce the output string

:class:`StageSpec` describes a stage independently of any configuration; the
builder binds it to the isolated configuration slice of one render, producing
a :class:`Stage`.

Examples
--------
Register a custom stage:

    >>> from zmarkdown.pipeline.stages import StageSpec, stage_registry
    >>> def shout(tree, file, options):
    ...     for node in iter_nodes(tree, "text"):
    ...         node.value = node.value.upper()
    >>> stage_registry.register(StageSpec(name="shout", description="Upper-case text", transformer=shout))

"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Union

from zmarkdown.config.isolation import isolate

if TYPE_CHECKING:
    from zmarkdown.config import ConfigBundle
    from zmarkdown.file import RenderedFile

logger = logging.getLogger(__name__)

ParserFactory = Callable[[Any], Any]
ParserPlugin = Callable[[Any, Any], None]
Transformer = Callable[[Any, "RenderedFile", Any], Union[Any, Awaitable[Any]]]
Compiler = Callable[[Any, "RenderedFile", Any], str]


@dataclass(frozen=True)
class Stage:
    """A stage bound to the configuration of one render.

    Parameters
    ----------
    name : str
        Stage name, unique within a pipeline
    options : Any
        Configuration slice handed to the stage's callables
    parser : callable or None
        ``parser(options)`` returning the tokenizer object (exposing
        ``use(plugin)`` and ``parse(text)``); only the parse stage has one
    parser_plugin : callable or None
        ``plugin(parser, options)`` extending the tokenizer
    transformer : callable or None
        ``transformer(tree, file, options)``
    compiler : callable or None
        ``compiler(tree, file, options) -> str``

    """

    name: str
    options: Any = None
    parser: Optional[ParserFactory] = None
    parser_plugin: Optional[ParserPlugin] = None
    transformer: Optional[Transformer] = None
    compiler: Optional[Compiler] = None


@dataclass(frozen=True)
class StageSpec:
    """Registry entry describing a stage.

    Parameters
    ----------
    name : str
        Unique stage name
    description : str
        Human-readable description
    config_key : str or None, default = None
        Key of the tree configuration holding this stage's options
    parser, parser_plugin, transformer, compiler : callable or None
        See :class:`Stage`
    default_options : Any, default = empty dict
        Options used when the configuration has no entry for ``config_key``
    uses_stringify_config : bool, default = False
        The stage receives the whole stringifier configuration instead of a
        slice of the tree configuration

    """

    name: str
    description: str
    config_key: Optional[str] = None
    parser: Optional[ParserFactory] = None
    parser_plugin: Optional[ParserPlugin] = None
    transformer: Optional[Transformer] = None
    compiler: Optional[Compiler] = None
    default_options: Any = field(default_factory=dict)
    uses_stringify_config: bool = False

    def bind(self, options: Any = None) -> Stage:
        """Bind this spec to a configuration slice, or to a fresh copy of the defaults."""
        return Stage(
            name=self.name,
            options=isolate(self.default_options) if options is None else options,
            parser=self.parser,
            parser_plugin=self.parser_plugin,
            transformer=self.transformer,
            compiler=self.compiler,
        )

    def options_from(self, bundle: ConfigBundle) -> Any:
        """Pick this stage's options out of a configuration bundle."""
        if self.uses_stringify_config:
            return bundle.stringify_config
        if self.config_key is None:
            return None
        return bundle.tree_config.get(self.config_key)


class StageRegistry:
    """Registry of stage specs, looked up by name by the pipeline builder.

    Built-in stages are loaded lazily on first access.

    Notes
    -----
    The preferred way to access the registry is the module-level
    ``stage_registry`` instance.

    """

    def __init__(self) -> None:
        """Create an empty registry."""
        self._stages: dict[str, StageSpec] = {}
        self._initialized = False

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self._initialized = True
            builtin = importlib.import_module("zmarkdown.pipeline.builtin")
            for spec in builtin.BUILTIN_STAGES:
                if spec.name not in self._stages:
                    self._stages[spec.name] = spec

    def register(self, spec: StageSpec) -> None:
        """Register a stage spec, overwriting (with a warning) any spec of the same name."""
        self._ensure_initialized()
        if spec.name in self._stages:
            logger.warning(f"Stage '{spec.name}' already registered, overwriting")
        self._stages[spec.name] = spec
        logger.debug(f"Registered stage: {spec.name}")

    def unregister(self, name: str) -> bool:
        """Remove a stage spec.

        Returns
        -------
        bool
            True if the stage was registered

        """
        self._ensure_initialized()
        if name in self._stages:
            del self._stages[name]
            logger.debug(f"Unregistered stage: {name}")
            return True
        return False

    def get(self, name: str) -> StageSpec:
        """Return the stage spec registered under ``name``.

        Raises
        ------
        KeyError
            If no stage of that name is registered

        """
        self._ensure_initialized()
        if name not in self._stages:
            raise KeyError(f"Stage '{name}' not registered")
        return self._stages[name]

    def list_stages(self) -> list[str]:
        """Return the registered stage names, sorted."""
        self._ensure_initialized()
        return sorted(self._stages)

    def __contains__(self, name: object) -> bool:
        """Whether a stage of that name is registered."""
        self._ensure_initialized()
        return name in self._stages


stage_registry = StageRegistry()
