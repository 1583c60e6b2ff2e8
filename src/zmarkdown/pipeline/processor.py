#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/pipeline/processor.py
"""Pipeline executor.

A :class:`Processor` runs one ordered tuple of stages over one document:

1. the parse stage builds the tokenizer and every stage's parser plugin is
   applied to it, in pipeline order
2. the source is tokenized into the intermediate tree
3. every transformer runs, strictly one after the other; coroutine
   transformers are awaited before the next stage starts
4. the final stage's compiler serializes the tree to the output string

Any failure aborts the remaining stages and surfaces as a single
:class:`~zmarkdown.exceptions.ZmarkdownError`; no partial output is kept.

"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Optional, Sequence

from zmarkdown.exceptions import ParsingError, PipelineError, StageError, ZmarkdownError
from zmarkdown.file import RenderedFile
from zmarkdown.pipeline.stages import Stage

logger = logging.getLogger(__name__)


class Processor:
    """Execute an ordered stage list.

    Parameters
    ----------
    stages : sequence of Stage
        Stages in execution order; exactly one must provide a parser and
        the last one must provide a compiler

    Raises
    ------
    PipelineError
        If the stage list has no parser or no final compiler

    """

    def __init__(self, stages: Sequence[Stage]):
        """Validate and store the stage list."""
        self.stages: tuple[Stage, ...] = tuple(stages)

        parse_stages = [stage for stage in self.stages if stage.parser is not None]
        if len(parse_stages) != 1:
            raise PipelineError(f"A pipeline needs exactly one parse stage, found {len(parse_stages)}")
        self._parse_stage = parse_stages[0]

        if not self.stages or self.stages[-1].compiler is None:
            raise PipelineError("The last stage of a pipeline must provide a compiler")

    @property
    def stage_names(self) -> list[str]:
        """Names of the stages, in execution order."""
        return [stage.name for stage in self.stages]

    def create_parser(self) -> Any:
        """Build the tokenizer with every stage's parser plugin applied."""
        parser = self._parse_stage.parser(self._parse_stage.options)  # type: ignore[misc]
        for stage in self.stages:
            if stage.parser_plugin is not None:
                logger.debug(f"Applying parser plugin of stage '{stage.name}'")
                stage.parser_plugin(parser, stage.options)
        return parser

    def parse(self, source: str) -> Any:
        """Tokenize ``source`` into the intermediate tree without running transformers.

        Raises
        ------
        ParsingError
            If the tokenizer fails

        """
        try:
            parser = self.create_parser()
            return parser.parse(source)
        except ZmarkdownError:
            raise
        except Exception as exc:
            raise ParsingError(f"Failed to parse markdown: {exc}", parsing_stage="parse", original_error=exc) from exc

    async def run(self, tree: Any, file: RenderedFile) -> Any:
        """Run every transformer over ``tree`` in order.

        Parameters
        ----------
        tree : Any
            Tree produced by :meth:`parse`
        file : RenderedFile
            File context of this render

        Returns
        -------
        Any
            The final tree (a transformer may replace it with a new one)

        Raises
        ------
        StageError
            If a transformer raises

        """
        for stage in self.stages:
            if stage.transformer is None:
                continue
            logger.debug(f"Running stage '{stage.name}'")
            try:
                result = stage.transformer(tree, file, stage.options)
                if inspect.isawaitable(result):
                    result = await result
            except StageError:
                raise
            except ZmarkdownError as exc:
                raise StageError(stage.name, message=exc.message, original_error=exc) from exc
            except Exception as exc:
                raise StageError(stage.name, original_error=exc) from exc
            if result is not None:
                tree = result
        return tree

    def stringify(self, tree: Any, file: RenderedFile) -> str:
        """Serialize ``tree`` with the final stage's compiler."""
        stage = self.stages[-1]
        try:
            return stage.compiler(tree, file, stage.options)  # type: ignore[misc]
        except ZmarkdownError as exc:
            raise StageError(stage.name, message=exc.message, original_error=exc) from exc
        except Exception as exc:
            raise StageError(stage.name, original_error=exc) from exc

    async def process(self, source: str, file: Optional[RenderedFile] = None) -> RenderedFile:
        """Parse, transform and stringify ``source``.

        Parameters
        ----------
        source : str
            Markdown source
        file : RenderedFile, optional
            File context to fill; a new one is created when omitted

        Returns
        -------
        RenderedFile
            The file context with ``contents`` set to the rendered output

        """
        file = file if file is not None else RenderedFile(value=source)
        tree = self.parse(source)
        tree = await self.run(tree, file)
        contents = self.stringify(tree, file)
        file.tree = tree
        file.contents = contents
        return file
