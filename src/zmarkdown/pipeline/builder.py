#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/pipeline/builder.py
"""Pipeline assembly and target selection.

:func:`build_pipeline` turns a configuration bundle and a target into the
ordered tuple of stages one render runs. Both targets share the parse stage
and the source-tree stages; they differ in what follows the table-of-contents
flag:

- ``latex``: source tree -> LaTeX string
- anything else: source tree -> HTML tree -> HTML string

The order of :data:`SOURCE_TREE_STAGES` and :data:`HTML_TREE_STAGES` is part
of the rendering semantics: later stages rely on node types introduced by
earlier ones (math nodes must exist before anything walks generic inline
content, for instance). Reordering them changes the output.

"""

from __future__ import annotations

import logging
from typing import Optional

from zmarkdown.config import ConfigBundle
from zmarkdown.constants import NO_TYPOGRAPHY_FLAG, TARGET_HTML, TARGET_LATEX, TEST_MODE_FLAG
from zmarkdown.exceptions import PipelineError
from zmarkdown.pipeline.stages import Stage, StageRegistry, stage_registry

logger = logging.getLogger(__name__)

PARSE_STAGE = "parse"
TYPOGRAPHY_STAGE = "typography"
TOC_FLAG_STAGE = "toc_flag"
LATEX_STRINGIFY_STAGE = "latex_stringify"
TO_HTML_STAGE = "to_html"
HIGHLIGHT_STAGE = "highlight"
HTML_STRINGIFY_STAGE = "html_stringify"

SOURCE_TREE_STAGES: tuple[str, ...] = (
    "abbr",
    "align",
    "captions",
    "comments",
    "custom_blocks",
    "disable_tokenizers",
    "emoticons",
    "escape_escaped",
    "grid_tables",
    "heading_shift",
    "iframes",
    "images_download",
    "math",
    "kbd",
    "numbered_footnotes",
    "ping",
    "sub_super",
    "heading_trailing_spaces",
)

HTML_TREE_STAGES: tuple[str, ...] = (
    "slug",
    "autolink_headings",
    "html_blocks",
    "footnotes_title",
    "math_render",
    "wrappers",
)


def stage_names(bundle: ConfigBundle, target: str = TARGET_HTML) -> list[str]:
    """Return the ordered stage names for ``target``.

    Parameters
    ----------
    bundle : ConfigBundle
        Configuration of the render; only its top-level flags are read
    target : str, default "html"
        Output format

    Returns
    -------
    list of str
        Stage names in execution order

    """
    tree_config = bundle.tree_config
    names = [PARSE_STAGE]

    if target != TARGET_LATEX and not tree_config.get(NO_TYPOGRAPHY_FLAG):
        names.append(TYPOGRAPHY_STAGE)

    names.extend(SOURCE_TREE_STAGES)
    names.append(TOC_FLAG_STAGE)

    if target == TARGET_LATEX:
        names.append(LATEX_STRINGIFY_STAGE)
        return names

    names.append(TO_HTML_STAGE)
    if not tree_config.get(TEST_MODE_FLAG):
        names.append(HIGHLIGHT_STAGE)
    names.extend(HTML_TREE_STAGES)
    names.append(HTML_STRINGIFY_STAGE)
    return names


def build_pipeline(
    bundle: ConfigBundle, target: str = TARGET_HTML, registry: Optional[StageRegistry] = None
) -> tuple[Stage, ...]:
    """Assemble the stages of one render.

    Parameters
    ----------
    bundle : ConfigBundle
        The render's isolated configuration; stage options are slices of it
    target : str, default "html"
        ``"latex"`` selects the LaTeX shape, anything else the HTML shape
    registry : StageRegistry, optional
        Where stage specs are looked up; defaults to the global registry

    Returns
    -------
    tuple of Stage
        Stages in execution order. The result depends only on
        ``(bundle, target)``.

    Raises
    ------
    PipelineError
        If a stage name is missing from the registry or appears twice

    """
    registry = registry or stage_registry
    names = stage_names(bundle, target)

    if len(set(names)) != len(names):
        duplicates = sorted({name for name in names if names.count(name) > 1})
        raise PipelineError(f"Duplicate stages in pipeline: {', '.join(duplicates)}")

    stages: list[Stage] = []
    for name in names:
        try:
            spec = registry.get(name)
        except KeyError as exc:
            raise PipelineError(f"Stage '{name}' is not registered", original_error=exc) from exc
        stages.append(spec.bind(spec.options_from(bundle)))

    logger.debug(f"Built {target} pipeline: {' -> '.join(names)}")
    return tuple(stages)
