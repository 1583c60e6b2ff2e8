#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/pipeline/builtin.py
"""Descriptors of the built-in stages.

Loaded lazily by :class:`~zmarkdown.pipeline.stages.StageRegistry` the first
time the registry is used.
"""

from __future__ import annotations

from zmarkdown.html import (
    autolink_headings,
    footnotes_title,
    highlight,
    html_blocks,
    math_render,
    slug,
    stringify,
    to_html,
    wrappers,
)
from zmarkdown.parsers.markdown import MarkdownParser
from zmarkdown.pipeline.stages import StageSpec
from zmarkdown.plugins import (
    abbr,
    align,
    captions,
    comments,
    custom_blocks,
    disable_tokenizers,
    emoticons,
    escape_escaped,
    grid_tables,
    heading_shift,
    heading_trailing_spaces,
    iframes,
    images_download,
    kbd,
    math,
    numbered_footnotes,
    ping,
    sub_super,
    toc_flag,
    typography,
)
from zmarkdown.renderers.latex import compile_latex

BUILTIN_STAGES: tuple[StageSpec, ...] = (
    StageSpec(name="parse", description="Tokenize markdown with mistune", config_key="parse", parser=MarkdownParser),
    StageSpec(
        name="typography",
        description="Typographic replacements",
        config_key="typography",
        transformer=typography.transform,
    ),
    StageSpec(name="abbr", description="Abbreviations", parser_plugin=abbr.parser_plugin),
    StageSpec(
        name="align",
        description="Centered and right/left aligned blocks",
        config_key="align_blocks",
        parser_plugin=align.parser_plugin,
    ),
    StageSpec(name="captions", description="Figure captions", config_key="captions", transformer=captions.transform),
    StageSpec(name="comments", description="Source comments", parser_plugin=comments.parser_plugin),
    StageSpec(
        name="custom_blocks",
        description="Spoiler, information, question, warning and error blocks",
        config_key="custom_blocks",
        parser_plugin=custom_blocks.parser_plugin,
    ),
    StageSpec(
        name="disable_tokenizers",
        description="Remove markdown grammar rules",
        config_key="disable_tokenizers",
        parser_plugin=disable_tokenizers.parser_plugin,
    ),
    StageSpec(
        name="emoticons", description="Emoticon images", config_key="emoticons", transformer=emoticons.transform
    ),
    StageSpec(
        name="escape_escaped",
        description="Keep escaped HTML entities literal",
        config_key="escape_escaped",
        transformer=escape_escaped.transform,
    ),
    StageSpec(name="grid_tables", description="Grid tables", parser_plugin=grid_tables.parser_plugin),
    StageSpec(
        name="heading_shift",
        description="Shift heading depths",
        config_key="heading_shift",
        transformer=heading_shift.transform,
        default_options=0,
    ),
    StageSpec(
        name="iframes", description="Embedded videos", config_key="iframes", parser_plugin=iframes.parser_plugin
    ),
    StageSpec(
        name="images_download",
        description="Download remote images",
        config_key="images_download",
        transformer=images_download.transform,
    ),
    StageSpec(name="math", description="TeX math", config_key="math", parser_plugin=math.parser_plugin),
    StageSpec(name="kbd", description="Keyboard keys", parser_plugin=kbd.parser_plugin),
    StageSpec(
        name="numbered_footnotes",
        description="Number footnotes in reference order",
        transformer=numbered_footnotes.transform,
    ),
    StageSpec(
        name="ping",
        description="Member mentions",
        config_key="ping",
        parser_plugin=ping.parser_plugin,
        transformer=ping.transform,
    ),
    StageSpec(name="sub_super", description="Subscript and superscript", parser_plugin=sub_super.parser_plugin),
    StageSpec(
        name="heading_trailing_spaces",
        description="Strip trailing spaces from headings",
        transformer=heading_trailing_spaces.transform,
    ),
    StageSpec(name="toc_flag", description="Table of contents flag", transformer=toc_flag.transform),
    StageSpec(
        name="latex_stringify",
        description="Serialize to LaTeX",
        compiler=compile_latex,
        uses_stringify_config=True,
    ),
    StageSpec(name="to_html", description="Build the HTML tree", config_key="to_html", transformer=to_html.transform),
    StageSpec(
        name="highlight", description="Syntax highlighting", config_key="highlight", transformer=highlight.transform
    ),
    StageSpec(name="slug", description="Heading identifiers", transformer=slug.transform),
    StageSpec(
        name="autolink_headings",
        description="Self links on headings",
        config_key="autolink_headings",
        transformer=autolink_headings.transform,
    ),
    StageSpec(
        name="html_blocks",
        description="Resolve raw HTML",
        config_key="html_blocks",
        transformer=html_blocks.transform,
    ),
    StageSpec(
        name="footnotes_title",
        description="Titles of footnote links",
        config_key="footnotes_title",
        transformer=footnotes_title.transform,
    ),
    StageSpec(
        name="math_render",
        description="Delimit math for client-side typesetting",
        config_key="math_render",
        transformer=math_render.transform,
    ),
    StageSpec(
        name="wrappers",
        description="Wrap iframes and tables",
        transformer=wrappers.transform,
        default_options=wrappers.DEFAULT_WRAPPERS,
    ),
    StageSpec(name="html_stringify", description="Serialize the HTML tree", compiler=stringify.compile_html),
)
