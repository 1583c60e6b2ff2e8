#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/renderers/latex.py
"""LaTeX rendering of the intermediate tree.

This module provides the :class:`LatexStringifier` class, the compiler of the
``latex`` pipeline. It turns the intermediate tree into a LaTeX body (no
preamble; see :mod:`zmarkdown.templates.latex_document` for full documents).

Each node type is rendered by a ``visit_<type>`` method returning a string.
The ``overrides`` entry of the stringifier configuration replaces any of
them: ``overrides[node_type](node, content, stringifier)`` receives the
rendered children as ``content``.

Commands and environments that are not part of standard LaTeX
(``codeBlock``, ``Information``, ``\\iframe``, ``\\smiley``, ...) are
expected to be defined by the document class; the document template loads
the usual packages for the others.

"""

from __future__ import annotations

import html
import logging
import re
from typing import Any, Callable, Mapping, Optional

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.visitors import iter_nodes
from zmarkdown.config.stringify import default_stringify_config
from zmarkdown.file import RenderedFile
from zmarkdown.html.to_html import handler_name

logger = logging.getLogger(__name__)

Override = Callable[[Node, str, "LatexStringifier"], str]

# LaTeX special characters that need escaping
SPECIAL_CHARS: dict[str, str] = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "$": r"\$",
    "%": r"\%",
    "&": r"\&",
    "#": r"\#",
    "_": r"\_",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

_SPECIAL_PATTERN = re.compile("|".join(re.escape(char) for char in SPECIAL_CHARS))
_URL_SPECIAL_PATTERN = re.compile(r"([%#\\])")

ALIGNMENT_ENVIRONMENTS: dict[str, str] = {
    "centerAligned": "center",
    "rightAligned": "flushright",
    "leftAligned": "flushleft",
}

TABLE_COLUMN_ALIGNMENTS: dict[Optional[str], str] = {"left": "l", "center": "c", "right": "r", None: "l"}


def escape_latex(text: str) -> str:
    """Escape the LaTeX special characters of ``text`` in a single pass.

    Examples
    --------
        >>> escape_latex("50% of {x}")
        '50\\\\% of \\\\{x\\\\}'

    """
    return _SPECIAL_PATTERN.sub(lambda match: SPECIAL_CHARS[match.group(0)], text)


def escape_url(url: str) -> str:
    """Escape the characters of ``url`` that break ``\\href`` arguments."""
    return _URL_SPECIAL_PATTERN.sub(r"\\\1", url)


class LatexStringifier:
    """Render the intermediate tree to LaTeX.

    Parameters
    ----------
    options : Mapping or None, default = None
        Stringifier configuration (see
        :func:`zmarkdown.config.stringify.default_stringify_config`); missing
        keys take their default value

    Examples
    --------
        >>> stringifier = LatexStringifier()
        >>> stringifier.stringify(MarkdownParser().parse("# Title"))
        '\\\\section{Title}\\n'

    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        """Merge ``options`` over the default configuration."""
        config = default_stringify_config()
        config.update(options or {})
        self.options = config
        self.headings: list[str] = list(config["headings"])
        self.overrides: Mapping[str, Override] = config.get("overrides") or {}
        self._definitions: dict[str, Node] = {}

    def stringify(self, tree: Node) -> str:
        """Render ``tree`` and return the LaTeX body."""
        self._definitions = {
            str(definition.get("identifier")): definition for definition in iter_nodes(tree, "footnoteDefinition")
        }
        body = self.render(tree)
        return body.strip("\n") + "\n" if body.strip() else ""

    def render(self, node: Node) -> str:
        """Render one node, applying an override registered for its type."""
        override = self.overrides.get(node.type)
        if override is not None:
            return override(node, self.render_children(node), self)
        method = getattr(self, handler_name(node.type), None)
        if method is None:
            logger.debug(f"No LaTeX handler for '{node.type}' nodes, keeping their content")
            return self.render_children(node) if node.children else escape_latex(node.value or "")
        return method(node)

    def render_children(self, node: Node, separator: str = "") -> str:
        """Render the children of ``node`` joined with ``separator``."""
        return separator.join(self.render(child) for child in node.children)

    def render_blocks(self, node: Node) -> str:
        """Render block children separated by blank lines, skipping empty output."""
        parts = [self.render(child) for child in node.children]
        return "\n\n".join(part for part in parts if part.strip())

    def environment(self, name: str, content: str, argument: str = "") -> str:
        """Wrap ``content`` in ``\\begin{name}argument ... \\end{name}``."""
        return f"\\begin{{{name}}}{argument}\n{content}\n\\end{{{name}}}"

    # Blocks

    def visit_root(self, node: Node) -> str:
        return self.render_blocks(node)

    def visit_paragraph(self, node: Node) -> str:
        return self.render_children(node)

    def visit_heading(self, node: Node) -> str:
        depth = min(max(int(node.get("depth", 1)), 1), len(self.headings))
        return f"\\{self.headings[depth - 1]}{{{self.render_children(node)}}}"

    def visit_thematic_break(self, node: Node) -> str:
        return "\\hrulefill"

    def visit_blockquote(self, node: Node) -> str:
        return self.environment("quote", self.render_blocks(node))

    def visit_code(self, node: Node) -> str:
        language = node.get("lang") or "text"
        first_line = self.options.get("first_line_number", 1)
        option = f"[firstnumber={first_line}]" if first_line != 1 else ""
        return self.environment(self.options["code_environment"], node.value or "", f"{option}{{{language}}}")

    def visit_list(self, node: Node) -> str:
        name = "enumerate" if node.get("ordered") else "itemize"
        items = "\n".join(f"\\item {self.render(item)}" for item in node.children)
        return self.environment(name, items)

    def visit_list_item(self, node: Node) -> str:
        return self.render_blocks(node)

    def visit_table(self, node: Node) -> str:
        alignments = node.get("align") or []
        columns = max((len(row.children) for row in node.children), default=0)
        spec = "".join(
            TABLE_COLUMN_ALIGNMENTS.get(alignments[index] if index < len(alignments) else None, "l")
            for index in range(columns)
        )
        lines = ["\\hline"]
        for row in node.children:
            lines.append(self.render(row) + " \\\\")
            if row.get("head"):
                lines.append("\\hline")
        lines.append("\\hline")
        return self.environment("tabular", "\n".join(lines), f"{{{spec}}}")

    def visit_table_row(self, node: Node) -> str:
        return self.render_children(node, " & ")

    def visit_table_cell(self, node: Node) -> str:
        return self.render_children(node)

    def visit_html(self, node: Node) -> str:
        return ""

    def visit_comment(self, node: Node) -> str:
        return ""

    def visit_footnote_definition(self, node: Node) -> str:
        # Emitted at the reference site
        return ""

    def visit_math(self, node: Node) -> str:
        return f"\\[\n{(node.value or '').strip()}\n\\]"

    def visit_iframe(self, node: Node) -> str:
        return f"\\{self.options.get('iframe_command', 'iframe')}{{{escape_url(node.get('url') or node.get('src', ''))}}}"

    def visit_figure(self, node: Node) -> str:
        captions = [child for child in node.children if child.type == "figcaption"]
        content = "\n".join(self.render(child) for child in node.children if child.type != "figcaption")
        caption = f"\n\\caption{{{self.render_children(captions[0])}}}" if captions else ""
        return self.environment("figure", f"\\centering\n{content}{caption}", "[h]")

    def visit_figcaption(self, node: Node) -> str:
        return self.render_children(node)

    def visit_custom_block(self, node: Node) -> str:
        block_type = str(node.get("blockType", ""))
        environments: Mapping[str, str] = self.options.get("custom_blocks", {})
        name = environments.get(block_type) or block_type.capitalize()
        title = ""
        body_parts: list[str] = []
        for child in node.children:
            if child.type == "customBlockHeading":
                title = f"[{self.render_children(child)}]"
            else:
                body_parts.append(self.render(child))
        return self.environment(name, "\n\n".join(body_parts), title)

    def visit_custom_block_body(self, node: Node) -> str:
        return self.render_blocks(node)

    def _aligned(self, node: Node) -> str:
        return self.environment(ALIGNMENT_ENVIRONMENTS[node.type], self.render_blocks(node))

    visit_center_aligned = _aligned
    visit_right_aligned = _aligned
    visit_left_aligned = _aligned

    # Inline

    def visit_text(self, node: Node) -> str:
        return escape_latex(html.unescape(node.value or ""))

    def visit_emphasis(self, node: Node) -> str:
        return f"\\textit{{{self.render_children(node)}}}"

    def visit_strong(self, node: Node) -> str:
        return f"\\textbf{{{self.render_children(node)}}}"

    def visit_delete(self, node: Node) -> str:
        return f"\\sout{{{self.render_children(node)}}}"

    def visit_sub(self, node: Node) -> str:
        return f"\\textsubscript{{{self.render_children(node)}}}"

    def visit_sup(self, node: Node) -> str:
        return f"\\textsuperscript{{{self.render_children(node)}}}"

    def visit_kbd(self, node: Node) -> str:
        return f"\\keys{{{self.render_children(node)}}}"

    def visit_inline_code(self, node: Node) -> str:
        return f"\\texttt{{{escape_latex(node.value or '')}}}"

    def visit_break(self, node: Node) -> str:
        return "\\\\\n"

    def visit_link(self, node: Node) -> str:
        return f"\\href{{{escape_url(node.get('url', ''))}}}{{{self.render_children(node)}}}"

    def visit_image(self, node: Node) -> str:
        return f"\\includegraphics{{{node.get('url', '')}}}"

    def visit_abbr(self, node: Node) -> str:
        return self.render_children(node)

    def visit_inline_math(self, node: Node) -> str:
        if node.get("display"):
            return f"$\\displaystyle {node.value or ''}$"
        return f"${node.value or ''}$"

    def visit_ping(self, node: Node) -> str:
        return f"\\textbf{{@{escape_latex(str(node.get('username', '')))}}}"

    def visit_emoticon(self, node: Node) -> str:
        code = str(node.get("code") or node.value or "")
        emoticons: Mapping[str, str] = self.options.get("emoticons", {})
        if code in emoticons:
            return emoticons[code]
        return self.options.get("emoticon_fallback", "\\smiley{%s}") % escape_latex(code)

    def visit_footnote_reference(self, node: Node) -> str:
        definition = self._definitions.get(str(node.get("identifier")))
        if definition is None:
            logger.debug(f"Footnote '{node.get('identifier')}' has no definition")
            return "\\footnotemark{}"
        return f"\\{self.options['footnote_command']}{{{self.render_blocks(definition)}}}"


def compile_latex(tree: Node, file: RenderedFile, options: Optional[Mapping[str, Any]]) -> str:
    """Serialize the intermediate tree to a LaTeX body."""
    return LatexStringifier(options).stringify(tree)
