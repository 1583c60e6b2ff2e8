#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/html/to_html.py
"""Source tree to HTML tree conversion.

The ``to_html`` stage replaces the intermediate tree with a
:class:`bs4.BeautifulSoup` fragment; every later HTML stage mutates that
document. Each node type is handled by a ``visit_<type>`` method of
:class:`HtmlTreeBuilder` (``footnoteReference`` -> ``visit_footnote_reference``);
types without a handler are unwrapped to their children.

Raw HTML
--------
Unless ``allow_dangerous_html`` is set, raw HTML from the source is not
parsed here. It is kept as text inside placeholder elements carrying the
``data-raw-html`` attribute (``div`` for blocks, ``span`` inline) which the
``html_blocks`` stage resolves.

Footnotes
---------
References become ``<sup id="fnref-ID"><a class="footnote-ref" href="#fn-ID">``
and definitions are gathered, in tree order, into a trailing
``<div class="footnotes">`` whose items end with a back link.

"""

from __future__ import annotations

import html
import logging
import re
from typing import Any, Mapping, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag

from zmarkdown.ast.nodes import Node
from zmarkdown.file import RenderedFile

logger = logging.getLogger(__name__)

RAW_HTML_ATTRIBUTE = "data-raw-html"
RAW_HTML_BLOCK = "block"
RAW_HTML_INLINE = "inline"

# Node types whose children are blocks; an html node under one of them is a block
BLOCK_CONTAINERS: frozenset[str] = frozenset(
    {
        "root",
        "blockquote",
        "listItem",
        "footnoteDefinition",
        "figure",
        "customBlock",
        "customBlockBody",
        "centerAligned",
        "rightAligned",
        "leftAligned",
    }
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

Content = Union[Tag, NavigableString]


def handler_name(node_type: str) -> str:
    """Name of the visitor method for a node type (``listItem`` -> ``visit_list_item``)."""
    return "visit_" + _CAMEL_BOUNDARY.sub("_", node_type).lower()


def _classes(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(item) for item in value]


def _inline_element(name: str) -> Any:
    def method(self: HtmlTreeBuilder, node: Node, parent_type: str) -> Content:
        return self._append_inline(self.tag(name), node.children, node.type)

    return method


class HtmlTreeBuilder:
    """Build a BeautifulSoup fragment from the intermediate tree.

    Parameters
    ----------
    options : Mapping or None, default = None
        ``allow_dangerous_html`` (parse raw HTML in place) and
        ``footnote_back_label`` (text of footnote back links)

    Examples
    --------
        >>> soup = HtmlTreeBuilder().build(tree)
        >>> soup.decode()
        '<h1>Title</h1>\\n<p>Body</p>\\n'

    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        """Store the options."""
        options = options or {}
        self.allow_dangerous_html = bool(options.get("allow_dangerous_html", False))
        self.footnote_back_label = str(options.get("footnote_back_label", "↩"))
        self.soup = BeautifulSoup("", "html.parser")
        self._definitions: list[Node] = []
        self._reference_counts: dict[str, int] = {}

    def build(self, tree: Node) -> BeautifulSoup:
        """Convert ``tree`` and return the fragment."""
        self.soup = BeautifulSoup("", "html.parser")
        self._definitions = []
        self._reference_counts = {}
        self._append_blocks(self.soup, tree.children, "root")
        if self._definitions:
            self.soup.append(self._footnotes_section())
            self.soup.append(self.soup.new_string("\n"))
        return self.soup

    def tag(self, name: str, attrs: Optional[dict[str, Any]] = None, classes: Any = None) -> Tag:
        """Create a detached element; ``classes`` is a string or a list."""
        attributes = {key: value for key, value in (attrs or {}).items() if value is not None}
        class_list = _classes(classes)
        if class_list:
            attributes["class"] = class_list
        return self.soup.new_tag(name, attrs=attributes)

    def _append_blocks(self, parent: Union[Tag, BeautifulSoup], nodes: list[Node], parent_type: str) -> None:
        for node in nodes:
            if node.type == "footnoteDefinition":
                self._definitions.append(node)
                continue
            produced = self.convert(node, parent_type)
            if not produced:
                continue
            for item in produced:
                parent.append(item)
            parent.append(self.soup.new_string("\n"))

    def _append_inline(self, parent: Tag, nodes: list[Node], parent_type: str) -> Tag:
        for node in nodes:
            for item in self.convert(node, parent_type):
                parent.append(item)
        return parent

    def _append_children(self, parent: Tag, node: Node) -> Tag:
        if node.type in BLOCK_CONTAINERS:
            parent.append(self.soup.new_string("\n"))
            self._append_blocks(parent, node.children, node.type)
        else:
            self._append_inline(parent, node.children, node.type)
        return parent

    def convert(self, node: Node, parent_type: str = "root") -> list[Content]:
        """Convert one node to the elements replacing it (possibly none)."""
        method = getattr(self, handler_name(node.type), None)
        if method is None:
            logger.debug(f"No HTML handler for '{node.type}' nodes, keeping their content")
            if node.children:
                return [item for child in node.children for item in self.convert(child, parent_type)]
            return [self.soup.new_string(node.value)] if node.value else []
        result = method(node, parent_type)
        if result is None:
            return []
        return result if isinstance(result, list) else [result]

    # Blocks

    def visit_paragraph(self, node: Node, parent_type: str) -> Content:
        return self._append_inline(self.tag("p"), node.children, node.type)

    def visit_heading(self, node: Node, parent_type: str) -> Content:
        return self._append_inline(self.tag(f"h{node.get('depth', 1)}"), node.children, node.type)

    def visit_thematic_break(self, node: Node, parent_type: str) -> Content:
        return self.tag("hr")

    def visit_blockquote(self, node: Node, parent_type: str) -> Content:
        return self._append_children(self.tag("blockquote"), node)

    def visit_code(self, node: Node, parent_type: str) -> Content:
        lang = node.get("lang")
        code = self.tag("code", classes=f"language-{lang}" if lang else None)
        code.append(self.soup.new_string((node.value or "") + "\n"))
        pre = self.tag("pre")
        pre.append(code)
        return pre

    def visit_list(self, node: Node, parent_type: str) -> Content:
        ordered = node.get("ordered", False)
        start = node.get("start", 1)
        element = self.tag("ol" if ordered else "ul", {"start": str(start) if ordered and start != 1 else None})
        element.append(self.soup.new_string("\n"))
        for item in node.children:
            element.append(self.visit_list_item(item, node.type, tight=not node.get("spread", False)))
            element.append(self.soup.new_string("\n"))
        return element

    def visit_list_item(self, node: Node, parent_type: str, tight: bool = False) -> Content:
        item = self.tag("li")
        if not tight:
            return self._append_children(item, node)
        for index, child in enumerate(node.children):
            if child.type == "paragraph":
                if index:
                    item.append(self.soup.new_string("\n"))
                self._append_inline(item, child.children, "paragraph")
            else:
                item.append(self.soup.new_string("\n"))
                for produced in self.convert(child, node.type):
                    item.append(produced)
        return item

    def visit_table(self, node: Node, parent_type: str) -> Content:
        table = self.tag("table")
        head_rows = [row for row in node.children if row.get("head")]
        body_rows = [row for row in node.children if not row.get("head")]
        for section_name, rows in (("thead", head_rows), ("tbody", body_rows)):
            if not rows:
                continue
            section = self.tag(section_name)
            for row in rows:
                section.append(self.visit_table_row(row, node.type))
            table.append(section)
        return table

    def visit_table_row(self, node: Node, parent_type: str) -> Content:
        row = self.tag("tr")
        for cell in node.children:
            row.append(self.visit_table_cell(cell, node.type, head=bool(node.get("head"))))
        return row

    def visit_table_cell(self, node: Node, parent_type: str, head: bool = False) -> Content:
        align = node.get("align")
        cell = self.tag("th" if head or node.get("head") else "td", {"style": f"text-align:{align}" if align else None})
        return self._append_inline(cell, node.children, node.type)

    def visit_html(self, node: Node, parent_type: str) -> list[Content]:
        raw = node.value or ""
        if self.allow_dangerous_html:
            fragment = BeautifulSoup(raw, "html.parser")
            return list(fragment.contents)
        block = parent_type in BLOCK_CONTAINERS
        placeholder = self.tag(
            "div" if block else "span", {RAW_HTML_ATTRIBUTE: RAW_HTML_BLOCK if block else RAW_HTML_INLINE}
        )
        placeholder.append(self.soup.new_string(raw.rstrip("\n") if block else raw))
        return [placeholder]

    def visit_math(self, node: Node, parent_type: str) -> Content:
        element = self.tag("div", classes=["math", "math-display"])
        element.append(self.soup.new_string(node.value or ""))
        return element

    def visit_iframe(self, node: Node, parent_type: str) -> Content:
        return self.tag(
            "iframe",
            {
                "src": node.get("src"),
                "width": str(node.get("width")) if node.get("width") else None,
                "height": str(node.get("height")) if node.get("height") else None,
                "frameborder": "0",
                "allowfullscreen": "",
            },
        )

    def visit_figure(self, node: Node, parent_type: str) -> Content:
        figure = self.tag("figure")
        for child in node.children:
            for produced in self.convert(child, node.type):
                figure.append(produced)
        return figure

    def visit_figcaption(self, node: Node, parent_type: str) -> Content:
        return self._append_inline(self.tag("figcaption"), node.children, node.type)

    def visit_custom_block(self, node: Node, parent_type: str) -> Content:
        block = self.tag("div", classes=["custom-block", *_classes(node.get("classes"))])
        return self._append_children(block, node)

    def visit_custom_block_heading(self, node: Node, parent_type: str) -> Content:
        return self._append_inline(self.tag("div", classes="custom-block-heading"), node.children, node.type)

    def visit_custom_block_body(self, node: Node, parent_type: str) -> Content:
        return self._append_children(self.tag("div", classes="custom-block-body"), node)

    def _aligned(self, node: Node, parent_type: str) -> Content:
        return self._append_children(self.tag("div", classes=node.get("class")), node)

    visit_center_aligned = _aligned
    visit_right_aligned = _aligned
    visit_left_aligned = _aligned

    def visit_comment(self, node: Node, parent_type: str) -> None:
        return None

    # Inline

    def visit_text(self, node: Node, parent_type: str) -> Content:
        return self.soup.new_string(html.unescape(node.value or ""))

    visit_emphasis = _inline_element("em")
    visit_strong = _inline_element("strong")
    visit_delete = _inline_element("del")
    visit_sub = _inline_element("sub")
    visit_sup = _inline_element("sup")
    visit_kbd = _inline_element("kbd")

    def visit_inline_code(self, node: Node, parent_type: str) -> Content:
        code = self.tag("code")
        code.append(self.soup.new_string(node.value or ""))
        return code

    def visit_break(self, node: Node, parent_type: str) -> list[Content]:
        return [self.tag("br"), self.soup.new_string("\n")]

    def visit_link(self, node: Node, parent_type: str) -> Content:
        link = self.tag("a", {"href": node.get("url", ""), "title": node.get("title")})
        return self._append_inline(link, node.children, node.type)

    def visit_image(self, node: Node, parent_type: str) -> Content:
        return self.tag("img", {"src": node.get("url", ""), "alt": node.get("alt", ""), "title": node.get("title")})

    def visit_abbr(self, node: Node, parent_type: str) -> Content:
        return self._append_inline(self.tag("abbr", {"title": node.get("title")}), node.children, node.type)

    def visit_inline_math(self, node: Node, parent_type: str) -> Content:
        display = "math-display" if node.get("display") else "math-inline"
        element = self.tag("span", classes=["math", display])
        element.append(self.soup.new_string(node.value or ""))
        return element

    def visit_ping(self, node: Node, parent_type: str) -> Content:
        link = self.tag("a", {"href": node.get("url")}, classes=[*_classes(node.get("classes")), "ping-link"])
        link.append(self.soup.new_string("@"))
        username = self.tag("span", classes="ping-username")
        self._append_inline(username, node.children, node.type)
        link.append(username)
        return link

    def visit_emoticon(self, node: Node, parent_type: str) -> Content:
        code = node.get("code") or node.value or ""
        return self.tag("img", {"src": node.get("url"), "alt": code}, classes=node.get("classes"))

    def visit_footnote_reference(self, node: Node, parent_type: str) -> Content:
        identifier = str(node.get("identifier"))
        count = self._reference_counts.get(identifier, 0) + 1
        self._reference_counts[identifier] = count
        reference_id = f"fnref-{identifier}" if count == 1 else f"fnref-{identifier}-{count}"
        sup = self.tag("sup", {"id": reference_id})
        link = self.tag("a", {"href": f"#fn-{identifier}"}, classes="footnote-ref")
        link.append(self.soup.new_string(str(node.get("label", identifier))))
        sup.append(link)
        return sup

    # Footnote section

    def _footnotes_section(self) -> Tag:
        section = self.tag("div", classes="footnotes")
        section.append(self.soup.new_string("\n"))
        section.append(self.tag("hr"))
        section.append(self.soup.new_string("\n"))
        items = self.tag("ol")
        items.append(self.soup.new_string("\n"))
        for definition in self._definitions:
            identifier = str(definition.get("identifier"))
            item = self.tag("li", {"id": f"fn-{identifier}"})
            self._append_children(item, definition)
            backref = self.tag("a", {"href": f"#fnref-{identifier}"}, classes="footnote-backref")
            backref.append(self.soup.new_string(self.footnote_back_label))
            paragraphs = item.find_all("p", recursive=False)
            (paragraphs[-1] if paragraphs else item).append(backref)
            items.append(item)
            items.append(self.soup.new_string("\n"))
        section.append(items)
        section.append(self.soup.new_string("\n"))
        return section


def transform(tree: Node, file: RenderedFile, options: Optional[Mapping[str, Any]]) -> BeautifulSoup:
    """Replace the source tree with its HTML fragment."""
    return HtmlTreeBuilder(options).build(tree)
