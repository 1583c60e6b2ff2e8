#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/parsers/markdown.py
"""Markdown to intermediate tree parser.

This module wraps mistune. Mistune does the tokenizing, extended by the
grammar plugins that pipeline stages register through :meth:`MarkdownParser.use`.
Its token stream is then converted into :class:`~zmarkdown.ast.nodes.Node`
trees.

Token Conversion
----------------
Core mistune tokens are mapped onto the node vocabulary (``block_code`` ->
``code``, ``codespan`` -> ``inlineCode``, ...). Tokens with no registered
handler are converted generically: the token type becomes the node type,
``attrs`` become properties, ``raw`` becomes the value and ``children`` are
converted recursively. Grammar plugins therefore emit tokens already named
after the node they stand for.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Union

import mistune

from zmarkdown.ast.nodes import Node

logger = logging.getLogger(__name__)

TokenHandler = Callable[[dict[str, Any], list[Node]], Union[Node, list[Node], None]]
MistunePlugin = Callable[[mistune.Markdown], None]

DEFAULT_PLUGINS: tuple[str, ...] = ("strikethrough", "table", "footnotes", "url")


def _attrs(token: dict[str, Any]) -> dict[str, Any]:
    attrs = token.get("attrs", {})
    return dict(attrs) if isinstance(attrs, dict) else {}


def _paragraph(token: dict[str, Any], children: list[Node]) -> Node:
    return Node("paragraph", children=children)


def _heading(token: dict[str, Any], children: list[Node]) -> Node:
    level = _attrs(token).get("level", 1)
    if not isinstance(level, int) or level < 1 or level > 6:
        level = 1
    return Node("heading", {"depth": level}, children)


def _code(token: dict[str, Any], children: list[Node]) -> Node:
    content = token.get("raw", "")
    if content.endswith("\n"):
        content = content[:-1]
    info = (_attrs(token).get("info") or "").strip()
    parts = info.split(maxsplit=1)
    properties = {
        "lang": parts[0] if parts else None,
        "meta": parts[1] if len(parts) > 1 else None,
    }
    return Node("code", properties, value=content)


def _list(token: dict[str, Any], children: list[Node]) -> Node:
    attrs = _attrs(token)
    spread = not token.get("tight", True)
    for item in children:
        item.properties["spread"] = spread
    return Node(
        "list",
        {"ordered": bool(attrs.get("ordered", False)), "start": attrs.get("start", 1), "spread": spread},
        children,
    )


def _table(token: dict[str, Any], children: list[Node]) -> Node:
    align: list[Optional[str]] = []
    if children:
        align = [cell.get("align") for cell in children[0].children]
    return Node("table", {"align": align}, children)


def _table_head(token: dict[str, Any], children: list[Node]) -> Node:
    return Node("tableRow", {"head": True}, children)


def _table_body(token: dict[str, Any], children: list[Node]) -> list[Node]:
    return children


def _table_cell(token: dict[str, Any], children: list[Node]) -> Node:
    attrs = _attrs(token)
    return Node("tableCell", {"align": attrs.get("align"), "head": bool(attrs.get("head", False))}, children)


def _link(token: dict[str, Any], children: list[Node]) -> Node:
    attrs = _attrs(token)
    return Node("link", {"url": attrs.get("url", ""), "title": attrs.get("title")}, children)


def _image(token: dict[str, Any], children: list[Node]) -> Node:
    attrs = _attrs(token)
    alt = "".join(child.text_content() for child in children)
    return Node("image", {"url": attrs.get("url", ""), "title": attrs.get("title"), "alt": alt})


def _footnote_ref(token: dict[str, Any], children: list[Node]) -> Node:
    key = token.get("raw", "")
    return Node("footnoteReference", {"identifier": key, "label": key, "index": _attrs(token).get("index")})


def _footnotes(token: dict[str, Any], children: list[Node]) -> list[Node]:
    return children


def _footnote_item(token: dict[str, Any], children: list[Node]) -> Node:
    attrs = _attrs(token)
    key = attrs.get("key", "")
    return Node("footnoteDefinition", {"identifier": key, "label": key, "index": attrs.get("index")}, children)


def _literal(node_type: str) -> TokenHandler:
    def handler(token: dict[str, Any], children: list[Node]) -> Node:
        return Node(node_type, value=token.get("raw", ""))

    return handler


def _container(node_type: str) -> TokenHandler:
    def handler(token: dict[str, Any], children: list[Node]) -> Node:
        return Node(node_type, _attrs(token), children)

    return handler


def _drop(token: dict[str, Any], children: list[Node]) -> None:
    return None


CORE_HANDLERS: dict[str, TokenHandler] = {
    "paragraph": _paragraph,
    "block_text": _paragraph,
    "heading": _heading,
    "block_code": _code,
    "block_quote": _container("blockquote"),
    "list": _list,
    "list_item": _container("listItem"),
    "thematic_break": _container("thematicBreak"),
    "block_html": _literal("html"),
    "blank_line": _drop,
    "table": _table,
    "table_head": _table_head,
    "table_body": _table_body,
    "table_row": _container("tableRow"),
    "table_cell": _table_cell,
    "text": _literal("text"),
    "emphasis": _container("emphasis"),
    "strong": _container("strong"),
    "strikethrough": _container("delete"),
    "codespan": _literal("inlineCode"),
    "link": _link,
    "image": _image,
    "linebreak": _container("break"),
    "softbreak": lambda token, children: Node("text", value="\n"),
    "inline_html": _literal("html"),
    "footnote_ref": _footnote_ref,
    "footnotes": _footnotes,
    "footnote_item": _footnote_item,
    "abbr": _container("abbr"),
    "superscript": _container("sup"),
    "subscript": _container("sub"),
}


class MarkdownParser:
    """Tokenize markdown with mistune and build the intermediate tree.

    Parameters
    ----------
    options : Mapping or None, default = None
        Parse options: ``plugins`` (mistune plugin names or callables, applied
        first) and ``hard_wrap`` (every newline becomes a line break)

    Examples
    --------
        >>> parser = MarkdownParser({"plugins": ["table"]})
        >>> tree = parser.parse("# Title")
        >>> tree.children[0].type
        'heading'

    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        """Create the mistune instance with the configured plugins."""
        options = dict(options or {})
        plugins = list(options.get("plugins", DEFAULT_PLUGINS))
        self.options = options
        self.markdown: mistune.Markdown = mistune.create_markdown(
            hard_wrap=bool(options.get("hard_wrap", False)), renderer=None, plugins=plugins
        )
        self._handlers: dict[str, TokenHandler] = dict(CORE_HANDLERS)

    def use(self, plugin: MistunePlugin) -> None:
        """Apply a mistune plugin (grammar extension)."""
        self.markdown.use(plugin)

    def register_token(self, token_type: str, handler: TokenHandler) -> None:
        """Convert tokens of ``token_type`` with ``handler(token, children)``."""
        self._handlers[token_type] = handler

    def disable_rules(self, block: list[str] | None = None, inline: list[str] | None = None) -> None:
        """Remove grammar rules by name.

        Block rules are removed from the top level and from block quotes and
        list items; unknown names are ignored. Must be called before the
        first :meth:`parse`, since mistune caches its compiled scanners.

        """
        block_parser = self.markdown.block
        for name in block or []:
            for rules in (block_parser.rules, block_parser.block_quote_rules, block_parser.list_rules):
                if name in rules:
                    rules.remove(name)
            logger.debug(f"Disabled block rule: {name}")
        for name in inline or []:
            if name in self.markdown.inline.rules:
                self.markdown.inline.rules.remove(name)
            logger.debug(f"Disabled inline rule: {name}")

    def parse(self, text: str) -> Node:
        """Parse markdown text into a root node.

        Parameters
        ----------
        text : str
            Markdown source

        Returns
        -------
        Node
            ``root`` node

        """
        tokens, _state = self.markdown.parse(text)
        if not isinstance(tokens, list):
            tokens = []
        return Node("root", children=self.convert_tokens(tokens))

    def convert_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Convert a token list, merging adjacent text nodes."""
        nodes: list[Node] = []
        for token in tokens:
            converted = self.convert_token(token)
            if converted is None:
                continue
            for node in converted if isinstance(converted, list) else [converted]:
                if node.type == "text" and nodes and nodes[-1].type == "text":
                    nodes[-1] = Node("text", value=(nodes[-1].value or "") + (node.value or ""))
                else:
                    nodes.append(node)
        return nodes

    def convert_token(self, token: dict[str, Any]) -> Union[Node, list[Node], None]:
        """Convert one token (and its children)."""
        token_type = token.get("type", "")
        children_tokens = token.get("children")
        children = self.convert_tokens(children_tokens) if isinstance(children_tokens, list) else []

        handler = self._handlers.get(token_type)
        if handler is not None:
            return handler(token, children)

        raw = token.get("raw")
        return Node(token_type, _attrs(token), children, value=raw if isinstance(raw, str) else None)
