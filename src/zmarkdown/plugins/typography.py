#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/typography.py
"""Typographic replacements in text.

Each entry of the ``plugins`` option is either the name of a built-in rule or
a callable ``rule(text, locale) -> text``; rules run in order over every text
node outside code, math, links and comments.

Built-in rules
--------------
ellipses
    ``...`` becomes ``…``
dashes
    ``---`` becomes an em dash and ``--`` an en dash
nbsp_punctuation
    For French, the space before ``; ! ?`` becomes a narrow no-break space
    and the space before ``:`` and inside guillemets a no-break space
guillemets
    ``<<`` and ``>>`` become ``«`` and ``»``

"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Mapping, Optional, Union

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.utils import PROTECTED_TYPES
from zmarkdown.ast.visitors import SKIP, visit
from zmarkdown.exceptions import ValidationError
from zmarkdown.file import RenderedFile

logger = logging.getLogger(__name__)

TypographyRule = Callable[[str, str], str]

NBSP = "\u00a0"
NARROW_NBSP = "\u202f"

_NARROW_BEFORE = re.compile("[ \u00a0\u202f]+([;!?])")
_NBSP_BEFORE_COLON = re.compile("[ \u00a0\u202f]+:")
_OPENING_GUILLEMET = re.compile("«[ \u00a0\u202f]*")
_CLOSING_GUILLEMET = re.compile("[ \u00a0\u202f]*»")


def ellipses(text: str, locale: str) -> str:
    return text.replace("...", "…")


def dashes(text: str, locale: str) -> str:
    return text.replace("---", "—").replace("--", "–")


def nbsp_punctuation(text: str, locale: str) -> str:
    if not locale.startswith("fr"):
        return text
    text = _NARROW_BEFORE.sub(NARROW_NBSP + r"\1", text)
    text = _NBSP_BEFORE_COLON.sub(NBSP + ":", text)
    text = _OPENING_GUILLEMET.sub("«" + NBSP, text)
    return _CLOSING_GUILLEMET.sub(NBSP + "»", text)


def guillemets(text: str, locale: str) -> str:
    return text.replace("<<", "«").replace(">>", "»")


BUILTIN_RULES: dict[str, TypographyRule] = {
    "ellipses": ellipses,
    "dashes": dashes,
    "nbsp_punctuation": nbsp_punctuation,
    "guillemets": guillemets,
}


def resolve_rules(plugins: list[Union[str, TypographyRule]]) -> list[TypographyRule]:
    """Turn the ``plugins`` option into rule callables.

    Raises
    ------
    ValidationError
        For an unknown rule name

    """
    rules: list[TypographyRule] = []
    for plugin in plugins:
        if callable(plugin):
            rules.append(plugin)
        elif plugin in BUILTIN_RULES:
            rules.append(BUILTIN_RULES[plugin])
        else:
            raise ValidationError(
                f"Unknown typography rule '{plugin}'. Available: {', '.join(sorted(BUILTIN_RULES))}",
                parameter_name="typography.plugins",
                parameter_value=plugin,
            )
    return rules


def transform(tree: Node, file: RenderedFile, options: Optional[Mapping[str, Any]]) -> None:
    """Apply the configured rules to every unprotected text node."""
    options = options or {}
    rules = resolve_rules(list(options.get("plugins", [])))
    if not rules:
        return
    locale = str(options.get("locale", "fr"))

    def on_node(node: Node, index: Optional[int], parent: Optional[Node]) -> Optional[str]:
        if node.type in PROTECTED_TYPES:
            return SKIP
        if node.type == "text" and node.value:
            value = node.value
            for rule in rules:
                value = rule(value, locale)
            node.value = value
        return None

    visit(tree, None, on_node)
