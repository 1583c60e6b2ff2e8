#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/html/wrappers.py
"""Node wrapper engine.

Wraps elements of the HTML tree in chains of container elements, driven by a
declarative rule table: a mapping from tag name to the rules that apply to
elements of that name.

For every element whose tag name has rules, each rule's predicate is
evaluated:

- no rule matches: the element is left untouched
- exactly one rule matches: the element is wrapped by the rule's chain, the
  outermost wrapper taking its place in the parent and each inner wrapper
  being the sole child of the previous one
- several rules match: :class:`~zmarkdown.exceptions.WrapperConflictError`

An element already sitting inside exactly its rule's chain is not wrapped
again, so applying the engine twice yields the same tree as applying it once.

Examples
--------
    >>> rule = WrapperRule("table", tags=("div",), class_lists=(("table-wrapper",),))
    >>> apply_wrappers(soup, {"table": [rule]})
    >>> str(soup)
    '<div class="table-wrapper"><table>...</table></div>'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence

from bs4 import BeautifulSoup, NavigableString, Tag

from zmarkdown.constants import (
    IFRAME_SINGLE_WRAPPER_PROVIDERS,
    IFRAME_WRAPPER_CLASS,
    TABLE_WRAPPER_CLASS,
    VIDEO_CONTAINER_CLASS,
    VIDEO_WRAPPER_CLASS,
)
from zmarkdown.exceptions import WrapperConflictError
from zmarkdown.file import RenderedFile

logger = logging.getLogger(__name__)

WrapperPredicate = Callable[[Tag], bool]


def _always(element: Tag) -> bool:
    return True


@dataclass(frozen=True)
class WrapperRule:
    """One way of wrapping elements of a tag name.

    Parameters
    ----------
    target : str
        Tag name of the wrapped elements
    tags : tuple of str
        Wrapper tag names, outermost first
    class_lists : tuple of tuple of str
        Classes of each wrapper, aligned with ``tags``
    predicate : callable, default = always true
        ``predicate(element) -> bool`` deciding whether the rule applies

    Raises
    ------
    ValueError
        If ``tags`` is empty or ``tags`` and ``class_lists`` differ in length

    """

    target: str
    tags: tuple[str, ...]
    class_lists: tuple[tuple[str, ...], ...]
    predicate: WrapperPredicate = _always

    def __post_init__(self) -> None:
        """Validate the wrapper chain."""
        if not self.tags:
            raise ValueError(f"Wrapper rule for '{self.target}' has no wrapper tags")
        if len(self.tags) != len(self.class_lists):
            raise ValueError(
                f"Wrapper rule for '{self.target}' has {len(self.tags)} tags "
                f"but {len(self.class_lists)} class lists"
            )

    def matches(self, element: Tag) -> bool:
        """Whether the rule applies to ``element``."""
        return bool(self.predicate(element))

    def encloses(self, element: Tag) -> bool:
        """Whether ``element`` already sits inside exactly this rule's chain."""
        current: Tag = element
        for tag_name, classes in zip(reversed(self.tags), reversed(self.class_lists)):
            parent = current.parent
            if not isinstance(parent, Tag) or isinstance(parent, BeautifulSoup):
                return False
            if parent.name != tag_name or list(parent.get("class") or []) != list(classes):
                return False
            if _meaningful_children(parent) != [current]:
                return False
            current = parent
        return True

    def wrap(self, soup: BeautifulSoup, element: Tag) -> Tag:
        """Wrap ``element`` in the chain and return the outermost wrapper."""
        current = element
        for tag_name, classes in zip(reversed(self.tags), reversed(self.class_lists)):
            attrs = {"class": list(classes)} if classes else {}
            current = current.wrap(soup.new_tag(tag_name, attrs=attrs))
        return current


def _meaningful_children(tag: Tag) -> list[Any]:
    return [child for child in tag.contents if not (isinstance(child, NavigableString) and not child.strip())]


def _iframe_needs_single_wrapper(element: Tag) -> bool:
    src = str(element.get("src") or "")
    return any(provider in src for provider in IFRAME_SINGLE_WRAPPER_PROVIDERS)


def _video_iframe(element: Tag) -> bool:
    return bool(element.get("src")) and not _iframe_needs_single_wrapper(element)


def _plain_iframe(element: Tag) -> bool:
    return bool(element.get("src")) and _iframe_needs_single_wrapper(element)


DEFAULT_WRAPPERS: Mapping[str, tuple[WrapperRule, ...]] = {
    "iframe": (
        WrapperRule(
            "iframe",
            tags=("div", "div"),
            class_lists=((VIDEO_WRAPPER_CLASS,), (VIDEO_CONTAINER_CLASS,)),
            predicate=_video_iframe,
        ),
        WrapperRule("iframe", tags=("div",), class_lists=((IFRAME_WRAPPER_CLASS,),), predicate=_plain_iframe),
    ),
    "table": (WrapperRule("table", tags=("div",), class_lists=((TABLE_WRAPPER_CLASS,),)),),
}
"""Wrappers applied by the ``wrappers`` stage.

Embedded videos get a two-level responsive container; iframes from the
single-wrapper providers (``jsfiddle.``, ``ina.``) get one plain wrapper;
tables get a scrolling wrapper.
"""


def apply_wrappers(soup: BeautifulSoup, rules_by_target: Mapping[str, Sequence[WrapperRule]]) -> int:
    """Wrap the elements of ``soup`` according to ``rules_by_target``.

    Parameters
    ----------
    soup : BeautifulSoup
        HTML tree, modified in place
    rules_by_target : Mapping[str, Sequence[WrapperRule]]
        Rules per tag name; tag names without rules are never visited

    Returns
    -------
    int
        Number of elements wrapped

    Raises
    ------
    WrapperConflictError
        If more than one rule matches an element

    """
    wrapped = 0
    for target, rules in rules_by_target.items():
        if not rules:
            continue
        for element in soup.find_all(target):
            matching = [rule for rule in rules if rule.matches(element)]
            if not matching:
                continue
            if len(matching) > 1:
                raise WrapperConflictError(target, len(matching))
            rule = matching[0]
            if rule.encloses(element):
                continue
            rule.wrap(soup, element)
            wrapped += 1
    if wrapped:
        logger.debug(f"Wrapped {wrapped} elements")
    return wrapped


def transform(
    soup: BeautifulSoup, file: RenderedFile, options: Optional[Mapping[str, Sequence[WrapperRule]]]
) -> None:
    """Apply ``options`` (a rule table) or :data:`DEFAULT_WRAPPERS`."""
    apply_wrappers(soup, options if options is not None else DEFAULT_WRAPPERS)
