#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/utils/text.py
"""Text helpers used by the HTML stages.

Functions
---------
slugify : Convert heading text to an anchor identifier, unique per document

Examples
--------
    >>> seen = set()
    >>> slugify("Ma section", seen_slugs=seen)
    'ma-section'
    >>> slugify("Ma section", seen_slugs=seen)
    'ma-section-1'

"""

from __future__ import annotations

import re
import unicodedata
from typing import Set

_DROPPED = re.compile(r"[^\w\- ]", re.UNICODE)


def slugify(text: str, *, seen_slugs: Set[str] | None = None, keep_accents: bool = False) -> str:
    """Create an anchor identifier from heading text.

    Identifiers are lowercased, stripped of punctuation and use hyphens for
    spaces. Repeated identifiers get a numeric suffix starting at ``-1``, the
    way GitHub numbers repeated headings.

    Parameters
    ----------
    text : str
        Heading text
    seen_slugs : Set[str] or None, default = None
        Identifiers already used in the document; updated in place
    keep_accents : bool, default = False
        Keep accented letters instead of folding them to ASCII

    Returns
    -------
    str
        The identifier

    """
    slug = text.strip().lower()
    if not keep_accents:
        slug = unicodedata.normalize("NFD", slug)
        slug = "".join(char for char in slug if unicodedata.category(char) != "Mn")
    slug = _DROPPED.sub("", slug).replace(" ", "-")
    if not slug:
        slug = "section"

    if seen_slugs is None:
        return slug

    unique = slug
    counter = 0
    while unique in seen_slugs:
        counter += 1
        unique = f"{slug}-{counter}"
    seen_slugs.add(unique)
    return unique


__all__ = ["slugify"]
