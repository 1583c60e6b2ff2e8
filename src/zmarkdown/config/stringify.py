#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/config/stringify.py
"""Default LaTeX stringifier configuration."""

from __future__ import annotations

from typing import Any


def default_stringify_config() -> dict[str, Any]:
    """Build the default stringifier configuration.

    Keys
    ----
    headings : list of str
        LaTeX command used for heading depths 1 to 6
    overrides : dict
        Node type to ``callable(node, content, context) -> str`` replacing the
        built-in handler for that type
    code_environment : str
        Environment used for fenced code
    first_line_number : int
        Number of the first line of code listings
    footnote_command : str
        Command used to emit footnote bodies at the reference site
    custom_blocks : dict
        Custom block type to LaTeX environment name
    emoticons : dict
        Emoticon code to LaTeX replacement; codes not listed fall back to
        ``emoticon_fallback``
    iframe_command : str
        Command used for embedded videos and iframes

    """
    return {
        "headings": ["section", "subsection", "subsubsection", "paragraph", "subparagraph", "textbf"],
        "overrides": {},
        "code_environment": "codeBlock",
        "first_line_number": 1,
        "footnote_command": "footnote",
        "custom_blocks": {
            "secret": "Spoiler",
            "s": "Spoiler",
            "information": "Information",
            "i": "Information",
            "question": "Question",
            "q": "Question",
            "attention": "Warning",
            "a": "Warning",
            "erreur": "Error",
            "e": "Error",
        },
        "emoticons": {},
        "emoticon_fallback": "\\smiley{%s}",
        "iframe_command": "iframe",
    }
