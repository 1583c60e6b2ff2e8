#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/config/tree.py
"""Default tree-transform configuration.

The tree configuration maps stage names to the option mapping each stage
receives, plus two top-level flags:

- ``no_typography``: drop the typography stage from the HTML pipeline
- ``_test``: test mode, drops syntax highlighting for deterministic output

:func:`default_tree_config` returns a fresh mapping on every call, so callers
may edit the result freely.

"""

from __future__ import annotations

from typing import Any


def _ping_any_username(username: str) -> bool:
    return bool(username)


def _member_url(username: str) -> str:
    return f"/membres/voir/{username}/"


def default_tree_config() -> dict[str, Any]:
    """Build the default tree configuration.

    Returns
    -------
    dict
        Stage name to option mapping, with ``no_typography`` and ``_test`` flags

    """
    return {
        "no_typography": False,
        "_test": False,
        "parse": {
            "plugins": ["strikethrough", "table", "footnotes", "url"],
            "hard_wrap": False,
        },
        "typography": {
            "plugins": ["ellipses", "dashes", "nbsp_punctuation", "guillemets"],
            "locale": "fr",
        },
        "align_blocks": {
            "classes": {
                "center": "align-center",
                "right": "align-right",
                "left": "align-left",
            },
        },
        "captions": {
            "external": {
                "table": "Table:",
                "code": "Code:",
                "math": "Equation:",
                "iframe": "Video:",
            },
            "internal": {
                "blockquote": "Source:",
                "image": "Figure:",
            },
        },
        "custom_blocks": {
            "blocks": {
                "secret": {"classes": "spoiler", "title": "optional"},
                "s": {"classes": "spoiler", "title": "optional"},
                "information": {"classes": "information ico-after", "title": "optional"},
                "i": {"classes": "information ico-after", "title": "optional"},
                "question": {"classes": "question ico-after", "title": "optional"},
                "q": {"classes": "question ico-after", "title": "optional"},
                "attention": {"classes": "warning ico-after", "title": "optional"},
                "a": {"classes": "warning ico-after", "title": "optional"},
                "erreur": {"classes": "error ico-after", "title": "optional"},
                "e": {"classes": "error ico-after", "title": "optional"},
            },
        },
        "disable_tokenizers": {
            "block": ["indent_code"],
            "inline": [],
        },
        "emoticons": {
            "classes": "smiley",
            "emoticons": {
                ":)": "/static/smileys/smile.png",
                ":D": "/static/smileys/heureux.png",
                ";)": "/static/smileys/clin.png",
                ":p": "/static/smileys/langue.png",
                ":lol:": "/static/smileys/rire.gif",
                ":euh:": "/static/smileys/unsure.gif",
                ":(": "/static/smileys/triste.png",
                ":o": "/static/smileys/huh.png",
                ":colere2:": "/static/smileys/mechant.png",
                "o_O": "/static/smileys/blink.gif",
                "^^": "/static/smileys/hihi.png",
                ":-°": "/static/smileys/siffle.png",
                ":ange:": "/static/smileys/ange.png",
                ":colere:": "/static/smileys/angry.gif",
                ":diable:": "/static/smileys/diable.png",
                ":magicien:": "/static/smileys/magicien.png",
                ":ninja:": "/static/smileys/ninja.gif",
                ">_<": "/static/smileys/pinch.png",
                ":pirate:": "/static/smileys/pirate.png",
                ":'(": "/static/smileys/pleure.png",
                ":honte:": "/static/smileys/rouge.png",
                ":soleil:": "/static/smileys/soleil.png",
                ":waw:": "/static/smileys/waw.png",
                ":zorro:": "/static/smileys/zorro.png",
            },
        },
        "escape_escaped": {
            "ignore": ["&#x60;", "&nbsp;"],
        },
        "heading_shift": 0,
        "iframes": {
            "providers": {
                "www.dailymotion.com": {
                    "width": 480,
                    "height": 270,
                    "replace": {"video/": "embed/video/"},
                },
                "www.vimeo.com": {
                    "width": 500,
                    "height": 281,
                    "replace": {"http://": "https://", "www.vimeo.com/": "player.vimeo.com/video/"},
                },
                "vimeo.com": {
                    "width": 500,
                    "height": 281,
                    "replace": {"http://": "https://", "vimeo.com/": "player.vimeo.com/video/"},
                },
                "www.youtube.com": {
                    "width": 560,
                    "height": 315,
                    "replace": {"watch?v=": "embed/", "http://": "https://"},
                    "remove_after": "&",
                },
                "youtu.be": {
                    "width": 560,
                    "height": 315,
                    "replace": {"youtu.be/": "www.youtube.com/embed/", "http://": "https://"},
                },
                "jsfiddle.net": {
                    "width": 500,
                    "height": 500,
                    "replace": {"http://": "https://"},
                    "append": "embedded/result,js,html,css/",
                    "match": r"^https?://(www\.)?jsfiddle\.net/[\w\d]+/[\w\d]+/?(\d+/?)?$",
                },
                "www.ina.fr": {
                    "width": 620,
                    "height": 349,
                    "replace": {"www.ina.fr/video/": "player.ina.fr/player/embed/"},
                    "remove_after": "/",
                },
            },
        },
        "images_download": {
            "disabled": True,
            "download_destination": "./img/",
            "max_file_size": 1024 * 1024,
            "max_images": 50,
            "timeout": 10.0,
            "fail_on_error": False,
        },
        "math": {
            "inline_double_dollar": True,
        },
        "ping": {
            "ping_username": _ping_any_username,
            "user_url": _member_url,
            "classes": "ping",
        },
        "to_html": {
            "allow_dangerous_html": False,
            "footnote_back_label": "↩",
        },
        "highlight": {
            "ignore_missing": True,
            "plain_text": ["console", "text"],
            "class_prefix": "hljs-",
        },
        "autolink_headings": {
            "behavior": "append",
            "properties": {"class": ["anchor"], "aria-hidden": "true", "tabindex": "-1"},
        },
        "html_blocks": {
            "allow_dangerous_html": False,
            "block_classes": ["html-block"],
        },
        "footnotes_title": {
            "title": "Retourner au texte de la note $id",
        },
        "math_render": {
            "inline_delimiters": ["\\(", "\\)"],
            "display_delimiters": ["\\[", "\\]"],
            "error_color": "#cc0000",
        },
    }
