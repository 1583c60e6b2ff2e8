#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_wrappers.py
"""Unit tests for the node wrapper engine.

Tests cover:
- Default wrappers of embedded videos, plain iframes and tables
- Elements no rule matches
- Idempotence of repeated application
- Conflicting rules
- Rule validation
"""

import pytest
from bs4 import BeautifulSoup

from zmarkdown.exceptions import WrapperConflictError
from zmarkdown.file import RenderedFile
from zmarkdown.html import wrappers
from zmarkdown.html.wrappers import DEFAULT_WRAPPERS, WrapperRule, apply_wrappers


def soup_of(markup: str) -> BeautifulSoup:
    """Parse an HTML fragment."""
    return BeautifulSoup(markup, "html.parser")


@pytest.mark.unit
class TestDefaultWrappers:
    """Tests for the default rule table."""

    def test_video_iframe(self) -> None:
        """Test that a video embed gets the two-level responsive wrapper."""
        soup = soup_of('<iframe src="https://www.youtube.com/embed/abc"></iframe>')

        assert apply_wrappers(soup, DEFAULT_WRAPPERS) == 1
        assert str(soup) == (
            '<div class="video-wrapper"><div class="video-container">'
            '<iframe src="https://www.youtube.com/embed/abc"></iframe></div></div>'
        )

    @pytest.mark.parametrize(
        "src",
        ["https://jsfiddle.net/user/abc/embedded/", "https://player.ina.fr/player/embed/123"],
    )
    def test_single_wrapper_providers(self, src: str) -> None:
        """Test that jsfiddle and ina iframes get one plain wrapper."""
        soup = soup_of(f'<iframe src="{src}"></iframe>')
        apply_wrappers(soup, DEFAULT_WRAPPERS)

        wrapper = soup.find("div")
        assert wrapper["class"] == ["iframe-wrapper"]
        assert wrapper.find("iframe")["src"] == src
        assert soup.find("div", class_="video-wrapper") is None

    def test_iframe_without_source(self) -> None:
        """Test that an iframe without src matches no rule."""
        soup = soup_of("<iframe></iframe>")

        assert apply_wrappers(soup, DEFAULT_WRAPPERS) == 0
        assert str(soup) == "<iframe></iframe>"

    def test_table(self) -> None:
        """Test that tables get a scrolling wrapper."""
        soup = soup_of("<p>before</p><table><tr><td>1</td></tr></table>")
        apply_wrappers(soup, DEFAULT_WRAPPERS)

        table = soup.find("table")
        assert table.parent.name == "div"
        assert table.parent["class"] == ["table-wrapper"]
        assert soup.find("p").text == "before"

    def test_untargeted_elements_untouched(self) -> None:
        """Test that elements without rules are never wrapped."""
        soup = soup_of("<p>text</p><img src='a.png'/>")

        assert apply_wrappers(soup, DEFAULT_WRAPPERS) == 0
        assert soup.find("div") is None

    def test_idempotent(self) -> None:
        """Test that applying the wrappers twice equals applying them once."""
        soup = soup_of('<iframe src="https://www.youtube.com/embed/abc"></iframe><table></table>')
        apply_wrappers(soup, DEFAULT_WRAPPERS)
        once = str(soup)

        assert apply_wrappers(soup, DEFAULT_WRAPPERS) == 0
        assert str(soup) == once

    def test_transform_uses_defaults(self) -> None:
        """Test that the stage falls back to the default table."""
        soup = soup_of("<table></table>")
        wrappers.transform(soup, RenderedFile(value=""), None)
        assert soup.find("div", class_="table-wrapper") is not None

    def test_transform_with_custom_table(self) -> None:
        """Test that the stage applies the configured table."""
        rule = WrapperRule("img", tags=("span",), class_lists=(("image",),))
        soup = soup_of('<table></table><img src="a.png"/>')
        wrappers.transform(soup, RenderedFile(value=""), {"img": [rule]})

        assert soup.find("img").parent.name == "span"
        assert soup.find("table").parent is soup


@pytest.mark.unit
class TestWrapperRules:
    """Tests for rule construction and conflicts."""

    def test_conflicting_rules(self) -> None:
        """Test that two matching rules raise a conflict error."""
        rules = {
            "p": [
                WrapperRule("p", tags=("div",), class_lists=(("a",),)),
                WrapperRule("p", tags=("section",), class_lists=(("b",),)),
            ]
        }

        with pytest.raises(WrapperConflictError) as exc_info:
            apply_wrappers(soup_of("<p>x</p>"), rules)
        assert exc_info.value.rule_count == 2

    def test_predicate_selects_rule(self) -> None:
        """Test that predicates keep rules apart."""
        rules = {
            "a": [
                WrapperRule("a", tags=("em",), class_lists=((),), predicate=lambda el: el.get("href") == "#x"),
                WrapperRule("a", tags=("strong",), class_lists=((),), predicate=lambda el: el.get("href") != "#x"),
            ]
        }
        soup = soup_of('<a href="#x">x</a><a href="#y">y</a>')
        apply_wrappers(soup, rules)

        assert str(soup) == '<em><a href="#x">x</a></em><strong><a href="#y">y</a></strong>'

    def test_sibling_content_prevents_enclosure(self) -> None:
        """Test that a wrapper holding other content does not count as the rule's chain."""
        rule = WrapperRule("table", tags=("div",), class_lists=(("table-wrapper",),))
        soup = soup_of('<div class="table-wrapper"><p>caption</p><table></table></div>')

        assert apply_wrappers(soup, {"table": [rule]}) == 1
        assert soup.find("table").parent.parent.name == "div"

    def test_empty_chain(self) -> None:
        """Test that a rule without wrapper tags is refused."""
        with pytest.raises(ValueError, match="no wrapper tags"):
            WrapperRule("table", tags=(), class_lists=())

    def test_mismatched_class_lists(self) -> None:
        """Test that every wrapper tag needs a class list."""
        with pytest.raises(ValueError, match="2 tags but 1 class lists"):
            WrapperRule("table", tags=("div", "div"), class_lists=(("a",),))
