#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_syntax_plugins.py
"""Unit tests for the grammar extensions registered by the pipeline stages.

Tests cover:
- Aligned blocks and author comments
- Custom blocks and their title modes
- Grid tables
- Embedded videos and embed URL computation
- Keyboard keys, math, mentions, abbreviations, subscript and superscript
- Disabling grammar rules by configuration
"""

import pytest

from zmarkdown.ast.visitors import find_first, iter_nodes
from zmarkdown.plugins.iframes import embed_url


@pytest.mark.unit
class TestAlign:
    """Tests for aligned blocks."""

    def test_centered_line(self, parse_with) -> None:
        """Test a one-line centered block."""
        node = parse_with("->centered<-", "align").children[0]

        assert node.type == "centerAligned"
        assert node.get("class") == "align-center"
        assert node.children[0].type == "paragraph"
        assert node.text_content() == "centered"

    def test_right_aligned_block(self, parse_with) -> None:
        """Test a multi-line right aligned block."""
        node = parse_with("->\nRight *aligned*\nover two lines\n->", "align").children[0]

        assert node.type == "rightAligned"
        assert node.get("class") == "align-right"
        assert node.children[0].type == "paragraph"
        assert find_first(node, "emphasis") is not None

    def test_left_aligned(self, parse_with) -> None:
        """Test a left aligned block."""
        node = parse_with("<-left<-", "align").children[0]
        assert node.type == "leftAligned"

    def test_unclosed_block_is_paragraph(self, parse_with) -> None:
        """Test that an opener without a closer is plain text."""
        tree = parse_with("->not aligned", "align")

        assert tree.children[0].type == "paragraph"
        assert find_first(tree, "centerAligned") is None

    def test_text_after_paragraph(self, parse_with) -> None:
        """Test aligned blocks following a paragraph."""
        tree = parse_with("Intro\n\n->centered<-\n\nOutro", "align")
        assert [child.type for child in tree.children] == ["paragraph", "centerAligned", "paragraph"]


@pytest.mark.unit
class TestComments:
    """Tests for author comments."""

    def test_block_comment(self, parse_with) -> None:
        """Test a comment spanning several lines."""
        tree = parse_with("Before\n\n<--COMMENTS\nA note\nfor later\nCOMMENTS-->\n\nAfter", "comments")

        assert [child.type for child in tree.children] == ["paragraph", "comment", "paragraph"]
        assert tree.children[1].value == "A note\nfor later"

    def test_inline_comment(self, parse_with) -> None:
        """Test a comment inside a paragraph."""
        paragraph = parse_with("Some <--COMMENTS hidden COMMENTS--> text", "comments").children[0]

        assert [child.type for child in paragraph.children] == ["text", "comment", "text"]
        assert paragraph.children[1].value == "hidden"

    def test_unclosed_comment_is_text(self, parse_with) -> None:
        """Test that a comment without end marker is not a comment."""
        tree = parse_with("<--COMMENTS never closed", "comments")
        assert find_first(tree, "comment") is None

    def test_comment_with_alignment_enabled(self, parse_with) -> None:
        """Test that the comment opener is not taken for a left arrow."""
        tree = parse_with("<--COMMENTS\nnote\nCOMMENTS-->", "align", "comments")
        assert [child.type for child in tree.children] == ["comment"]


@pytest.mark.unit
class TestCustomBlocks:
    """Tests for custom blocks."""

    def test_block_with_title(self, parse_with) -> None:
        """Test a titled information block."""
        source = "[[information | Before you start]]\n| You will need **Python**.\n|\n| And patience."
        block = parse_with(source, "custom_blocks").children[0]

        assert block.type == "customBlock"
        assert block.get("blockType") == "information"
        assert block.get("classes") == "information ico-after"
        heading, body = block.children
        assert heading.type == "customBlockHeading"
        assert heading.text_content() == "Before you start"
        assert body.type == "customBlockBody"
        assert [child.type for child in body.children] == ["paragraph", "paragraph"]
        assert find_first(body, "strong").text_content() == "Python"

    def test_block_without_title(self, parse_with) -> None:
        """Test that a missing optional title produces no heading."""
        block = parse_with("[[secret]]\n| Hidden", "custom_blocks").children[0]

        assert block.get("classes") == "spoiler"
        assert [child.type for child in block.children] == ["customBlockBody"]

    def test_unknown_type_is_not_a_block(self, parse_with) -> None:
        """Test that types missing from the configuration stay text."""
        tree = parse_with("[[unknown]]\n| text", "custom_blocks")
        assert find_first(tree, "customBlock") is None

    def test_required_title(self, bundle, parse_with) -> None:
        """Test that a block requiring a title is refused without one."""
        bundle.tree_config["custom_blocks"]["blocks"]["note"] = {"classes": "note", "title": "required"}

        assert find_first(parse_with("[[note]]\n| text", "custom_blocks"), "customBlock") is None
        block = parse_with("[[note | Title]]\n| text", "custom_blocks").children[0]
        assert block.children[0].text_content() == "Title"

    def test_title_mode_none(self, bundle, parse_with) -> None:
        """Test that a block type without titles ignores the given one."""
        bundle.tree_config["custom_blocks"]["blocks"]["plain"] = {"classes": "plain", "title": "none"}
        block = parse_with("[[plain | Ignored]]\n| text", "custom_blocks").children[0]

        assert [child.type for child in block.children] == ["customBlockBody"]

    def test_block_inside_blockquote(self, parse_with) -> None:
        """Test that custom blocks can be nested in block quotes."""
        tree = parse_with("> [[question]]\n> | Why?", "custom_blocks")
        quote = tree.children[0]

        assert quote.type == "blockquote"
        assert quote.children[0].type == "customBlock"


GRID_TABLE = """\
+-------+-----------------+
| Name  | Description     |
+=======+=================+
| grid  | Cells can span  |
|       | several lines   |
+-------+-----------------+
| pipe  | *inline* text   |
+-------+-----------------+
"""


@pytest.mark.unit
class TestGridTables:
    """Tests for grid tables."""

    def test_grid_table(self, parse_with) -> None:
        """Test header row, multi-line cells and inline content."""
        table = parse_with(GRID_TABLE, "grid_tables").children[0]

        assert table.type == "table"
        head, first, second = table.children
        assert head.get("head") is True
        assert [cell.text_content() for cell in head.children] == ["Name", "Description"]
        assert [cell.text_content() for cell in first.children] == ["grid", "Cells can span\nseveral lines"]
        assert second.children[1].children[0].type == "emphasis"

    def test_grid_table_without_header(self, parse_with) -> None:
        """Test that a table without '=' separator has body rows only."""
        source = "+---+---+\n| a | b |\n+---+---+\n"
        table = parse_with(source, "grid_tables").children[0]

        assert len(table.children) == 1
        assert [cell.get("head") for cell in table.children[0].children] == [False, False]

    def test_alignment_from_separator(self, parse_with) -> None:
        """Test column alignment read from colons."""
        source = "+:---:+---:+\n| a   | b  |\n+-----+----+\n"
        table = parse_with(source, "grid_tables").children[0]

        assert table.get("align") == ["center", "right"]

    def test_misaligned_table_is_not_a_table(self, parse_with) -> None:
        """Test that inconsistent column boundaries reject the block."""
        tree = parse_with("+---+\n| a  |\n+---+\n", "grid_tables")
        assert find_first(tree, "table") is None


@pytest.mark.unit
class TestIframes:
    """Tests for embedded videos."""

    def test_youtube(self, parse_with) -> None:
        """Test a YouTube embed with its provider size."""
        node = parse_with("!(https://www.youtube.com/watch?v=FdeioVndUhs)", "iframes").children[0]

        assert node.type == "iframe"
        assert node.get("src") == "https://www.youtube.com/embed/FdeioVndUhs"
        assert node.get("width") == 560
        assert node.get("height") == 315
        assert node.get("provider") == "www.youtube.com"

    def test_unknown_provider_is_text(self, parse_with) -> None:
        """Test that hosts without a provider are not embedded."""
        tree = parse_with("!(https://example.com/video)", "iframes")
        assert find_first(tree, "iframe") is None

    def test_embed_url_remove_after(self) -> None:
        """Test cutting the URL after the replaced part."""
        provider = {"replace": {"watch?v=": "embed/"}, "remove_after": "&"}
        assert embed_url("https://www.youtube.com/watch?v=abc&t=4", provider) == "https://www.youtube.com/embed/abc"

    def test_embed_url_append_and_match(self) -> None:
        """Test the jsfiddle provider shape."""
        provider = {
            "replace": {"http://": "https://"},
            "append": "embedded/result,js,html,css/",
            "match": r"^https?://(www\.)?jsfiddle\.net/[\w\d]+/[\w\d]+/?(\d+/?)?$",
        }

        assert (
            embed_url("http://jsfiddle.net/Sandhose/6rbjL3ts/", provider)
            == "https://jsfiddle.net/Sandhose/6rbjL3ts/embedded/result,js,html,css/"
        )
        assert embed_url("https://jsfiddle.net/only-one-part", provider) is None

    def test_embed_url_ina(self) -> None:
        """Test the trailing path removal of the ina provider."""
        provider = {"replace": {"www.ina.fr/video/": "player.ina.fr/player/embed/"}, "remove_after": "/"}
        assert (
            embed_url("https://www.ina.fr/video/MAN9062216517/", provider)
            == "https://player.ina.fr/player/embed/MAN9062216517"
        )


@pytest.mark.unit
class TestInlineSyntax:
    """Tests for inline grammar extensions."""

    def test_kbd(self, parse_with) -> None:
        """Test keyboard keys."""
        paragraph = parse_with("Press ||Ctrl|| + ||C||", "kbd").children[0]
        keys = [node.text_content() for node in iter_nodes(paragraph, "kbd")]

        assert keys == ["Ctrl", "C"]

    def test_inline_math(self, parse_with) -> None:
        """Test inline math."""
        paragraph = parse_with(r"Euler: $e^{i\pi} + 1 = 0$.", "math").children[0]
        math = find_first(paragraph, "inlineMath")

        assert math.value == r"e^{i\pi} + 1 = 0"
        assert math.get("display") is False

    def test_inline_display_math(self, parse_with) -> None:
        """Test double-dollar math inside a paragraph."""
        paragraph = parse_with("The sum $$\\sum x$$ here", "math").children[0]
        math = find_first(paragraph, "inlineMath")

        assert math.value == "\\sum x"
        assert math.get("display") is True

    def test_block_math(self, parse_with) -> None:
        """Test display math blocks."""
        tree = parse_with("$$\n\\int_0^1 x\\,dx\n$$\n\n$$a + b$$", "math")

        assert [child.type for child in tree.children] == ["math", "math"]
        assert tree.children[0].value == "\\int_0^1 x\\,dx"
        assert tree.children[1].value == "a + b"

    def test_prices_are_not_math(self, parse_with) -> None:
        """Test that dollars followed by digits do not form math."""
        tree = parse_with("It costs $5 or $10 today.", "math")
        assert find_first(tree, "inlineMath") is None

    def test_math_protects_underscores(self, parse_with) -> None:
        """Test that emphasis markers inside math stay literal."""
        paragraph = parse_with("$a_1 * b_2 * c$", "math").children[0]

        assert find_first(paragraph, "emphasis") is None
        assert find_first(paragraph, "inlineMath").value == "a_1 * b_2 * c"

    def test_ping(self, parse_with) -> None:
        """Test short and long mentions."""
        paragraph = parse_with("Hello @alice and @**Bob Smith**!", "ping").children[0]
        pings = list(iter_nodes(paragraph, "ping"))

        assert [ping.get("username") for ping in pings] == ["alice", "Bob Smith"]
        assert pings[0].get("url") == "/membres/voir/alice/"
        assert pings[0].get("classes") == "ping"
        assert pings[1].text_content() == "Bob Smith"

    def test_email_is_not_a_ping(self, parse_with) -> None:
        """Test that an address is not a mention."""
        tree = parse_with("Write to bob@example.com", "ping")
        assert find_first(tree, "ping") is None

    def test_ping_rejected_by_callback(self, bundle, parse_with) -> None:
        """Test that the ping_username callback filters mentions."""
        bundle.tree_config["ping"]["ping_username"] = lambda username: username == "alice"
        tree = parse_with("@alice @mallory", "ping")

        assert [ping.get("username") for ping in iter_nodes(tree, "ping")] == ["alice"]

    def test_no_ping_inside_link(self, parse_with) -> None:
        """Test that link text is never a mention."""
        tree = parse_with("[@alice](https://example.com)", "ping")
        assert find_first(tree, "ping") is None

    def test_abbr(self, parse_with) -> None:
        """Test abbreviation definitions applied to the text."""
        tree = parse_with("The HTML spec.\n\n*[HTML]: Hyper Text Markup Language", "abbr")
        abbr = find_first(tree, "abbr")

        assert abbr.get("title") == "Hyper Text Markup Language"
        assert abbr.text_content() == "HTML"

    def test_sub_and_sup(self, parse_with) -> None:
        """Test subscript and superscript."""
        paragraph = parse_with("H~2~O and 2^10^", "sub_super").children[0]

        assert find_first(paragraph, "sub").text_content() == "2"
        assert find_first(paragraph, "sup").text_content() == "10"

    def test_strikethrough_survives_subscript(self, parse_with) -> None:
        """Test that double tildes remain strikethrough."""
        paragraph = parse_with("~~gone~~", "sub_super").children[0]
        assert paragraph.children[0].type == "delete"


@pytest.mark.unit
class TestDisableTokenizers:
    """Tests for rule removal by configuration."""

    def test_indented_code_disabled_by_default(self, parse_with) -> None:
        """Test that indented text is a paragraph with the default configuration."""
        tree = parse_with("    not code", "disable_tokenizers")
        assert tree.children[0].type == "paragraph"

    def test_inline_rule_disabled(self, bundle, parse_with) -> None:
        """Test removing an inline rule by configuration."""
        bundle.tree_config["disable_tokenizers"]["inline"] = ["codespan"]
        paragraph = parse_with("`not code`", "disable_tokenizers").children[0]

        assert find_first(paragraph, "inlineCode") is None
