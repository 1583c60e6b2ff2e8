#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast.py
"""Unit tests for the intermediate tree and its helpers.

Tests cover:
- Node construction and text content
- Traversal with SKIP, EXIT and index results
- Text replacement around regex matches
- Outline rendering
- Splitting paragraphs into source lines
"""

import re

import pytest

from zmarkdown.ast import EXIT, SKIP, Node, Position, find_first, inspect, iter_nodes, replace_text, root, text, visit
from zmarkdown.ast.utils import block_text_lines, strip_leading_text, strip_trailing_text


def _sample_tree() -> Node:
    return root(
        [
            Node("heading", {"depth": 1}, [text("Title")]),
            Node(
                "paragraph",
                children=[text("Some "), Node("emphasis", children=[text("stressed")]), text(" words")],
            ),
            Node("code", {"lang": "python"}, value="print(1)"),
        ]
    )


@pytest.mark.unit
class TestNode:
    """Tests for the Node dataclass."""

    def test_defaults_are_not_shared(self) -> None:
        """Test that two nodes never share their property or child containers."""
        first = Node("paragraph")
        second = Node("paragraph")
        first.children.append(text("x"))
        first.properties["a"] = 1

        assert second.children == []
        assert second.properties == {}

    def test_text_content(self) -> None:
        """Test concatenation of descendant literal content."""
        tree = _sample_tree()
        assert tree.children[1].text_content() == "Some stressed words"
        assert tree.text_content() == "TitleSome stressed wordsprint(1)"

    def test_is_literal(self) -> None:
        """Test literal type detection."""
        assert text("a").is_literal
        assert Node("inlineMath", value="x").is_literal
        assert not Node("paragraph").is_literal

    def test_get_property(self) -> None:
        """Test property access with a default."""
        heading = Node("heading", {"depth": 2})
        assert heading.get("depth") == 2
        assert heading.get("missing", "fallback") == "fallback"

    def test_iter_descendants_order(self) -> None:
        """Test depth-first pre-order iteration."""
        types = [node.type for node in _sample_tree().iter_descendants()]
        assert types == ["heading", "text", "paragraph", "text", "emphasis", "text", "text", "code"]


@pytest.mark.unit
class TestVisit:
    """Tests for visit() and the iteration helpers."""

    def test_visit_passes_parent_and_index(self) -> None:
        """Test that the visitor receives the node position."""
        tree = _sample_tree()
        calls = []
        visit(tree, "text", lambda node, index, parent: calls.append((node.value, index, parent.type)))

        assert calls == [
            ("Title", 0, "heading"),
            ("Some ", 0, "paragraph"),
            ("stressed", 0, "emphasis"),
            (" words", 2, "paragraph"),
        ]

    def test_visit_root_has_no_parent(self) -> None:
        """Test that the root is visited with None index and parent."""
        calls = []
        visit(root(), None, lambda node, index, parent: calls.append((node.type, index, parent)))
        assert calls == [("root", None, None)]

    def test_skip_does_not_descend(self) -> None:
        """Test that SKIP prevents visiting children."""
        tree = _sample_tree()
        seen = []

        def visitor(node, index, parent):
            seen.append(node.type)
            if node.type == "paragraph":
                return SKIP
            return None

        visit(tree, None, visitor)
        assert "emphasis" not in seen
        assert seen[-1] == "code"

    def test_exit_stops_traversal(self) -> None:
        """Test that EXIT stops the whole walk."""
        seen = []

        def visitor(node, index, parent):
            seen.append(node.value)
            return EXIT

        visit(_sample_tree(), "text", visitor)
        assert seen == ["Title"]

    def test_index_result_continues_after_replacement(self) -> None:
        """Test unwrapping a node and resuming after its children."""
        tree = _sample_tree()

        def unwrap(node, index, parent):
            parent.children[index : index + 1] = node.children
            return index + len(node.children)

        visit(tree, "emphasis", unwrap)

        paragraph = tree.children[1]
        assert [child.value for child in paragraph.children] == ["Some ", "stressed", " words"]

    def test_visit_with_tuple_and_predicate(self) -> None:
        """Test node tests given as a tuple or a predicate."""
        tree = _sample_tree()
        by_tuple = []
        by_predicate = []
        visit(tree, ("heading", "code"), lambda node, index, parent: by_tuple.append(node.type))
        visit(tree, lambda node: node.get("depth") == 1, lambda node, index, parent: by_predicate.append(node.type))

        assert by_tuple == ["heading", "code"]
        assert by_predicate == ["heading"]

    def test_iter_nodes_and_find_first(self) -> None:
        """Test document-order iteration and first-match lookup."""
        tree = _sample_tree()
        assert [node.value for node in iter_nodes(tree, "text")] == ["Title", "Some ", "stressed", " words"]
        assert find_first(tree, "code").get("lang") == "python"
        assert find_first(tree, "table") is None


@pytest.mark.unit
class TestReplaceText:
    """Tests for replace_text()."""

    def test_splits_text_around_matches(self) -> None:
        """Test that matches become new nodes and surrounding text is kept."""
        tree = root([Node("paragraph", children=[text("a @bob and @eve.")])])

        count = replace_text(
            tree,
            re.compile(r"@(\w+)"),
            lambda match: [Node("ping", {"username": match.group(1)})],
        )

        children = tree.children[0].children
        assert count == 2
        assert [child.type for child in children] == ["text", "ping", "text", "ping", "text"]
        assert children[0].value == "a "
        assert children[3].get("username") == "eve"
        assert children[4].value == "."

    def test_none_keeps_match(self) -> None:
        """Test that a None factory result leaves the text alone."""
        tree = root([Node("paragraph", children=[text("keep this")])])
        count = replace_text(tree, re.compile("this"), lambda match: None)

        assert count == 0
        assert tree.children[0].children[0].value == "keep this"

    def test_protected_types_are_skipped(self) -> None:
        """Test that text inside links is never rewritten."""
        tree = root([Node("paragraph", children=[Node("link", {"url": "/"}, [text("@bob")])])])
        count = replace_text(tree, re.compile(r"@\w+"), lambda match: [Node("ping")])

        assert count == 0
        assert tree.children[0].children[0].children[0].value == "@bob"


@pytest.mark.unit
class TestTreeUtils:
    """Tests for inspect() and line helpers."""

    def test_inspect_outline(self) -> None:
        """Test the outline format."""
        tree = root([Node("heading", {"depth": 1}, [text("Title")], position=Position(1, 1))])
        assert inspect(tree) == "root[1]\n└─ heading[1] depth=1 (1-1)\n   └─ text 'Title'"

    def test_inspect_truncates_long_values(self) -> None:
        """Test that long literal values are shortened."""
        outline = inspect(text("x" * 100))
        assert outline == "text " + repr("x" * 40 + "…")

    def test_block_text_lines(self) -> None:
        """Test splitting inline children on soft line endings."""
        strong = Node("strong", children=[text("b")])
        paragraph = Node("paragraph", children=[text("a\nc "), strong, text("\nd")])

        lines = block_text_lines(paragraph)

        assert len(lines) == 3
        assert [node.value for node in lines[0]] == ["a"]
        assert lines[1][0].value == "c "
        assert lines[1][1] is strong
        assert [node.value for node in lines[2]] == ["d"]

    def test_strip_leading_and_trailing_text(self) -> None:
        """Test removing markers from the edges of an inline run."""
        nodes = [text("->centered<-")]
        assert strip_leading_text(nodes, "->")
        assert strip_trailing_text(nodes, "<-")
        assert nodes[0].value == "centered"
        assert not strip_leading_text(nodes, "->")

    def test_strip_removes_emptied_node(self) -> None:
        """Test that a text node reduced to nothing is dropped."""
        nodes = [text("->"), Node("strong")]
        assert strip_leading_text(nodes, "->")
        assert [node.type for node in nodes] == ["strong"]
