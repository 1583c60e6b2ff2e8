#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_render_latex.py
"""Integration tests for the complete LaTeX pipeline.

Tests cover:
- Core markdown rendered to a LaTeX body
- Syntax extensions in LaTeX (custom blocks, math, keys, embeds, tables)
- Footnotes emitted at the reference site
- Absence of typography in LaTeX output
- The table-of-contents flag and the document template
"""

import asyncio

import pytest

from zmarkdown.pipeline.renderer import Renderer
from zmarkdown.templates.latex_document import render_latex_document


@pytest.mark.integration
class TestLatexDocuments:
    """Tests rendering whole documents to LaTeX."""

    def test_core_markdown(self, render_latex) -> None:
        """Test headings, emphasis and lists."""
        output = render_latex("# Titre\n\nUn **gras** et *italique*\n\n- un\n- deux")

        assert output == (
            "\\section{Titre}\n\n"
            "Un \\textbf{gras} et \\textit{italique}\n\n"
            "\\begin{itemize}\n\\item un\n\\item deux\n\\end{itemize}\n"
        )

    def test_special_characters(self, render_latex) -> None:
        """Test escaping of LaTeX special characters."""
        assert render_latex("50% of the_total & more") == "50\\% of the\\_total \\& more\n"

    def test_no_typography(self, render_latex) -> None:
        """Test that typography is never applied to LaTeX output."""
        assert render_latex("Vraiment ? Oui...") == "Vraiment ? Oui...\n"

    def test_code(self, render_latex) -> None:
        """Test fenced code."""
        output = render_latex("```python\nprint(1)\n```")
        assert output == "\\begin{codeBlock}{python}\nprint(1)\n\\end{codeBlock}\n"

    def test_custom_block(self, render_latex) -> None:
        """Test custom blocks as environments."""
        output = render_latex("[[attention | Careful]]\n| Hot surface")
        assert output == "\\begin{Warning}[Careful]\nHot surface\n\\end{Warning}\n"

    def test_math_and_keys(self, render_latex) -> None:
        """Test inline math and keyboard keys."""
        output = render_latex("Press ||Ctrl|| for $x^2$")
        assert output == "Press \\keys{Ctrl} for $x^2$\n"

    def test_footnotes(self, render_latex) -> None:
        """Test that footnote bodies appear at the reference site."""
        output = render_latex("Text[^source].\n\n[^source]: The source.")
        assert output == "Text\\footnote{The source.}.\n"

    def test_iframe(self, render_latex) -> None:
        """Test embedded videos."""
        output = render_latex("!(https://www.youtube.com/watch?v=FdeioVndUhs)")
        assert output == "\\iframe{https://www.youtube.com/embed/FdeioVndUhs}\n"

    def test_table(self, render_latex) -> None:
        """Test pipe tables as tabular environments."""
        output = render_latex("| a | b |\n|---|--:|\n| 1 | 2 |")

        assert output.startswith("\\begin{tabular}{lr}\n")
        assert "a & b \\\\" in output
        assert "1 & 2 \\\\" in output

    def test_comments_and_raw_html_dropped(self, render_latex) -> None:
        """Test that comments and raw HTML produce nothing."""
        output = render_latex("<--COMMENTS\nremark\nCOMMENTS-->\n\n<div>raw</div>\n\nKept")
        assert output == "Kept\n"


@pytest.mark.integration
class TestLatexDocumentTemplate:
    """Tests combining renders with the document template."""

    def test_toc_with_headings(self, latex_renderer: Renderer) -> None:
        """Test that a document with headings gets a table of contents."""
        rendered = asyncio.run(latex_renderer("# One\n\nText"))
        document = render_latex_document(rendered, title="Guide", authors=["Ada"])

        assert rendered.data["disable_toc"] is False
        assert "\\tableofcontents" in document
        assert "\\section{One}" in document

    def test_no_toc_without_headings(self, latex_renderer: Renderer) -> None:
        """Test that a document without headings has no table of contents."""
        rendered = asyncio.run(latex_renderer("Just text"))
        document = render_latex_document(rendered, title="Note")

        assert rendered.data["disable_toc"] is True
        assert "\\tableofcontents" not in document
        assert "Just text" in document
