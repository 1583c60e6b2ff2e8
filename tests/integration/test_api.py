#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_api.py
"""Integration tests for the public API.

Tests cover:
- create_zmarkdown() with default and custom configuration
- String and file rendering, awaitable and with callbacks
- Parsing and tree inspection
- Renderers built from an instance
- Package-level exports
"""

import asyncio
import threading
from pathlib import Path

import pytest

import zmarkdown
from zmarkdown import ConfigurationError, RenderedFile, Zmarkdown, create_zmarkdown
from zmarkdown.config import ConfigBundle, default_config_bundle
from zmarkdown.pipeline.renderer import Renderer


@pytest.fixture
def zmd(bundle: ConfigBundle) -> Zmarkdown:
    """Provide an HTML instance in test mode."""
    return create_zmarkdown(bundle)


@pytest.mark.integration
class TestCreateZmarkdown:
    """Tests for create_zmarkdown()."""

    def test_default_configuration(self) -> None:
        """Test that no argument means the default configuration."""
        instance = create_zmarkdown()

        assert isinstance(instance.config, ConfigBundle)
        assert instance.target == "html"
        assert instance.config.tree_config["no_typography"] is False

    def test_missing_half(self) -> None:
        """Test that an incomplete configuration is refused at once."""
        with pytest.raises(ConfigurationError, match="stringify_config is missing"):
            create_zmarkdown({"tree_config": default_config_bundle().tree_config})

    def test_exports(self) -> None:
        """Test the package-level API."""
        assert zmarkdown.__version__
        assert zmarkdown.create_zmarkdown is create_zmarkdown
        for name in zmarkdown.__all__:
            assert hasattr(zmarkdown, name)


@pytest.mark.integration
class TestRendering:
    """Tests for string and file rendering."""

    def test_render_string(self, zmd: Zmarkdown) -> None:
        """Test awaitable string rendering."""
        rendered = asyncio.run(zmd.render_string("*hello*"))

        assert isinstance(rendered, RenderedFile)
        assert str(rendered) == "<p><em>hello</em></p>"

    def test_render_string_callback(self, zmd: Zmarkdown) -> None:
        """Test string rendering with a callback."""
        calls = []
        zmd.render_string("*hello*", lambda error, rendered: calls.append((error, rendered)))

        assert len(calls) == 1
        assert calls[0][0] is None
        assert calls[0][1].contents == "<p><em>hello</em></p>"

    def test_render_file(self, zmd: Zmarkdown, markdown_file: Path) -> None:
        """Test awaitable file rendering."""
        rendered = asyncio.run(zmd.render_file(markdown_file))

        assert rendered.path == markdown_file
        assert '<h1 id="titre">' in rendered.contents
        assert "<strong>du gras</strong>" in rendered.contents

    def test_render_file_callback(self, zmd: Zmarkdown, markdown_file: Path) -> None:
        """Test file rendering with a callback."""
        calls = []
        zmd.render_file(str(markdown_file), lambda error, rendered: calls.append((error, rendered)))

        assert calls[0][0] is None
        assert calls[0][1].path == markdown_file

    def test_file_is_read_off_the_event_loop(
        self, zmd: Zmarkdown, markdown_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that reading the input file does not block the event loop thread."""
        read_text = Path.read_text
        threads = []

        def recording_read_text(self, *args, **kwargs):
            threads.append(threading.current_thread())
            return read_text(self, *args, **kwargs)

        monkeypatch.setattr(Path, "read_text", recording_read_text)

        async def main():
            return await zmd.render_file(markdown_file)

        rendered = asyncio.run(main())

        assert "<strong>du gras</strong>" in rendered.contents
        assert threads and threads[0] is not threading.main_thread()


    def test_missing_file_reaches_callback(self, zmd: Zmarkdown, tmp_path: Path) -> None:
        """Test that a read error is delivered like a render error."""
        calls = []
        zmd.render_file(tmp_path / "missing.md", lambda error, rendered: calls.append((error, rendered)))

        assert isinstance(calls[0][0], FileNotFoundError)
        assert calls[0][1] is None

    def test_renders_leave_configuration_untouched(self, zmd: Zmarkdown) -> None:
        """Test that renders work on copies of the configuration."""
        before = dict(zmd.config.tree_config["disable_tokenizers"])
        asyncio.run(zmd.render_string("text"))

        assert zmd.config.tree_config["disable_tokenizers"] == before


@pytest.mark.integration
class TestParseAndInspect:
    """Tests for parse() and inspect()."""

    def test_parse_applies_grammar_only(self, zmd: Zmarkdown) -> None:
        """Test that parsing uses grammar extensions but no transformers."""
        tree = zmd.parse("# Title\n\nPress ||Ctrl||")

        assert [child.type for child in tree.children] == ["heading", "paragraph"]
        assert tree.children[1].children[-1].type == "kbd"

    def test_inspect(self, zmd: Zmarkdown) -> None:
        """Test the tree outline."""
        outline = zmd.inspect(zmd.parse("# Title"))

        assert outline.splitlines()[0] == "root[1]"
        assert "heading[1] depth=1" in outline
        assert "text 'Title'" in outline


@pytest.mark.integration
class TestRendererFactory:
    """Tests for renderers built from an instance."""

    def test_default_target(self, zmd: Zmarkdown) -> None:
        """Test that renderers inherit the instance's configuration and target."""
        renderer = zmd.renderer_factory()

        assert isinstance(renderer, Renderer)
        assert renderer.target == "html"

    def test_latex_renderer(self, zmd: Zmarkdown) -> None:
        """Test building a LaTeX renderer from an HTML instance."""
        renderer = zmd.renderer_factory(target="latex")
        rendered = asyncio.run(renderer("# Title"))

        assert rendered.contents == "\\section{Title}\n"
        assert "\\section{Title}" in zmd.latex_document_template(rendered.contents, title="T")
