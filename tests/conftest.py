#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/conftest.py
"""Pytest configuration and shared fixtures for the zmarkdown test suite.

This module provides shared fixtures (configuration bundles, renderers and a
synchronous render helper) used across the unit and integration tests.
"""

import asyncio
from pathlib import Path
from typing import Any, Callable

import pytest
from bs4 import BeautifulSoup

from zmarkdown.config import ConfigBundle, default_config_bundle
from zmarkdown.file import RenderedFile
from zmarkdown.parsers.markdown import MarkdownParser
from zmarkdown.pipeline.renderer import Renderer, renderer_factory


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def bundle() -> ConfigBundle:
    """Provide the default configuration bundle in test mode (no syntax highlighting)."""
    config = default_config_bundle()
    config.tree_config["_test"] = True
    return config


@pytest.fixture
def html_renderer(bundle: ConfigBundle) -> Renderer:
    """Provide an HTML renderer built from the test bundle."""
    return renderer_factory(bundle, target="html")


@pytest.fixture
def latex_renderer(bundle: ConfigBundle) -> Renderer:
    """Provide a LaTeX renderer built from the test bundle."""
    return renderer_factory(bundle, target="latex")


@pytest.fixture
def render(html_renderer: Renderer) -> Callable[[str], RenderedFile]:
    """Provide a synchronous helper rendering markdown to HTML."""

    def _render(source: str) -> RenderedFile:
        return asyncio.run(html_renderer(source))

    return _render


@pytest.fixture
def render_soup(render: Callable[[str], RenderedFile]) -> Callable[[str], BeautifulSoup]:
    """Provide a helper rendering markdown and parsing the HTML output."""

    def _render_soup(source: str) -> BeautifulSoup:
        return BeautifulSoup(render(source).contents, "html.parser")

    return _render_soup


@pytest.fixture
def render_latex(latex_renderer: Renderer) -> Callable[[str], str]:
    """Provide a synchronous helper rendering markdown to a LaTeX body."""

    def _render_latex(source: str) -> str:
        return str(asyncio.run(latex_renderer(source)))

    return _render_latex


@pytest.fixture
def parse_with(bundle: ConfigBundle) -> Callable[..., Any]:
    """Provide a helper parsing markdown with a selection of grammar plugins.

    ``parse_with(source, stage_name, ...)`` applies each stage's
    ``parser_plugin`` with its default options before parsing.
    """
    from zmarkdown.pipeline.stages import stage_registry

    def _parse_with(source: str, *stage_names: str) -> Any:
        parser = MarkdownParser(bundle.tree_config["parse"])
        for name in stage_names:
            spec = stage_registry.get(name)
            spec.parser_plugin(parser, spec.options_from(bundle))
        return parser.parse(source)

    return _parse_with


@pytest.fixture
def markdown_file(tmp_path: Path) -> Path:
    """Provide a small markdown file on disk."""
    path = tmp_path / "document.md"
    path.write_text("# Titre\n\nUn paragraphe avec **du gras**.\n", encoding="utf-8")
    return path
