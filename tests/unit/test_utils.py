#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_utils.py
"""Unit tests for the text and network helpers.

Tests cover:
- Slug generation, accent folding and repeated slugs
- Content-type parsing
- Image fetching with validation
"""

import asyncio

import httpx
import pytest

from zmarkdown.exceptions import NetworkError
from zmarkdown.utils.network import create_async_client, fetch_image, parse_content_type
from zmarkdown.utils.text import slugify


@pytest.mark.unit
class TestSlugify:
    """Tests for slugify()."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Hello World", "hello-world"),
            ("Élément à côté", "element-a-cote"),
            ("What's new?", "whats-new"),
            ("  padded  ", "padded"),
            ("snake_case-ok", "snake_case-ok"),
            ("!!!", "section"),
        ],
    )
    def test_slug(self, text: str, expected: str) -> None:
        """Test slug normalization."""
        assert slugify(text) == expected

    def test_keep_accents(self) -> None:
        """Test that accents can be kept."""
        assert slugify("Été", keep_accents=True) == "été"

    def test_repeated_slugs(self) -> None:
        """Test numeric suffixes for repeated slugs."""
        seen: set[str] = set()

        assert [slugify("Part", seen_slugs=seen) for _ in range(3)] == ["part", "part-1", "part-2"]
        assert seen == {"part", "part-1", "part-2"}


@pytest.mark.unit
class TestNetwork:
    """Tests for the HTTP helpers."""

    @pytest.mark.parametrize(
        "header,expected",
        [("image/png", "image/png"), ("IMAGE/JPEG; charset=binary", "image/jpeg"), ("", "")],
    )
    def test_parse_content_type(self, header: str, expected: str) -> None:
        """Test MIME type extraction."""
        assert parse_content_type(header) == expected

    def test_client_user_agent(self) -> None:
        """Test that requests carry the user agent."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["user-agent"])
            return httpx.Response(200, headers={"content-type": "image/gif"}, content=b"GIF89a")

        async def main():
            async with create_async_client(user_agent="tester/1.0", transport=httpx.MockTransport(handler)) as client:
                return await fetch_image(client, "https://example.com/a.gif")

        data, content_type = asyncio.run(main())

        assert data == b"GIF89a"
        assert content_type == "image/gif"
        assert seen == ["tester/1.0"]

    @pytest.mark.parametrize(
        "response,message",
        [
            (httpx.Response(500), "HTTP request failed"),
            (httpx.Response(200, headers={"content-type": "text/plain"}, content=b"x"), "Not an image"),
            (httpx.Response(200, headers={"content-type": "image/png"}, content=b""), "Empty response"),
            (httpx.Response(200, headers={"content-type": "image/png"}, content=b"x" * 20), "too large"),
        ],
    )
    def test_fetch_errors(self, response: httpx.Response, message: str) -> None:
        """Test that invalid responses raise NetworkError."""

        async def main():
            transport = httpx.MockTransport(lambda request: response)
            async with create_async_client(transport=transport) as client:
                return await fetch_image(client, "https://example.com/x", max_size_bytes=10)

        with pytest.raises(NetworkError, match=message) as exc_info:
            asyncio.run(main())
        assert exc_info.value.url == "https://example.com/x"
