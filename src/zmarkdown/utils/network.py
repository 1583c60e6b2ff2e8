#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/utils/network.py
"""Asynchronous HTTP helpers for the image download stage.

- create_async_client: httpx client with timeout, redirects and user agent
- fetch_image: stream an image with content-type and size validation

"""

from __future__ import annotations

import logging
from email.message import Message
from typing import Optional

import httpx

from zmarkdown.constants import DEFAULT_DOWNLOAD_TIMEOUT, DEFAULT_MAX_IMAGE_SIZE_BYTES, DEFAULT_USER_AGENT
from zmarkdown.exceptions import NetworkError

logger = logging.getLogger(__name__)


def parse_content_type(content_type: str) -> str:
    """Return the lowercased MIME type of a content-type header, without parameters.

    Examples
    --------
    >>> parse_content_type("image/png; charset=utf-8")
    'image/png'

    """
    if not content_type:
        return ""
    message = Message()
    message["content-type"] = content_type
    return message.get_content_type().lower()


def create_async_client(
    timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
    user_agent: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the client used for downloads.

    Parameters
    ----------
    timeout : float, default 10.0
        Per-request timeout in seconds
    user_agent : str or None, default None
        User-Agent header; defaults to the library's own
    transport : httpx.AsyncBaseTransport or None, default None
        Custom transport (``httpx.MockTransport`` in tests)

    Returns
    -------
    httpx.AsyncClient
        Client following redirects

    """
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": user_agent or DEFAULT_USER_AGENT},
        transport=transport,
    )


async def fetch_image(
    client: httpx.AsyncClient, url: str, max_size_bytes: int = DEFAULT_MAX_IMAGE_SIZE_BYTES
) -> tuple[bytes, str]:
    """Download an image.

    Parameters
    ----------
    client : httpx.AsyncClient
        Client to download with
    url : str
        Image URL
    max_size_bytes : int
        Largest accepted body

    Returns
    -------
    tuple of (bytes, str)
        Body and MIME type

    Raises
    ------
    NetworkError
        If the request fails, the response is not an image, is empty or is
        larger than ``max_size_bytes``

    """
    try:
        async with client.stream("GET", url) as response:
            response.raise_for_status()

            content_type = parse_content_type(response.headers.get("content-type", ""))
            if not content_type.startswith("image/"):
                raise NetworkError(f"Not an image: {content_type or 'unknown content type'}", url=url)

            declared = response.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > max_size_bytes:
                raise NetworkError(f"Image too large: {declared} bytes (max: {max_size_bytes})", url=url)

            chunks: list[bytes] = []
            total = 0
            async for chunk in response.aiter_bytes():
                total += len(chunk)
                if total > max_size_bytes:
                    raise NetworkError(f"Image too large: exceeded {max_size_bytes} bytes", url=url)
                chunks.append(chunk)
    except NetworkError:
        raise
    except httpx.HTTPError as exc:
        raise NetworkError(f"HTTP request failed: {exc}", url=url, original_error=exc) from exc

    if total == 0:
        raise NetworkError("Empty response received", url=url)

    logger.debug(f"Fetched {total} bytes from {url}")
    return b"".join(chunks), content_type
