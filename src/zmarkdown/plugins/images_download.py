#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/images_download.py
"""Download remote images.

When enabled, every ``http(s)`` image of the document is downloaded into
``download_destination`` and its node is pointed at the local copy. This is
the one stage doing I/O, so it is a coroutine; downloads run concurrently on
a shared ``httpx.AsyncClient``.

Options
-------
disabled : bool
    Skip the stage entirely (the default)
download_destination : str
    Directory the images are written to (created when missing)
max_file_size : int
    Largest accepted image, in bytes
max_images : int
    Images beyond this count are left remote
timeout : float
    Per-request timeout in seconds
fail_on_error : bool
    Abort the render with :class:`~zmarkdown.exceptions.NetworkError` instead
    of keeping the remote URL and recording a warning
transport : httpx.AsyncBaseTransport, optional
    Custom transport for the client

The mapping of remote URL to local path is stored in
``file.data["downloaded_images"]``.

"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import mimetypes
from pathlib import Path
from typing import Any, Mapping, Optional

from zmarkdown.ast.nodes import Node
from zmarkdown.ast.visitors import iter_nodes
from zmarkdown.constants import (
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_MAX_IMAGE_SIZE_BYTES,
    DEFAULT_MAX_IMAGES,
    DOWNLOADED_IMAGES_KEY,
)
from zmarkdown.exceptions import NetworkError
from zmarkdown.file import RenderedFile
from zmarkdown.utils.network import create_async_client, fetch_image

logger = logging.getLogger(__name__)

STAGE_NAME = "images_download"


def local_filename(url: str, content_type: str) -> str:
    """Name of the local copy: a hash of the URL plus an extension from the MIME type."""
    extension = mimetypes.guess_extension(content_type) or Path(url.split("?", 1)[0]).suffix or ".img"
    if extension == ".jpe":
        extension = ".jpg"
    return hashlib.sha1(url.encode("utf-8")).hexdigest() + extension


async def _download(
    client: Any, url: str, destination: Path, max_size: int
) -> Path:
    data, content_type = await fetch_image(client, url, max_size_bytes=max_size)
    target = destination / local_filename(url, content_type)
    target.write_bytes(data)
    return target


async def transform(tree: Node, file: RenderedFile, options: Optional[Mapping[str, Any]]) -> None:
    """Download remote images and rewrite their URLs."""
    options = options or {}
    if options.get("disabled", True):
        return

    images: dict[str, list[Node]] = {}
    for node in iter_nodes(tree, "image"):
        url = node.get("url") or ""
        if url.startswith(("http://", "https://")):
            images.setdefault(url, []).append(node)
    if not images:
        return

    max_images = options.get("max_images", DEFAULT_MAX_IMAGES)
    urls = list(images)
    if len(urls) > max_images:
        file.warn(f"{len(urls)} remote images, only the first {max_images} are downloaded", stage=STAGE_NAME)
        urls = urls[:max_images]

    destination = Path(options.get("download_destination", "./img/"))
    destination.mkdir(parents=True, exist_ok=True)
    max_size = options.get("max_file_size", DEFAULT_MAX_IMAGE_SIZE_BYTES)
    fail_on_error = bool(options.get("fail_on_error", False))

    async with create_async_client(
        timeout=options.get("timeout", DEFAULT_DOWNLOAD_TIMEOUT), transport=options.get("transport")
    ) as client:
        results = await asyncio.gather(
            *(_download(client, url, destination, max_size) for url in urls), return_exceptions=True
        )

    downloaded: dict[str, str] = {}
    for url, result in zip(urls, results):
        if isinstance(result, NetworkError):
            if fail_on_error:
                raise result
            file.warn(f"Could not download {url}: {result.message}", stage=STAGE_NAME)
            continue
        if isinstance(result, BaseException):
            raise result
        downloaded[url] = str(result)
        for node in images[url]:
            node.properties["url"] = str(result)

    file.data[DOWNLOADED_IMAGES_KEY] = downloaded
    logger.debug(f"Downloaded {len(downloaded)} of {len(urls)} images")
