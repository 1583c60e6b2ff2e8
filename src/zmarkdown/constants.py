#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/constants.py
"""Constants shared across the zmarkdown pipeline.

Centralizes target names, metadata-bag keys and the default values used by
stages so the builder, the stages and the tests agree on them.

"""

from __future__ import annotations

from typing import Final, Literal

Target = Literal["html", "latex"]

TARGET_HTML: Final[str] = "html"
TARGET_LATEX: Final[str] = "latex"
SUPPORTED_TARGETS: Final[tuple[str, ...]] = (TARGET_HTML, TARGET_LATEX)

# Metadata bag keys
DISABLE_TOC_KEY: Final[str] = "disable_toc"
FOOTNOTE_ORDER_KEY: Final[str] = "footnote_order"
DOWNLOADED_IMAGES_KEY: Final[str] = "downloaded_images"
PINGS_KEY: Final[str] = "pings"

# Configuration flags living at the top level of the tree configuration
NO_TYPOGRAPHY_FLAG: Final[str] = "no_typography"
TEST_MODE_FLAG: Final[str] = "_test"

# Node wrapper defaults
IFRAME_SINGLE_WRAPPER_PROVIDERS: Final[tuple[str, ...]] = ("jsfiddle.", "ina.")
VIDEO_WRAPPER_CLASS: Final[str] = "video-wrapper"
VIDEO_CONTAINER_CLASS: Final[str] = "video-container"
IFRAME_WRAPPER_CLASS: Final[str] = "iframe-wrapper"
TABLE_WRAPPER_CLASS: Final[str] = "table-wrapper"

# Network defaults for the image download stage
DEFAULT_USER_AGENT: Final[str] = "zmarkdown/1.0 (+https://github.com/zestedesavoir/zmarkdown)"
DEFAULT_DOWNLOAD_TIMEOUT: Final[float] = 10.0
DEFAULT_MAX_IMAGE_SIZE_BYTES: Final[int] = 1024 * 1024
DEFAULT_MAX_IMAGES: Final[int] = 50

# Text used by stages when the configuration does not override it
DEFAULT_FOOTNOTE_TITLE: Final[str] = "Jump to note $id"
DEFAULT_FOOTNOTE_BACKREF_TITLE: Final[str] = "Back to reference $id"
FOOTNOTE_ID_PLACEHOLDER: Final[str] = "$id"
