#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/file.py
"""Per-invocation file context.

One :class:`RenderedFile` is created when a render starts. Stages use its
``data`` mapping to signal each other (for instance the table-of-contents
flag read by the LaTeX template) and ``warn`` to record recoverable problems.
The same object is handed back to the caller once the output string is set.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class FileMessage:
    """A warning recorded by a stage.

    Parameters
    ----------
    reason : str
        What went wrong
    stage : str or None
        Name of the stage that recorded it

    """

    reason: str
    stage: Optional[str] = None


@dataclass
class RenderedFile:
    """File context shared by the stages of one render invocation.

    Parameters
    ----------
    value : str
        Markdown source
    path : Path or None, default = None
        Source path when rendering a file
    data : dict, default = empty dict
        Metadata bag used for cross-stage signaling
    contents : str or None, default = None
        Rendered output, set by the final stage
    tree : Any, default = None
        Last tree produced by the pipeline (source tree or HTML document)
    messages : list of FileMessage, default = empty list
        Warnings recorded while rendering

    Examples
    --------
        >>> rendered = asyncio.run(renderer("# Title"))
        >>> rendered.contents
        '<h1 id="title">...'
        >>> rendered.data["disable_toc"]
        False

    """

    value: str
    path: Optional[Path] = None
    data: dict[str, Any] = field(default_factory=dict)
    contents: Optional[str] = None
    tree: Any = None
    messages: list[FileMessage] = field(default_factory=list)

    def warn(self, reason: str, stage: Optional[str] = None) -> FileMessage:
        """Record a recoverable problem and log it."""
        message = FileMessage(reason=reason, stage=stage)
        self.messages.append(message)
        logger.warning(f"[{stage or 'pipeline'}] {reason}")
        return message

    def __str__(self) -> str:
        """Return the rendered output (empty before rendering finished)."""
        return self.contents or ""
