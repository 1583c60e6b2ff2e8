#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/logging_utils.py
"""Logging setup for the command line renderer.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed by :func:`configure_logging`, which the CLI calls once. HTTP
client loggers used by the image download stage are kept at WARNING unless
tracing, since they log every request at INFO.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "zmarkdown"
THIRD_PARTY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def resolve_level(log_level: int | str) -> int:
    """Turn a level name or number into a logging level (unknown names give INFO)."""
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install the console (and optional file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g. ``"DEBUG"``)
    log_file : str, optional
        Also append log records to this file
    trace_mode : bool, default False
        Prefix records with timestamps and logger names, so the stage modules
        emitting them can be told apart; HTTP client loggers are left at the
        requested level

    Returns
    -------
    logging.Logger
        The ``zmarkdown`` package logger

    """
    level = resolve_level(log_level)
    if trace_mode:
        formatter = logging.Formatter(_TRACE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter(_PLAIN_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(level if trace_mode else max(level, logging.WARNING))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if file_error is not None:
        package_logger.warning(f"Could not create log file {log_file}: {file_error}")
    elif log_file:
        package_logger.info(f"Logging to file: {log_file}")
    return package_logger
