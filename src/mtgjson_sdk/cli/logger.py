"""Logging helpers for the mtgjson-sdk CLI."""

from __future__ import annotations

import logging
import os
import sys

import colorlog

_DATEFMT = "%Y-%m-%d %H:%M:%S"
_PLAIN_FORMAT = "[%(asctime)s] <%(name)s> %(levelname)s: %(message)s"
_COLOR_FORMAT = "%(log_color)s[%(asctime)s] <%(name)s> %(levelname)s:%(reset)s %(message)s"

LOG_COLORS = {
    "DEBUG": "bold_cyan",
    "INFO": "bold_green",
    "WARNING": "bold_yellow",
    "ERROR": "bold_red",
    "CRITICAL": "bold_red,bg_white",
}

# Third-party loggers that are too chatty at DEBUG
_QUIET_LOGGERS = ("urllib3", "filelock")


def _use_color() -> bool:
    if os.getenv("NO_COLOR") is not None:
        return False
    return sys.stderr.isatty()


def _level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(verbose: bool, *, quiet: bool = False) -> None:
    """
    Configure the root logger for CLI usage.

    Logs go to stderr, colored when stderr is a terminal and NO_COLOR
    is not set. `verbose` wins over `quiet`.
    """
    handler = logging.StreamHandler(sys.stderr)
    if _use_color():
        handler.setFormatter(
            colorlog.ColoredFormatter(fmt=_COLOR_FORMAT, log_colors=LOG_COLORS, datefmt=_DATEFMT)
        )
    else:
        handler.setFormatter(logging.Formatter(fmt=_PLAIN_FORMAT, datefmt=_DATEFMT))
    logging.basicConfig(level=_level(verbose, quiet), handlers=[handler], force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
