"""Labelled, coloured status messages written to standard error."""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO

_RESET = "\x1b[0m"
_BOLD = "\x1b[1m"
_RED = "\x1b[31m"
_YELLOW = "\x1b[33m"
_BLUE = "\x1b[34m"
_MAGENTA = "\x1b[35m"

DEBUG_ENV_VAR = "RUSTUP_DEBUG"


def _isatty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except (OSError, ValueError):
        return False


def _emit(label: str, color: Optional[str], message: object) -> None:
    stream = sys.stderr
    if _isatty(stream):
        prefix = f"{color or ''}{_BOLD}{label}{_RESET}"
    else:
        prefix = label
    stream.write(f"{prefix}{message}\n")
    stream.flush()


def warn(message: object) -> None:
    """Write a warning to standard error."""
    _emit("warning: ", _YELLOW, message)


def err(message: object) -> None:
    """Write an error to standard error."""
    _emit("error: ", _RED, message)


def info(message: object) -> None:
    """Write an informational message to standard error."""
    _emit("info: ", None, message)


def verbose(message: object) -> None:
    """Write a verbose message to standard error."""
    _emit("verbose: ", _MAGENTA, message)


def debug(message: object) -> None:
    """Write a debug message to standard error when debugging is enabled."""
    if DEBUG_ENV_VAR in os.environ:
        _emit("debug: ", _BLUE, message)