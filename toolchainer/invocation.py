"""Decide how the program behaves from the name it was started under."""

from __future__ import annotations

import enum
import os
import sys
from pathlib import PurePath
from typing import Optional

from toolchainer.errors import InfiniteRecursion, NoExeName


class InvocationMode(enum.Enum):
    """What the program does, chosen by the name of its executable."""

    RUSTUP = "rustup"
    SETUP = "setup"
    WINDOWS_UNINSTALL = "windows-uninstall"
    PROXY = "proxy"


def recursion_guard(max_count: int) -> int:
    """Raise if the proxy recursion count exceeds ``max_count``; return it."""
    try:
        count = int(os.environ.get("RUST_RECURSION_COUNT", ""))
    except ValueError:
        count = 0
    if count < 0:
        count = 0
    if count > max_count:
        raise InfiniteRecursion()
    return count


def _file_stem(path: str) -> Optional[str]:
    name = PurePath(path).name
    if not name or name == "..":
        return None
    return PurePath(name).stem


def invocation_mode(arg0: Optional[str] = None) -> InvocationMode:
    """Pick the mode from ``arg0``, or from the environment and argv if omitted."""
    if arg0 is None:
        arg0 = os.environ.get("RUSTUP_FORCE_ARG0")
        if arg0 is None and sys.argv:
            arg0 = sys.argv[0]
    name = _file_stem(arg0) if arg0 is not None else None
    if name is None:
        raise NoExeName()

    if name == "rustup":
        return InvocationMode.RUSTUP
    # Only the prefix is checked: browsers rename duplicates, e.g. rustup-init(2).
    if name.startswith(("rustup-setup", "rustup-init")):
        return InvocationMode.SETUP
    if name.startswith("rustup-gc-"):
        return InvocationMode.WINDOWS_UNINSTALL
    return InvocationMode.PROXY