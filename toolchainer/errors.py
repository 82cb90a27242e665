"""Error types raised by the downloader and the command line tools."""

from __future__ import annotations

import re
from os import PathLike
from typing import Iterable

VALID_CHANNELS = ("stable", "beta", "nightly")
MAX_SUGGESTION_DISTANCE = 3
_NUMBERED = re.compile(r"\d+\.\d+")


class DownloadError(Exception):
    """Base class for failures while downloading a file."""


class HttpStatusError(DownloadError):
    """The server answered with a status code outside the 2xx range."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(
            f"http request returned an unsuccessful status code: {code}"
        )


class DownloadFileNotFound(DownloadError):
    """The file to download does not exist."""

    def __init__(self) -> None:
        super().__init__("file not found")


class BackendUnavailable(DownloadError):
    """The requested download backend cannot be used."""

    def __init__(self, backend: str) -> None:
        self.backend = backend
        super().__init__(f"download backend '{backend}' unavailable")


class CliError(Exception):
    """Base class for failures reported by the command line tools."""


class PermissionDeniedError(CliError):
    def __init__(self) -> None:
        super().__init__("permission denied")


class ToolchainNotInstalled(CliError):
    def __init__(self, toolchain: str) -> None:
        self.toolchain = toolchain
        super().__init__(f"toolchain '{toolchain}' is not installed")


class InvalidToolchainName(CliError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"invalid toolchain name: '{name}'{maybe_suggest_toolchain(name)}"
        )


class InfiniteRecursion(CliError):
    def __init__(self) -> None:
        super().__init__("infinite recursion detected")


class NoExeName(CliError):
    def __init__(self) -> None:
        super().__init__("couldn't determine self executable name")


class NotSelfInstalled(CliError):
    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = path
        super().__init__(f"rustup is not installed at '{path}'")


class TargetAllSpecifiedWithTargets(CliError):
    def __init__(self, targets: Iterable[str]) -> None:
        self.targets = list(targets)
        super().__init__(
            f"`rustup target add {' '.join(self.targets)}` includes `all`"
        )


class WritingShellProfile(CliError):
    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = path
        super().__init__(f"could not amend shell profile: '{path}'")


def damerau_levenshtein(a: str, b: str) -> int:
    """Unrestricted Damerau-Levenshtein distance between two strings."""
    if not a:
        return len(b)
    if not b:
        return len(a)

    big = len(a) + len(b)
    # Table with an extra sentinel row and column holding `big`.
    table = [[big] * (len(b) + 2)]
    table.extend([big, i] + [0] * len(b) for i in range(len(a) + 1))
    table[1][1:] = list(range(len(b) + 1))

    last_row_of: dict[str, int] = {}
    for i, char_a in enumerate(a, start=1):
        last_match_col = 0
        for j, char_b in enumerate(b, start=1):
            k = last_row_of.get(char_b, 0)
            col = last_match_col
            cost = 1
            if char_a == char_b:
                cost = 0
                last_match_col = j
            table[i + 1][j + 1] = min(
                table[i][j] + cost,
                table[i + 1][j] + 1,
                table[i][j + 1] + 1,
                table[k][col] + (i - k - 1) + 1 + (j - col - 1),
            )
        last_row_of[char_a] = i
    return table[len(a) + 1][len(b) + 1]


def _ascii_lower(text: str) -> str:
    return "".join(c.lower() if c.isascii() else c for c in text)


def maybe_suggest_toolchain(bad_name: str) -> str:
    """Return a hint to append to an invalid toolchain name message."""
    bad_name = _ascii_lower(bad_name)

    if _NUMBERED.fullmatch(bad_name):
        return (
            ". Toolchain numbers tend to have three parts, "
            f"e.g. {bad_name}.0"
        )

    scored = sorted(
        (distance, channel)
        for channel in VALID_CHANNELS
        if (distance := damerau_levenshtein(bad_name, channel))
        <= MAX_SUGGESTION_DISTANCE
    )
    if not scored:
        return ""
    return f". Did you mean '{scored[0][1]}'?"