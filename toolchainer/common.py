"""Interactive prompts, self-update checks and error reporting for the CLI."""

from __future__ import annotations

import enum
import os
import sys
import tempfile
import traceback
from pathlib import Path
from typing import Iterator, Optional, Sequence

from toolchainer import log
from toolchainer.errors import CliError

_YES = ("y", "yes")
_NO = ("n", "no")


class Confirm(enum.Enum):
    """The answer to the installation menu."""

    YES = "yes"
    NO = "no"
    ADVANCED = "advanced"


class SelfUpdatePermission(enum.Enum):
    """Whether a self-update may go ahead."""

    HARD_FAIL = "hard-fail"
    SKIP = "skip"
    PERMIT = "permit"


def read_line() -> str:
    """Read one line from standard input without its line ending."""
    line = sys.stdin.readline()
    if not line:
        raise CliError("unable to read from stdin for confirmation")
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _prompt(text: str, end: str) -> str:
    print(text, end=end)
    sys.stdout.flush()
    return read_line()


def confirm(question: str, default: bool) -> bool:
    """Ask a yes/no question on one line; anything unrecognised means no."""
    answer = _prompt(question, " ").lower()
    print()
    if answer in _YES:
        return True
    if answer in _NO:
        return False
    if answer == "":
        return default
    return False


def confirm_advanced() -> Confirm:
    """Offer to proceed, customise or cancel the installation."""
    print()
    print("1) Proceed with installation (default)")
    print("2) Customize installation")
    print("3) Cancel installation")
    answer = _prompt(">", "")
    print()
    if answer in ("1", ""):
        return Confirm.YES
    if answer == "2":
        return Confirm.ADVANCED
    return Confirm.NO


def question_str(question: str, default: str) -> str:
    """Ask for a string, falling back to ``default`` on an empty answer."""
    answer = _prompt(question, "\n")
    print()
    return answer or default


def question_bool(question: str, default: bool) -> bool:
    """Ask a yes/no question; empty or unrecognised answers give ``default``."""
    answer = _prompt(question, "\n").lower()
    print()
    if answer in _YES:
        return True
    if answer in _NO:
        return False
    return default


def _current_exe() -> Path:
    return Path(sys.argv[0]).resolve()


def _refused(explicit: bool) -> SelfUpdatePermission:
    return SelfUpdatePermission.HARD_FAIL if explicit else SelfUpdatePermission.SKIP


def self_update_permitted(explicit: bool) -> SelfUpdatePermission:
    """Decide whether this installation may update itself."""
    if sys.platform == "win32":
        return SelfUpdatePermission.PERMIT

    if "SNAP" in os.environ:
        log.debug("Skipping self-update because SNAP was detected")
        return _refused(explicit)

    exe_dir = _current_exe().parent
    try:
        with tempfile.TemporaryDirectory(prefix="updtest", dir=exe_dir):
            pass
    except PermissionError:
        log.debug("Skipping self-update because we cannot write to the rustup dir")
        return _refused(explicit)
    return SelfUpdatePermission.PERMIT


def show_backtrace(argv: Optional[Sequence[str]] = None) -> bool:
    """Whether error reports should include a traceback."""
    if os.environ.get("RUSTUP_NO_BACKTRACE") == "1":
        return False
    if os.environ.get("RUST_BACKTRACE") == "1":
        return True
    args = sys.argv if argv is None else argv
    return any(arg in ("-v", "--verbose") for arg in args)


def _causes(error: BaseException) -> Iterator[BaseException]:
    seen = {id(error)}
    current = error
    while True:
        cause = current.__cause__
        if cause is None and not current.__suppress_context__:
            cause = current.__context__
        if cause is None or id(cause) in seen:
            return
        seen.add(id(cause))
        yield cause
        current = cause


def report_error(error: BaseException) -> None:
    """Write an error and the chain of its causes to standard error."""
    log.err(error)
    for cause in _causes(error):
        log.err(f"caused by: {cause}")
    if show_backtrace() and error.__traceback__ is not None:
        log.err("backtrace:")
        log.err("".join(traceback.format_tb(error.__traceback__)).rstrip("\n"))