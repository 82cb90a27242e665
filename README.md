# toolchainer

Building blocks for a command-line toolchain installer and manager.

## What is in the package

- **Resumable downloads** (`toolchainer.download`):
  `download_to_path_with_backend(backend, url, path, resume_from_partial, callback)`
  fetches a URL into a file. With `resume_from_partial` set, an existing file
  at `path` is kept and the download continues from its end by sending a
  `Range` header. If a callback is given, the existing bytes are first
  replayed to it after a `ResumingPartialDownload` event, so the callback
  sees the whole file as if it had been downloaded in one go. Progress
  arrives as `DownloadContentLengthReceived(length)` and
  `DownloadDataReceived(data)` events. `Backend.CURL` and `Backend.REQWEST`
  select two slightly different download strategies (`curl_download` and
  `reqwest_download`), both built on the standard library. `file:` URLs are
  read straight from disk. On any failure the file at `path` is removed
  before the error is raised.
- **Progress display** (`toolchainer.tracker`): `DownloadTracker` keeps
  totals and recent speeds and, at most once a second, redraws a single line
  with size, percentage, speed, elapsed time and ETA. `push_unit` and
  `pop_unit` switch between counting bytes (`Unit.B`) and I/O operations
  (`Unit.IO`). `format_duration` and `format_size` can be used on their own,
  and `DownloadTracker.from_seconds` splits seconds into days, hours,
  minutes and seconds.
- **Status messages** (`toolchainer.log`): `info`, `warn`, `err`, `verbose`
  and `debug` write labelled lines to standard error, coloured when it is a
  terminal; `debug` only writes when the `RUSTUP_DEBUG` environment variable
  is set.
- **Markdown in the terminal** (`toolchainer.markdown`): `md(stream, content)`
  renders Markdown as text wrapped at 79 columns, with indented lists and
  code blocks; headings and inline code are bold and emphasis is red when
  the stream is a terminal. `LineWrapper` and `LineFormatter` are the parts
  it is built from.
- **Prompts and error reports** (`toolchainer.common`): `confirm`,
  `confirm_advanced`, `question_str` and `question_bool` ask questions on
  standard output and read answers from standard input; `read_line` raises
  `CliError` when input is exhausted. `self_update_permitted` answers with a
  `SelfUpdatePermission`, and `report_error` prints an error with its chain
  of causes, plus a traceback when `show_backtrace` says so.
- **Invocation** (`toolchainer.invocation`): `invocation_mode(arg0)` returns
  the `InvocationMode` that the executable's name calls for (manager,
  installer, uninstall helper or tool proxy); `recursion_guard(max_count)`
  raises `InfiniteRecursion` when `RUST_RECURSION_COUNT` is too high.
- **Help texts** (`toolchainer.help`): the long help texts of the commands,
  such as `TOOLCHAIN_HELP`, `OVERRIDE_HELP` and `COMPLETIONS_HELP`.
- **Errors** (`toolchainer.errors`): `DownloadError` and `CliError` and their
  subclasses. An invalid toolchain name comes with a suggestion:

```python
from toolchainer.errors import maybe_suggest_toolchain

maybe_suggest_toolchain("1.8")
# ". Toolchain numbers tend to have three parts, e.g. 1.8.0"

maybe_suggest_toolchain("stabel")
# ". Did you mean 'stable'?"
```

## Downloading with progress

```python
from toolchainer.download import (
    Backend,
    DownloadDataReceived,
    download_to_path_with_backend,
)

received = 0

def on_event(event):
    global received
    if isinstance(event, DownloadDataReceived):
        received += len(event.data)

download_to_path_with_backend(
    Backend.CURL,
    "file:///tmp/source.tar.gz",
    "/tmp/target.tar.gz",
    True,
    on_event,
)
```

## Rendering help text

```python
import sys
from toolchainer.help import OVERRIDE_HELP
from toolchainer.markdown import md

md(sys.stdout, "# Usage\n\nRun the installer and follow the prompts.")
print(OVERRIDE_HELP)
```

## Time arithmetic

```python
from toolchainer.tracker import DownloadTracker, format_duration

DownloadTracker.from_seconds(52_292)  # (0, 14, 31, 32)
format_duration(52_292)               # "14h 31m 32s"
```

## What the package does not do

This is a library of parts, not a finished tool. It installs no command and
has no entry point: there is no command-line parser, and nothing here
installs, updates or removes toolchains, manages overrides or settings, or
starts proxied tools. `invocation_mode` only reports which mode a name calls
for, and `self_update_permitted` only decides whether a self-update may go
ahead; performing the update is left to the caller.

## Requirements

Python 3.10 or later and `markdown-it-py`. Tests use `pytest`
(`pip install .[test]`).