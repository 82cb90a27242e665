"""File downloading with resumption of partial downloads."""

from __future__ import annotations

import enum
import os
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union
from urllib.parse import urlsplit

from toolchainer.errors import DownloadError, DownloadFileNotFound, HttpStatusError

_CHUNK_SIZE = 0x10000
_PARTIAL_READ_SIZE = 32768
_TIMEOUT_SECONDS = 30


class Backend(enum.Enum):
    CURL = "curl"
    REQWEST = "reqwest"


@dataclass(frozen=True)
class ResumingPartialDownload:
    """An existing partial file is being replayed before resuming."""


@dataclass(frozen=True)
class DownloadContentLengthReceived:
    """The total length of the data being downloaded."""

    length: int


@dataclass(frozen=True)
class DownloadDataReceived:
    """A chunk of downloaded data."""

    data: bytes


Event = Union[ResumingPartialDownload, DownloadContentLengthReceived, DownloadDataReceived]
Callback = Callable[[Event], None]


def _file_url_path(url: str) -> Path:
    parts = urlsplit(url)
    if parts.netloc not in ("", "localhost"):
        raise DownloadError(f"bogus file url: '{url}'")
    return Path(urllib.request.url2pathname(parts.path))


def _download_file_url(url: str, resume_from: int, callback: Callback) -> None:
    src = _file_url_path(url)
    if not src.is_file():
        raise DownloadFileNotFound()
    try:
        handle = src.open("rb")
    except OSError as exc:
        raise DownloadError("unable to open downloaded file") from exc
    with handle:
        handle.seek(resume_from)
        while True:
            try:
                chunk = handle.read(_CHUNK_SIZE)
            except OSError as exc:
                raise DownloadError("unable to read downloaded file") from exc
            if not chunk:
                return
            callback(DownloadDataReceived(chunk))


def _build_request(url: str, resume_from: int) -> urllib.request.Request:
    request = urllib.request.Request(url)
    if resume_from:
        request.add_header("Range", f"bytes={resume_from}-")
    return request


def _content_length(headers, resume_from: int) -> Optional[int]:
    value = headers.get("Content-Length")
    if value is None:
        return None
    try:
        return int(value.strip()) + resume_from
    except ValueError:
        return None


def _stream_body(response, callback: Callback) -> None:
    while True:
        chunk = response.read(_CHUNK_SIZE)
        if not chunk:
            return
        callback(DownloadDataReceived(chunk))


def curl_download(url: str, resume_from: int, callback: Callback) -> None:
    """Download ``url``, following redirects; any 2xx (or file) result succeeds."""
    if urlsplit(url).scheme == "file":
        _download_file_url(url, resume_from, callback)
        return

    request = _build_request(url, resume_from)
    try:
        response = urllib.request.urlopen(request, timeout=_TIMEOUT_SECONDS)
    except urllib.error.HTTPError as exc:
        # The body of an error response is still delivered before failing.
        with exc:
            length = _content_length(exc.headers, resume_from)
            if length is not None:
                callback(DownloadContentLengthReceived(length))
            _stream_body(exc, callback)
        raise HttpStatusError(exc.code) from None
    except (urllib.error.URLError, OSError) as exc:
        raise DownloadError("error during download") from exc

    with response:
        length = _content_length(response.headers, resume_from)
        if length is not None:
            callback(DownloadContentLengthReceived(length))
        try:
            _stream_body(response, callback)
        except OSError as exc:
            raise DownloadError("error during download") from exc
        code = response.status
    if not (code == 0 or 200 <= code <= 299):
        raise HttpStatusError(code)


def reqwest_download(url: str, resume_from: int, callback: Callback) -> None:
    """Download ``url``; file URLs are read directly from disk."""
    if urlsplit(url).scheme == "file":
        _download_file_url(url, resume_from, callback)
        return

    request = _build_request(url, resume_from)
    try:
        response = urllib.request.urlopen(request, timeout=_TIMEOUT_SECONDS)
    except urllib.error.HTTPError as exc:
        exc.close()
        raise HttpStatusError(exc.code) from None
    except (urllib.error.URLError, OSError) as exc:
        raise DownloadError("failed to make network request") from exc

    with response:
        if not 200 <= response.status <= 299:
            raise HttpStatusError(response.status)
        value = response.headers.get("Content-Length")
        if value is not None:
            try:
                length = int(value) + resume_from
            except ValueError as exc:
                raise DownloadError(f"invalid Content-Length header: '{value}'") from exc
            callback(DownloadContentLengthReceived(length))
        try:
            _stream_body(response, callback)
        except OSError as exc:
            raise DownloadError("error reading from socket") from exc


_BACKENDS = {
    Backend.CURL: curl_download,
    Backend.REQWEST: reqwest_download,
}


def download_with_backend(
    backend: Backend, url: str, resume_from: int, callback: Callback
) -> None:
    """Download ``url`` with ``backend``, feeding events to ``callback``."""
    _BACKENDS[backend](url, resume_from, callback)


def _open_for_writing(path: Path, append: bool, message: str) -> BinaryIO:
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT, 0o666)
    except OSError as exc:
        raise DownloadError(message) from exc
    handle = os.fdopen(fd, "wb")
    if append:
        handle.seek(0, os.SEEK_END)
    return handle


def _replay_partial(path: Path, callback: Optional[Callback]) -> int:
    try:
        partial = path.open("rb")
    except OSError:
        return 0
    with partial:
        if callback is None:
            return os.fstat(partial.fileno()).st_size
        callback(ResumingPartialDownload())
        downloaded = 0
        for chunk in iter(lambda: partial.read(_PARTIAL_READ_SIZE), b""):
            downloaded += len(chunk)
            callback(DownloadDataReceived(chunk))
        return downloaded


def _sync(handle: BinaryIO) -> None:
    handle.flush()
    sync = getattr(os, "fdatasync", os.fsync)
    sync(handle.fileno())


def _download_to_path(
    backend: Backend,
    url: str,
    path: Path,
    resume_from_partial: bool,
    callback: Optional[Callback],
) -> None:
    if resume_from_partial:
        resume_from = _replay_partial(path, callback)
        handle = _open_for_writing(path, True, "error opening file for download")
    else:
        resume_from = 0
        handle = _open_for_writing(path, False, "error creating file for download")

    with handle:

        def on_event(event: Event) -> None:
            if isinstance(event, DownloadDataReceived):
                try:
                    handle.write(event.data)
                except OSError as exc:
                    raise DownloadError("unable to write download to disk") from exc
            if callback is not None:
                callback(event)

        download_with_backend(backend, url, resume_from, on_event)

        try:
            _sync(handle)
        except OSError as exc:
            raise DownloadError("unable to sync download to disk") from exc


def download_to_path_with_backend(
    backend: Backend,
    url: str,
    path: Union[str, os.PathLike],
    resume_from_partial: bool,
    callback: Optional[Callback] = None,
) -> None:
    """Download ``url`` to ``path``, optionally resuming a partial file.

    On any failure the file at ``path`` is removed before the error propagates.
    """
    path = Path(path)
    try:
        _download_to_path(backend, url, path, resume_from_partial, callback)
    except Exception:
        try:
            path.unlink()
        except OSError as cleanup_error:
            raise DownloadError("cleaning up cached downloads") from cleanup_error
        raise