"""Download progress tracking and display."""

from __future__ import annotations

import enum
import math
import sys
import time
from collections import deque
from typing import Callable, Optional, TextIO

DOWNLOAD_TRACK_COUNT = 5
_U32_MAX = 2**32 - 1
_BINARY_PREFIXES = ("", "Ki", "Mi", "Gi", "Ti", "Pi")


class Unit(enum.Enum):
    """What a download amount counts."""

    B = "B"
    IO = "IO-ops"


def format_size(size: int, unit: Unit = Unit.B, rate: bool = False) -> str:
    """Human readable amount, as a rate per second when ``rate`` is true."""
    suffix = "/s" if rate else ""
    if unit is Unit.IO:
        return f"{size} {unit.value}{suffix}"
    value = float(size)
    for prefix in _BINARY_PREFIXES[:-1]:
        if value < 1024:
            break
        value /= 1024
    else:
        prefix = _BINARY_PREFIXES[-1]
    if not prefix:
        return f"{size} B{suffix}"
    return f"{value:.1f} {prefix}B{suffix}"


def format_duration(seconds: float) -> str:
    """Human readable representation of a duration in seconds."""
    if math.isinf(seconds):
        return "Unknown"
    whole = 0 if math.isnan(seconds) else min(max(int(seconds), 0), _U32_MAX)
    d, h, m, s = DownloadTracker.from_seconds(whole)
    if d > 0:
        return f"{d:3d}d {h:2d}h {m:2d}m {s:2d}s"
    if h > 0:
        return f"{h:2d}h {m:2d}m {s:2d}s"
    if m > 0:
        return f"{m:2d}m {s:2d}s"
    return f"{s:2d}s"


def _divide(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


class DownloadTracker:
    """Tracks download progress and shows it on a terminal line."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._stream = stream
        self._clock = clock
        self.content_len: Optional[int] = None
        self.total_downloaded = 0
        self.downloaded_this_sec = 0
        self.downloaded_last_few_secs: deque[int] = deque(maxlen=DOWNLOAD_TRACK_COUNT)
        self.start_sec = clock()
        self.last_sec: Optional[float] = None
        self.displayed_charcount: Optional[int] = None
        self.units: list[Unit] = [Unit.B]
        self.display_progress = True

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def with_display_progress(self, display_progress: bool) -> "DownloadTracker":
        self.display_progress = display_progress
        return self

    def content_length_received(self, content_len: int) -> None:
        self.content_len = content_len

    def data_received(self, length: int) -> None:
        """Record ``length`` more bytes; refresh the display once a second."""
        self.total_downloaded += length
        self.downloaded_this_sec += length

        now = self._clock()
        if self.last_sec is None:
            self.last_sec = now
            return
        if now - self.last_sec >= 1.0:
            if self.display_progress:
                self._display()
            self.last_sec = now
            self.downloaded_last_few_secs.appendleft(self.downloaded_this_sec)
            self.downloaded_this_sec = 0

    def download_finished(self) -> None:
        if self.displayed_charcount is not None:
            self._display()
            self.stream.write("\n")
            self.stream.flush()
        self._prepare_for_new_download()

    @staticmethod
    def from_seconds(sec: int) -> tuple[int, int, int, int]:
        """Split seconds into days, hours, minutes and seconds."""
        days = sec // (24 * 3600)
        hours = sec % (24 * 3600) // 3600
        minutes = sec % 3600 // 60
        return days, hours, minutes, sec % 60

    def push_unit(self, unit: Unit) -> None:
        self.units.append(unit)

    def pop_unit(self) -> None:
        if self.units:
            self.units.pop()

    def _prepare_for_new_download(self) -> None:
        self.content_len = None
        self.total_downloaded = 0
        self.downloaded_this_sec = 0
        self.downloaded_last_few_secs.clear()
        self.start_sec = self._clock()
        self.last_sec = None
        self.displayed_charcount = None

    def _display(self) -> None:
        unit = self.units[-1]
        total_h = format_size(self.total_downloaded, unit, False)
        recent = self.downloaded_last_few_secs
        speed = sum(recent) // len(recent) if recent else 0
        speed_h = format_size(speed, unit, True)
        elapsed_h = format_duration(self._clock() - self.start_sec)

        out = self.stream
        out.write("\r")
        if self.displayed_charcount is not None:
            out.write(" " * self.displayed_charcount)
            out.flush()
            out.write("\r")

        if self.content_len is not None:
            content_len_h = format_size(self.content_len, unit, False)
            percent = _divide(self.total_downloaded, self.content_len) * 100.0
            remaining = self.content_len - self.total_downloaded
            eta_h = format_duration(_divide(remaining, speed))
            output = (
                f"{total_h} / {content_len_h} ({percent:3.0f} %) "
                f"{speed_h} in {elapsed_h} ETA: {eta_h}"
            )
        else:
            output = f"Total: {total_h} Speed: {speed_h} Elapsed: {elapsed_h}"

        out.write(output)
        out.flush()
        self.displayed_charcount = len(output)