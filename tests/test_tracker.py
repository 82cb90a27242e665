import io
import math

import pytest

from toolchainer.tracker import (
    DOWNLOAD_TRACK_COUNT,
    DownloadTracker,
    Unit,
    format_duration,
    format_size,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _tracker():
    clock = FakeClock()
    buffer = io.StringIO()
    return DownloadTracker(stream=buffer, clock=clock), clock, buffer


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (2, (0, 0, 0, 2)),
        (60, (0, 0, 1, 0)),
        (3_600, (0, 1, 0, 0)),
        (3_600 * 24, (1, 0, 0, 0)),
        (52_292, (0, 14, 31, 32)),
        (222_292, (2, 13, 44, 52)),
    ],
)
def test_from_seconds(seconds, expected):
    assert DownloadTracker.from_seconds(seconds) == expected


@pytest.mark.parametrize("value", [math.inf, -math.inf])
def test_format_duration_infinite_is_unknown(value):
    assert format_duration(value) == "Unknown"


def test_format_duration_hours():
    assert format_duration(52_292) == "14h 31m 32s"


def test_format_duration_seconds_only_for_small_values():
    for sec in range(60):
        assert format_duration(sec).strip() == f"{sec}s"


def test_format_duration_nan_and_negative_same_as_zero():
    assert format_duration(math.nan) == format_duration(0)
    assert format_duration(-5.0) == format_duration(0)


def test_format_size_rate_suffix():
    assert format_size(100, Unit.B, True).endswith("/s")
    assert not format_size(100, Unit.B, False).endswith("/s")


def test_format_size_small_bytes_exact():
    assert format_size(5, Unit.B, False).startswith("5 ")


def test_format_size_scales_up():
    assert "MiB" in format_size(3 * 1024 * 1024, Unit.B, False)


def test_format_size_io_unit():
    assert Unit.IO.value in format_size(7, Unit.IO, False)


def test_no_display_within_first_second():
    tracker, clock, buffer = _tracker()
    tracker.data_received(10)
    clock.now = 0.5
    tracker.data_received(10)
    assert buffer.getvalue() == ""
    assert tracker.total_downloaded == 20


def test_display_with_content_length():
    tracker, clock, buffer = _tracker()
    tracker.content_length_received(100)
    tracker.data_received(10)
    clock.now = 1.0
    tracker.data_received(10)
    out = buffer.getvalue()
    assert out.startswith("\r")
    assert "ETA: Unknown" in out
    assert "( 20 %)" in out
    assert tracker.displayed_charcount == len(out) - 1
    assert list(tracker.downloaded_last_few_secs) == [20]


def test_display_without_content_length():
    tracker, clock, buffer = _tracker()
    tracker.data_received(10)
    clock.now = 1.0
    tracker.data_received(10)
    assert buffer.getvalue().startswith("\rTotal: ")
    assert "Speed: " in buffer.getvalue()


def test_redisplay_clears_previous_output():
    tracker, clock, buffer = _tracker()
    tracker.data_received(10)
    clock.now = 1.0
    tracker.data_received(10)
    first_len = tracker.displayed_charcount
    clock.now = 2.0
    tracker.data_received(30)
    out = buffer.getvalue()
    assert out.count("\r") == 3
    assert "\r" + " " * first_len + "\r" in out


def test_download_finished_after_display_writes_newline_and_resets():
    tracker, clock, buffer = _tracker()
    tracker.content_length_received(50)
    tracker.data_received(10)
    clock.now = 1.0
    tracker.data_received(10)
    tracker.download_finished()
    assert buffer.getvalue().endswith("\n")
    assert tracker.content_len is None
    assert tracker.total_downloaded == 0
    assert tracker.displayed_charcount is None
    assert len(tracker.downloaded_last_few_secs) == 0


def test_download_finished_without_display_is_silent():
    tracker, _, buffer = _tracker()
    tracker.data_received(10)
    tracker.download_finished()
    assert buffer.getvalue() == ""
    assert tracker.total_downloaded == 0


def test_display_progress_disabled():
    tracker, clock, buffer = _tracker()
    assert tracker.with_display_progress(False) is tracker
    tracker.data_received(10)
    clock.now = 1.0
    tracker.data_received(10)
    assert buffer.getvalue() == ""
    assert list(tracker.downloaded_last_few_secs) == [20]


def test_history_is_capped():
    tracker, clock, _ = _tracker()
    tracker.with_display_progress(False)
    tracker.data_received(1)
    for step in range(1, DOWNLOAD_TRACK_COUNT + 4):
        clock.now = float(step)
        tracker.data_received(step)
    history = list(tracker.downloaded_last_few_secs)
    assert len(history) == DOWNLOAD_TRACK_COUNT
    assert history[0] == DOWNLOAD_TRACK_COUNT + 3


def test_push_and_pop_unit():
    tracker, clock, buffer = _tracker()
    tracker.push_unit(Unit.IO)
    assert tracker.units[-1] is Unit.IO
    tracker.data_received(3)
    clock.now = 1.0
    tracker.data_received(3)
    assert Unit.IO.value in buffer.getvalue()
    tracker.pop_unit()
    assert tracker.units == [Unit.B]