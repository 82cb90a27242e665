import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from toolchainer.download import (
    Backend,
    DownloadContentLengthReceived,
    DownloadDataReceived,
    ResumingPartialDownload,
    download_to_path_with_backend,
    download_with_backend,
)
from toolchainer.errors import DownloadError, DownloadFileNotFound, HttpStatusError

SERVED = b"xxx45"


def write_file(path, contents):
    path.write_text(contents)


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        if self.path == "/missing":
            body = b"not here"
            self.send_response(404)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
            return
        range_header = self.headers.get("Range")
        if range_header:
            assert range_header.startswith("bytes=")
            spec = range_header[len("bytes="):]
            assert spec.endswith("-")
            start = int(spec[:-1])
            body = SERVED[start:]
            self.send_response(206)
            self.send_header(
                "Content-Range", f"bytes {start}-{len(SERVED)}/{len(SERVED)}"
            )
        else:
            body = SERVED
            self.send_response(200)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server_addr():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        yield f"{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()


BACKENDS = [Backend.CURL, Backend.REQWEST]


@pytest.mark.parametrize("backend", BACKENDS)
def test_partially_downloaded_file_gets_resumed_from_byte_offset(tmp_path, backend):
    from_path = tmp_path / "download-source"
    write_file(from_path, "xxx45")
    target_path = tmp_path / "downloaded"
    write_file(target_path, "123")

    download_to_path_with_backend(backend, from_path.as_uri(), target_path, True, None)

    assert target_path.read_text() == "12345"


@pytest.mark.parametrize("backend", BACKENDS)
def test_callback_gets_all_data_as_if_the_download_happened_all_at_once(
    tmp_path, server_addr, backend
):
    target_path = tmp_path / "downloaded"
    write_file(target_path, "123")

    partial_seen = []
    lengths = []
    received = bytearray()

    def callback(event):
        if isinstance(event, ResumingPartialDownload):
            assert not partial_seen
            partial_seen.append(True)
        elif isinstance(event, DownloadContentLengthReceived):
            assert not lengths
            lengths.append(event.length)
        elif isinstance(event, DownloadDataReceived):
            received.extend(event.data)

    download_to_path_with_backend(
        backend, f"http://{server_addr}", target_path, True, callback
    )

    assert partial_seen == [True]
    assert lengths == [5]
    assert bytes(received) == b"12345"
    assert target_path.read_text() == "12345"


@pytest.mark.parametrize("backend", BACKENDS)
def test_full_download_over_http(tmp_path, server_addr, backend):
    target_path = tmp_path / "downloaded"
    download_to_path_with_backend(
        backend, f"http://{server_addr}/", target_path, False, None
    )
    assert target_path.read_bytes() == SERVED


@pytest.mark.parametrize("backend", BACKENDS)
def test_missing_file_url_raises_not_found_and_removes_target(tmp_path, backend):
    target_path = tmp_path / "downloaded"
    missing = (tmp_path / "nope").as_uri()
    with pytest.raises(DownloadFileNotFound):
        download_to_path_with_backend(backend, missing, target_path, False, None)
    assert not target_path.exists()


@pytest.mark.parametrize("backend", BACKENDS)
def test_http_error_status_and_cleanup(tmp_path, server_addr, backend):
    target_path = tmp_path / "downloaded"
    with pytest.raises(HttpStatusError) as info:
        download_to_path_with_backend(
            backend, f"http://{server_addr}/missing", target_path, False, None
        )
    assert info.value.code == 404
    assert not target_path.exists()


@pytest.mark.parametrize("backend", BACKENDS)
def test_callback_error_propagates_and_removes_file(tmp_path, backend):
    from_path = tmp_path / "download-source"
    write_file(from_path, "abc")
    target_path = tmp_path / "downloaded"

    class Stop(Exception):
        pass

    def callback(event):
        if isinstance(event, DownloadDataReceived):
            raise Stop()

    with pytest.raises(Stop):
        download_to_path_with_backend(
            backend, from_path.as_uri(), target_path, False, callback
        )
    assert not target_path.exists()


@pytest.mark.parametrize("backend", BACKENDS)
def test_download_with_backend_honours_resume_offset(tmp_path, backend):
    from_path = tmp_path / "download-source"
    write_file(from_path, "xxx45")
    chunks = []
    download_with_backend(
        backend, from_path.as_uri(), 3, lambda e: chunks.append(e.data)
    )
    assert b"".join(chunks) == b"45"


def test_resume_without_partial_file_starts_from_zero(tmp_path):
    from_path = tmp_path / "download-source"
    write_file(from_path, "hello")
    target_path = tmp_path / "downloaded"
    events = []
    download_to_path_with_backend(
        Backend.REQWEST, from_path.as_uri(), target_path, True, events.append
    )
    assert target_path.read_text() == "hello"
    assert not any(isinstance(e, ResumingPartialDownload) for e in events)


def test_bogus_file_url_host(tmp_path):
    with pytest.raises(DownloadError, match="bogus file url"):
        download_with_backend(
            Backend.REQWEST, "file://otherhost/some/file", 0, lambda e: None
        )


def test_event_values_compare_by_content():
    assert DownloadDataReceived(b"ab") == DownloadDataReceived(b"ab")
    assert DownloadContentLengthReceived(5).length == 5