"""
Unit tests for DownloadResult and its cleanup stream.
"""

import io
from unittest.mock import Mock

from codedrop.application.download_result import CleanupStream, DownloadResult


def make_result(on_close=None):
    return DownloadResult(
        stream=io.BytesIO(b"payload"),
        filename="a.bin",
        mime_type="application/octet-stream",
        size_bytes=7,
        burned=on_close is not None,
        on_close=on_close,
    )


class TestOpenStream:
    def test_plain_stream_without_cleanup(self):
        result = make_result()
        assert result.open_stream() is result.stream

    def test_cleanup_runs_after_stream_closes(self):
        on_close = Mock()
        stream = make_result(on_close).open_stream()

        assert stream.read() == b"payload"
        on_close.assert_not_called()

        stream.close()

        on_close.assert_called_once_with()
        assert stream.closed

    def test_cleanup_runs_once(self):
        on_close = Mock()
        stream = make_result(on_close).open_stream()

        stream.close()
        stream.close()

        on_close.assert_called_once_with()

    def test_cleanup_runs_even_if_close_fails(self):
        inner = Mock()
        inner.close.side_effect = OSError("bad fd")
        on_close = Mock()
        stream = CleanupStream(inner, on_close)

        try:
            stream.close()
        except OSError:
            pass

        on_close.assert_called_once_with()

    def test_other_attributes_are_delegated(self):
        stream = make_result(Mock()).open_stream()
        stream.seek(3)
        assert stream.tell() == 3
        assert stream.read() == b"load"


class TestClose:
    def test_close_runs_cleanup(self):
        on_close = Mock()
        result = make_result(on_close)

        result.close()

        assert result.stream.closed
        on_close.assert_called_once_with()
