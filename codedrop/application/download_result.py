"""
Download Result Value Object

Represents a download that has been authorized and counted.
"""

from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional


class CleanupStream:
    """
    Binary stream that runs a callback once, after the stream is closed.

    WSGI servers close the file wrapper of a file response when the
    transfer ends or the client goes away, which makes the stream's close
    the one hook that always fires.
    """

    def __init__(self, stream: BinaryIO, on_close: Callable[[], None]):
        self._stream = stream
        self._on_close = on_close
        self._finished = False

    def read(self, size: int = -1) -> bytes:
        return self._stream.read(size)

    def close(self) -> None:
        if self._finished:
            return
        self._finished = True
        try:
            self._stream.close()
        finally:
            self._on_close()

    def __getattr__(self, name):
        return getattr(self._stream, name)


@dataclass(frozen=True)
class DownloadResult:
    """
    Outcome of a successful download request.

    Attributes:
        stream: Open binary stream over the blob; the consumer closes it
        filename: Original filename, suggested as the save name
        mime_type: Original content type
        size_bytes: Blob size
        burned: True if this download exhausted the quota
        on_close: Cleanup to run once the stream has been closed
    """
    stream: BinaryIO
    filename: str
    mime_type: str
    size_bytes: int
    burned: bool = False
    on_close: Optional[Callable[[], None]] = None

    def open_stream(self) -> BinaryIO:
        """Stream for a response body; closing it runs any pending cleanup."""
        if self.on_close is None:
            return self.stream
        return CleanupStream(self.stream, self.on_close)

    def close(self) -> None:
        """Close the stream and run any pending cleanup."""
        try:
            self.stream.close()
        finally:
            if self.on_close is not None:
                self.on_close()
