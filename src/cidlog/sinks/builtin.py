"""
Built-in sinks.

- DiscardSink: Drops everything; the destination of the info level and of
  every level after ``close()``
- ConsoleSink: Standard output, the default destination of trace/warn/error
- StreamSink: Adapts an already open text or binary stream (releasable)
- BufferSink: Keeps lines in memory (releasable)
"""

import io
import sys
from typing import IO, Any, List, Optional

from cidlog.sinks.base import BaseSink

ENCODING = "utf-8"


def _write_to_stream(stream: IO[Any], data: bytes) -> None:
    if isinstance(stream, io.TextIOBase):
        stream.write(data.decode(ENCODING, errors="replace"))
    else:
        stream.write(data)
    stream.flush()


class DiscardSink(BaseSink):
    """Sink on which all writes succeed without doing anything."""

    def write(self, data: bytes) -> int:
        return len(data)

    def _write(self, data: bytes) -> None:
        pass


class ConsoleSink(BaseSink):
    """
    Standard output sink.

    ``sys.stdout`` is looked up on every write so that redirection done
    after import (test capture, daemonizing) is honored. The console is never
    released, hence no ``close``.
    """

    def __init__(self, stream: Optional[IO[Any]] = None) -> None:
        super().__init__()
        self._stream = stream

    @property
    def stream(self) -> IO[Any]:
        return self._stream if self._stream is not None else sys.stdout

    def _write(self, data: bytes) -> None:
        _write_to_stream(self.stream, data)

    def write_escape(self, sequence: str) -> None:
        """Write a terminal control sequence outside the line lock."""
        _write_to_stream(self.stream, sequence.encode(ENCODING))


class StreamSink(BaseSink):
    """
    Sink over an open stream, e.g. ``open("app.log", "ab")``.

    Text streams receive decoded UTF-8. ``close()`` closes the stream, so
    after switching away from a StreamSink the caller must release it (the
    controller only releases the sink it was last switched to).
    """

    def __init__(self, stream: IO[Any]) -> None:
        super().__init__()
        self._stream = stream

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def _write(self, data: bytes) -> None:
        _write_to_stream(self._stream, data)

    def close(self) -> None:
        with self._lock:
            self._stream.close()

    def __repr__(self) -> str:
        return f"StreamSink({getattr(self._stream, 'name', self._stream)!r})"


class BufferSink(BaseSink):
    """
    In-memory sink.

    Unlike ``io.BytesIO`` the contents remain readable after ``close()``;
    only further writes are rejected.
    """

    def __init__(self) -> None:
        super().__init__()
        self._buffer = bytearray()
        self.closed = False

    def _write(self, data: bytes) -> None:
        if self.closed:
            raise ValueError("write to closed BufferSink")
        self._buffer.extend(data)

    def close(self) -> None:
        with self._lock:
            self.closed = True

    def getvalue(self) -> bytes:
        with self._lock:
            return bytes(self._buffer)

    def lines(self) -> List[str]:
        """Decoded lines without their terminators."""
        return self.getvalue().decode(ENCODING).splitlines()
