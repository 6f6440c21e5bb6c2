"""Byte accumulator that splits a chunked stream into LF-terminated lines."""

from __future__ import annotations


class LineBuffer:
    """Collects raw bytes and hands back complete lines, terminator stripped.

    Lines are split on bytes rather than text so a multi-byte UTF-8
    character cut across two reads is reassembled before decoding.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._scan_from = 0
        self._flushed = False

    def __len__(self) -> int:
        return len(self._buffer)

    def append(self, data: bytes) -> None:
        """Feed newly read bytes."""
        if self._flushed:
            raise RuntimeError("LineBuffer already flushed")
        self._buffer += data

    def next_line(self) -> bytes | None:
        """Return the next complete line, or None when more input is needed."""
        idx = self._buffer.find(b"\n", self._scan_from)
        if idx < 0:
            # Everything buffered so far is one partial line
            self._scan_from = len(self._buffer)
            return None
        line = bytes(self._buffer[:idx])
        del self._buffer[: idx + 1]
        self._scan_from = 0
        return line

    def flush(self) -> bytes | None:
        """Return the unterminated residual line at end of stream, once."""
        if self._flushed:
            return None
        self._flushed = True
        if not self._buffer:
            return None
        residual = bytes(self._buffer)
        self._buffer.clear()
        self._scan_from = 0
        return residual
