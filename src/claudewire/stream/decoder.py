"""Pull-based decoder turning a live byte stream into Messages API events.

Each ``poll_next()`` call reads from the byte source only when no complete
line is buffered, so the source read is the single blocking point. The
decoder borrows the source and never closes it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Protocol

import httpx
import structlog

from claudewire.errors import APIStreamError, ConnectionFailure, ProtocolDecodeError
from claudewire.stream.frames import SSEFrameAssembler
from claudewire.stream.line_buffer import LineBuffer
from claudewire.stream.payload import STREAM_DONE, decode_payload
from claudewire.stream.state import StreamState, transition

log = structlog.get_logger()

DEFAULT_CHUNK_SIZE = 8192


class ByteSource(Protocol):
    def read(self, size: int, /) -> bytes:
        """Return up to ``size`` bytes; an empty result means end of stream."""
        ...


class IteratorByteSource:
    """Adapt an iterable of byte chunks (e.g. ``response.iter_bytes()``) to ByteSource."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = iter(chunks)
        self._pending = b""
        self._exhausted = False

    def read(self, size: int, /) -> bytes:
        while not self._pending and not self._exhausted:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                self._exhausted = True
        data, self._pending = self._pending[:size], self._pending[size:]
        return data


class StreamDecoder:
    """Decodes one event stream; finite, forward-only, not restartable."""

    def __init__(
        self,
        source: ByteSource,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        stream_id: str = "",
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.source = source
        self.chunk_size = chunk_size
        self.stream_id = stream_id
        self.events_yielded = 0
        self._state = StreamState.ACTIVE
        self._lines = LineBuffer()
        self._assembler = SSEFrameAssembler(stream_id=stream_id)
        self._exhausted = False

    @property
    def state(self) -> StreamState:
        return self._state

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return self

    def __next__(self) -> dict[str, Any]:
        event = self.poll_next()
        if event is None:
            raise StopIteration
        return event

    def poll_next(self) -> dict[str, Any] | None:
        """Return the next event, or None once the stream has ended.

        Raises ConnectionFailure, ProtocolDecodeError or APIStreamError at the
        poll that detects the failure; later polls return None.
        """
        if self._state is not StreamState.ACTIVE:
            return None

        while True:
            line = self._lines.next_line()
            if line is None:
                if not self._exhausted:
                    self._fill()
                    continue
                line = self._lines.flush()
                if line is None:
                    self._assembler.finish()
                    self._finish("source_exhausted")
                    return None

            frame = self._assembler.feed(line.decode("utf-8", errors="replace"))
            if frame is None:
                continue

            raw = frame.data
            try:
                payload = decode_payload(raw)
            except ProtocolDecodeError as exc:
                self._fail("malformed_payload", exc)
                raise

            if payload is STREAM_DONE:
                self._finish("done_marker")
                return None

            if payload.get("type") == "error":
                exc = _api_error(payload, raw)
                self._fail("api_error", exc)
                raise exc

            self.events_yielded += 1
            return payload

    def _fill(self) -> None:
        try:
            chunk = self.source.read(self.chunk_size)
        except (httpx.TransportError, httpx.StreamError, OSError) as exc:
            failure = ConnectionFailure(f"Connection error: {exc}")
            self._fail("read_failed", failure)
            raise failure from exc
        if chunk:
            self._lines.append(chunk)
        else:
            self._exhausted = True

    def _finish(self, trigger: str) -> None:
        self._state = transition(self._state, StreamState.DONE, self.stream_id, trigger)
        log.debug(
            "stream_complete",
            stream_id=self.stream_id,
            trigger=trigger,
            events=self.events_yielded,
        )

    def _fail(self, trigger: str, exc: Exception) -> None:
        self._state = transition(self._state, StreamState.ERRORED, self.stream_id, trigger)
        log.error(
            "stream_error",
            stream_id=self.stream_id,
            trigger=trigger,
            events=self.events_yielded,
            error=str(exc),
        )


def _api_error(payload: dict[str, Any], raw: str) -> APIStreamError:
    error = payload.get("error")
    if not isinstance(error, dict):
        return APIStreamError(f"Unknown streaming error: {raw[:200]}", raw=raw)
    message = error.get("message")
    error_type = error.get("type")
    if not isinstance(message, str) or not message:
        message = f"Unknown streaming error: {raw[:200]}"
    return APIStreamError(
        message,
        error_type=error_type if isinstance(error_type, str) else None,
        raw=raw,
    )
