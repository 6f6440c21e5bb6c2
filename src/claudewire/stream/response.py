"""Streaming response handle returned by ``Client.stream()``."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import httpx
import structlog

from claudewire.responses import MessageResponse
from claudewire.stream.accumulator import MessageAccumulator
from claudewire.stream.decoder import DEFAULT_CHUNK_SIZE, IteratorByteSource, StreamDecoder
from claudewire.stream.state import StreamState

log = structlog.get_logger()


class StreamResponse:
    """Iterates decoded events from an open streaming HTTP response.

    The response is owned here: leaving the ``with`` block or calling
    ``close()`` releases the connection, whether or not the stream was
    fully consumed.
    """

    def __init__(
        self,
        response: httpx.Response,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        stream_id: str = "",
    ) -> None:
        self.response = response
        self.stream_id = stream_id or response.headers.get("request-id", "")
        self.decoder = StreamDecoder(
            IteratorByteSource(response.iter_bytes(chunk_size)),
            chunk_size=chunk_size,
            stream_id=self.stream_id,
        )
        self.accumulator = MessageAccumulator(stream_id=self.stream_id)

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def state(self) -> StreamState:
        return self.decoder.state

    def __iter__(self) -> Iterator[dict[str, Any]]:
        for event in self.decoder:
            self.accumulator.process(event)
            yield event

    def __enter__(self) -> StreamResponse:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if not self.response.is_closed:
            log.debug("stream_closed", stream_id=self.stream_id, state=self.state.value)
            self.response.close()

    def text_stream(self) -> Iterator[str]:
        """Yield the text of each ``text_delta`` as it arrives."""
        for event in self:
            if event.get("type") != "content_block_delta":
                continue
            delta = event.get("delta", {})
            if delta.get("type") == "text_delta":
                yield delta.get("text", "")

    def get_final_message(self) -> MessageResponse:
        """Drain the remaining events and return the accumulated message."""
        for _ in self:
            pass
        return self.accumulator.message()
