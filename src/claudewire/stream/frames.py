"""SSE frame assembly.

Turns decoded lines into frames per the SSE line protocol: ``field: value``
lines accumulate until a blank line completes the frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

log = structlog.get_logger()


@dataclass
class SSEFrame:
    """One assembled Server-Sent Event, before its payload is decoded."""

    event: str = ""
    data_lines: list[str] = field(default_factory=list)
    id: str = ""
    retry: int | None = None

    @property
    def data(self) -> str:
        return "\n".join(self.data_lines)

    @property
    def is_empty(self) -> bool:
        return not self.event and not self.data_lines and not self.id and self.retry is None

    def to_bytes(self) -> bytes:
        """Serialize back to SSE wire format."""
        lines: list[str] = []
        if self.event:
            lines.append(f"event: {self.event}")
        for data_line in self.data_lines:
            lines.append(f"data: {data_line}")
        if self.id:
            lines.append(f"id: {self.id}")
        if self.retry is not None:
            lines.append(f"retry: {self.retry}")
        lines.append("")  # blank line terminates event
        return ("\n".join(lines) + "\n").encode()


class SSEFrameAssembler:
    """Incremental assembler fed one line at a time."""

    def __init__(self, stream_id: str = "") -> None:
        self.stream_id = stream_id
        self._current = SSEFrame()

    def feed(self, line: str) -> SSEFrame | None:
        """Consume a line, returning a frame when a blank line completes one."""
        line = line.rstrip("\r")

        if not line:
            # Blank line = event dispatch
            frame, self._current = self._current, SSEFrame()
            if not frame.data_lines:
                return None
            return frame

        if line.startswith(":"):
            # Comment, ignore
            return None

        if ":" in line:
            field_name, _, value = line.partition(":")
            if value.startswith(" "):
                value = value[1:]
        else:
            field_name = line
            value = ""

        if field_name == "data":
            self._current.data_lines.append(value)
        elif field_name == "event":
            self._current.event = value
        elif field_name == "id":
            self._current.id = value
        elif field_name == "retry":
            try:
                self._current.retry = int(value)
            except ValueError:
                pass
        return None

    def finish(self) -> None:
        """Drop an in-progress frame that was never terminated by a blank line."""
        if not self._current.is_empty:
            log.debug(
                "sse_partial_frame_discarded",
                stream_id=self.stream_id,
                sse_event=self._current.event,
                data_lines=len(self._current.data_lines),
            )
        self._current = SSEFrame()
