"""Fold decoded stream events into the final message.

Rebuilds the same document a non-streaming request would have returned:
message metadata from ``message_start``, content blocks from the
``content_block_*`` events and stop reason plus usage from ``message_delta``.
"""

from __future__ import annotations

import copy
import json
from typing import Any

import structlog

from claudewire.responses import MessageResponse

log = structlog.get_logger()


class MessageAccumulator:
    """Accumulates events from one stream into a message snapshot."""

    def __init__(self, stream_id: str = "") -> None:
        self.stream_id = stream_id
        self.usage: dict[str, Any] = {}
        self.stop_reason: str | None = None
        self.stop_sequence: str | None = None
        self.content_blocks: list[dict[str, Any]] = []
        self._message_data: dict[str, Any] | None = None
        self._partial_json: dict[int, str] = {}

    @property
    def started(self) -> bool:
        return self._message_data is not None

    def process(self, event: dict[str, Any]) -> None:
        """Apply one decoded event to the snapshot."""
        event_type = event.get("type", "")

        if event_type == "message_start":
            msg = copy.deepcopy(event.get("message", {}))
            self._message_data = msg
            self.usage = dict(msg.get("usage") or {})
            self.content_blocks = list(msg.get("content") or [])

        elif event_type == "content_block_start":
            block = copy.deepcopy(event.get("content_block", {}))
            index = event.get("index", len(self.content_blocks))
            while len(self.content_blocks) <= index:
                self.content_blocks.append({})
            self.content_blocks[index] = block

        elif event_type == "content_block_delta":
            self._apply_delta(event.get("index", 0), event.get("delta", {}))

        elif event_type == "content_block_stop":
            index = event.get("index", 0)
            if index in self._partial_json:
                self._finish_tool_input(index)

        elif event_type == "message_delta":
            delta = event.get("delta", {})
            if "stop_reason" in delta:
                self.stop_reason = delta["stop_reason"]
            if "stop_sequence" in delta:
                self.stop_sequence = delta["stop_sequence"]
            usage = event.get("usage", {})
            if usage:
                self.usage.update(usage)

    def _apply_delta(self, index: int, delta: dict[str, Any]) -> None:
        if index >= len(self.content_blocks):
            log.warning("delta_for_unknown_block", stream_id=self.stream_id, index=index)
            return
        block = self.content_blocks[index]
        delta_type = delta.get("type", "")

        if delta_type == "text_delta":
            block["text"] = block.get("text", "") + delta.get("text", "")
        elif delta_type == "thinking_delta":
            block["thinking"] = block.get("thinking", "") + delta.get("thinking", "")
        elif delta_type == "signature_delta":
            block["signature"] = delta.get("signature", "")
        elif delta_type == "input_json_delta":
            self._partial_json[index] = self._partial_json.get(index, "") + delta.get("partial_json", "")
        elif delta_type == "citations_delta":
            block.setdefault("citations", []).append(delta.get("citation"))

    def _finish_tool_input(self, index: int) -> None:
        partial = self._partial_json.pop(index)
        block = self.content_blocks[index]
        if not partial:
            block["input"] = {}
            return
        try:
            block["input"] = json.loads(partial)
        except (json.JSONDecodeError, ValueError):
            log.warning(
                "tool_input_json_invalid",
                stream_id=self.stream_id,
                index=index,
                partial_json=partial[:200],
            )
            block["input"] = {}

    def snapshot(self) -> dict[str, Any]:
        """Return the message document accumulated so far."""
        if self._message_data is None:
            raise ValueError("No message_start event has been received")
        message = dict(self._message_data)
        message["content"] = self.content_blocks
        message["usage"] = self.usage
        if self.stop_reason is not None:
            message["stop_reason"] = self.stop_reason
        if self.stop_sequence is not None:
            message["stop_sequence"] = self.stop_sequence
        return message

    def message(self) -> MessageResponse:
        return MessageResponse.from_dict(self.snapshot())
