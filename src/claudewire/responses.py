"""Typed views over complete (non-streaming) Messages API responses."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Usage:
    input_tokens: int
    output_tokens: int
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Usage:
        return cls(
            input_tokens=data.get("input_tokens") or 0,
            output_tokens=data.get("output_tokens") or 0,
            cache_creation_input_tokens=data.get("cache_creation_input_tokens") or 0,
            cache_read_input_tokens=data.get("cache_read_input_tokens") or 0,
        )

    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def used_cache(self) -> bool:
        return self.cache_read_input_tokens > 0 or self.cache_creation_input_tokens > 0


@dataclass
class MessageResponse:
    id: str
    type: str
    role: str
    content: list[dict[str, Any]]
    model: str
    stop_reason: str | None
    stop_sequence: str | None
    usage: Usage
    tool_calls: list[dict[str, Any]] | None = field(default=None)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageResponse:
        content = data.get("content") or []
        tool_calls = [b for b in content if b.get("type") == "tool_use"]
        return cls(
            id=data["id"],
            type=data["type"],
            role=data["role"],
            content=content,
            model=data["model"],
            stop_reason=data.get("stop_reason"),
            stop_sequence=data.get("stop_sequence"),
            usage=Usage.from_dict(data.get("usage") or {}),
            tool_calls=tool_calls or None,
        )

    def _blocks(self, block_type: str) -> list[dict[str, Any]]:
        return [b for b in self.content if b.get("type") == block_type]

    def text(self) -> str:
        """Concatenated text of all text blocks, newline-separated."""
        return "\n".join(b.get("text", "") for b in self._blocks("text"))

    def thinking(self) -> str | None:
        blocks = self._blocks("thinking")
        if not blocks:
            return None
        return "\n".join(b.get("thinking", "") for b in blocks)

    def text_blocks(self) -> list[dict[str, Any]]:
        return self._blocks("text")

    def thinking_blocks(self) -> list[dict[str, Any]]:
        return self._blocks("thinking")

    def tool_use_blocks(self) -> list[dict[str, Any]]:
        return self._blocks("tool_use")

    def has_tool_use(self) -> bool:
        return self.stop_reason == "tool_use" or bool(self.tool_use_blocks())

    def has_thinking(self) -> bool:
        return bool(self.thinking_blocks())

    def citations(self) -> list[dict[str, Any]]:
        citations: list[dict[str, Any]] = []
        for block in self.text_blocks():
            citations.extend(block.get("citations") or [])
        return citations

    def is_refusal(self) -> bool:
        return self.stop_reason == "refusal"


@dataclass
class TokenCountResponse:
    input_tokens: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenCountResponse:
        return cls(input_tokens=data["input_tokens"])


def parse_error_body(raw: bytes | str) -> tuple[str | None, str | None]:
    """Extract ``(error.type, error.message)`` from an API error body.

    Returns ``(None, None)`` when the body is not the documented error shape.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, ValueError):
        return None, None
    if not isinstance(data, dict):
        return None, None
    error = data.get("error")
    if not isinstance(error, dict):
        return None, None
    error_type = error.get("type")
    message = error.get("message")
    return (
        error_type if isinstance(error_type, str) else None,
        message if isinstance(message, str) else None,
    )


@dataclass
class BatchRequestCounts:
    processing: int = 0
    succeeded: int = 0
    errored: int = 0
    canceled: int = 0
    expired: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BatchRequestCounts:
        return cls(**{name: data.get(name) or 0 for name in (
            "processing", "succeeded", "errored", "canceled", "expired",
        )})

    def total(self) -> int:
        return self.processing + self.succeeded + self.errored + self.canceled + self.expired


@dataclass
class BatchResponse:
    """A Message Batch as returned by create, retrieve, cancel and list."""

    id: str
    type: str
    processing_status: str
    request_counts: BatchRequestCounts
    created_at: str
    expires_at: str
    ended_at: str | None = None
    cancel_initiated_at: str | None = None
    archived_at: str | None = None
    results_url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BatchResponse:
        return cls(
            id=data["id"],
            type=data.get("type", "message_batch"),
            processing_status=data["processing_status"],
            request_counts=BatchRequestCounts.from_dict(data.get("request_counts") or {}),
            created_at=data["created_at"],
            expires_at=data["expires_at"],
            ended_at=data.get("ended_at"),
            cancel_initiated_at=data.get("cancel_initiated_at"),
            archived_at=data.get("archived_at"),
            results_url=data.get("results_url"),
        )

    def is_processing(self) -> bool:
        return self.processing_status == "in_progress"

    def is_canceling(self) -> bool:
        return self.processing_status == "canceling"

    def is_complete(self) -> bool:
        return self.processing_status == "ended"

    def total_requests(self) -> int:
        return self.request_counts.total()


@dataclass
class BatchListResponse:
    data: list[BatchResponse]
    has_more: bool = False
    first_id: str | None = None
    last_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BatchListResponse:
        return cls(
            data=[BatchResponse.from_dict(item) for item in data.get("data") or []],
            has_more=bool(data.get("has_more")),
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
        )
