"""Decode a frame's joined data into an event object or the end-of-stream sentinel."""

from __future__ import annotations

import json
from typing import Any

from claudewire.errors import ProtocolDecodeError

DONE_MARKER = "[DONE]"


class _StreamDone:
    def __repr__(self) -> str:
        return "STREAM_DONE"


STREAM_DONE = _StreamDone()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def decode_payload(data: str) -> dict[str, Any] | _StreamDone:
    """Return ``STREAM_DONE`` for the ``[DONE]`` marker, else the decoded object.

    Raises ProtocolDecodeError when the payload is not strict JSON or not an
    object.
    """
    if data == DONE_MARKER:
        return STREAM_DONE

    try:
        value = json.loads(data, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ProtocolDecodeError(f"Malformed stream payload: {exc}: {data[:200]!r}", raw=data) from exc

    if not isinstance(value, dict):
        raise ProtocolDecodeError(
            f"Stream payload is not a JSON object: {data[:200]!r}", raw=data,
        )
    return value
