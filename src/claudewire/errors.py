"""Exception types raised by the client and the stream decoder."""

from __future__ import annotations


class ClaudeWireError(Exception):
    """Base class for every error raised by claudewire."""


class ConnectionFailure(ClaudeWireError):
    """The transport could not reach the API or the byte source failed mid-read."""


class StatusError(ClaudeWireError):
    """The API answered with a non-2xx status before any streaming began."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        body: str = "",
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.body = body
        super().__init__(message)


class StreamError(ClaudeWireError):
    """Base class for fatal errors detected while decoding an event stream."""

    def __init__(self, message: str, raw: str = "") -> None:
        self.raw = raw
        super().__init__(message)


class ProtocolDecodeError(StreamError):
    """A completed frame carried a payload that is not a JSON object."""


class APIStreamError(StreamError):
    """The API reported an error inside the stream (``type: "error"``)."""

    def __init__(self, message: str, error_type: str | None = None, raw: str = "") -> None:
        self.error_type = error_type
        super().__init__(message, raw)
