"""Fluent builder for ``POST /v1/messages`` requests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from claudewire.responses import MessageResponse
from claudewire.stream.response import StreamResponse

if TYPE_CHECKING:
    from claudewire.client import Client

SERVICE_TIERS = ("auto", "standard_only")
MIN_THINKING_BUDGET = 1024


class MessagesResource:
    """Collects request fields, validates them and sends the request.

    Setters return the builder so calls chain::

        client.messages().model(m).max_tokens(512).messages(msgs).create()
    """

    endpoint = "messages"

    def __init__(self, client: Client) -> None:
        self.client = client
        self._model: str | None = None
        self._max_tokens: int | None = None
        self._messages: list[dict[str, Any]] = []
        self._system: str | list[dict[str, Any]] | None = None
        self._metadata: dict[str, Any] | None = None
        self._stop_sequences: list[str] | None = None
        self._temperature: float | None = None
        self._top_p: float | None = None
        self._top_k: int | None = None
        self._tools: list[dict[str, Any]] | None = None
        self._tool_choice: dict[str, Any] | None = None
        self._service_tier: str | None = None
        self._thinking: dict[str, Any] | None = None
        self._betas: list[str] = []

    def model(self, model: str) -> MessagesResource:
        self._model = model
        return self

    def max_tokens(self, max_tokens: int) -> MessagesResource:
        if max_tokens <= 0:
            raise ValueError("Max tokens must be a positive integer.")
        self._max_tokens = max_tokens
        return self

    def messages(self, messages: list[dict[str, Any]]) -> MessagesResource:
        for message in messages:
            if "role" not in message or "content" not in message:
                raise ValueError('Each message must have a "role" and "content" key.')
            if not isinstance(message["role"], str):
                raise ValueError('Message "role" must be a string.')
            # Content is plain text or a list of content blocks
            if not isinstance(message["content"], (str, list)):
                raise ValueError('Message "content" must be a string or a list of content blocks.')
        self._messages = list(messages)
        return self

    def system(self, system: str | list[dict[str, Any]]) -> MessagesResource:
        self._system = system
        return self

    def metadata(self, metadata: dict[str, Any]) -> MessagesResource:
        self._metadata = metadata
        return self

    def stop_sequences(self, sequences: list[str]) -> MessagesResource:
        self._stop_sequences = sequences
        return self

    def temperature(self, temperature: float) -> MessagesResource:
        if not 0.0 <= temperature <= 1.0:
            raise ValueError("Temperature must be between 0.0 and 1.0.")
        self._temperature = temperature
        return self

    def top_p(self, top_p: float) -> MessagesResource:
        self._top_p = top_p
        return self

    def top_k(self, top_k: int) -> MessagesResource:
        self._top_k = top_k
        return self

    def tools(self, tools: list[dict[str, Any]]) -> MessagesResource:
        self._tools = tools
        return self

    def tool_choice(self, tool_choice: str | dict[str, Any]) -> MessagesResource:
        self._tool_choice = {"type": tool_choice} if isinstance(tool_choice, str) else tool_choice
        return self

    def service_tier(self, service_tier: str) -> MessagesResource:
        if service_tier not in SERVICE_TIERS:
            raise ValueError('Service tier must be "auto" or "standard_only".')
        self._service_tier = service_tier
        return self

    def thinking(self, thinking: dict[str, Any]) -> MessagesResource:
        budget = thinking.get("budget_tokens")
        if budget is not None and budget < MIN_THINKING_BUDGET:
            raise ValueError(f"Thinking budget_tokens must be at least {MIN_THINKING_BUDGET}.")
        self._thinking = thinking
        return self

    def with_beta(self, beta: str) -> MessagesResource:
        if beta not in self._betas:
            self._betas.append(beta)
        return self

    def beta_headers(self) -> dict[str, str]:
        if not self._betas:
            return {}
        return {"anthropic-beta": ",".join(self._betas)}

    def build_request(self) -> dict[str, Any]:
        """Return the request body; unset optionals are omitted, falsy values kept."""
        optional = {
            "system": self._system,
            "metadata": self._metadata,
            "stop_sequences": self._stop_sequences,
            "temperature": self._temperature,
            "top_p": self._top_p,
            "top_k": self._top_k,
            "tools": self._tools,
            "tool_choice": self._tool_choice,
            "service_tier": self._service_tier,
            "thinking": self._thinking,
        }
        body: dict[str, Any] = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "messages": self._messages,
        }
        body.update({k: v for k, v in optional.items() if v is not None})
        return body

    def create(
        self,
        options: dict[str, Any] | None = None,
        extra_headers: dict[str, str] | None = None,
    ) -> MessageResponse:
        """Send the request and return the complete message."""
        self._apply_options(options or {})
        headers = {**self.beta_headers(), **(extra_headers or {})}
        response = self.client.post(self.endpoint, self.build_request(), headers)
        return MessageResponse.from_dict(response.json())

    def stream(
        self,
        options: dict[str, Any] | None = None,
        extra_headers: dict[str, str] | None = None,
    ) -> StreamResponse:
        """Send the request with ``stream: true`` and return the open event stream."""
        self._apply_options(options or {})
        headers = {**self.beta_headers(), **(extra_headers or {})}
        return self.client.stream(
            self.endpoint, {**self.build_request(), "stream": True}, headers,
        )

    def _apply_options(self, options: dict[str, Any]) -> None:
        # Route through the setters so options get the same validation
        setters = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": self.messages,
            "system": self.system,
            "metadata": self.metadata,
            "stop_sequences": self.stop_sequences,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "top_k": self.top_k,
            "tools": self.tools,
            "tool_choice": self.tool_choice,
            "service_tier": self.service_tier,
            "thinking": self.thinking,
        }
        for key, value in options.items():
            setter = setters.get(key)
            if setter is None:
                raise ValueError(f"Unknown message option: {key}")
            if value is not None:
                setter(value)

        if not self._model:
            raise ValueError("Model is required.")
        if self._max_tokens is None:
            raise ValueError("Max tokens is required.")
        if not self._messages:
            raise ValueError("Messages are required.")
