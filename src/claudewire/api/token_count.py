"""Builder for ``POST /v1/messages/count_tokens``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from claudewire.responses import TokenCountResponse

if TYPE_CHECKING:
    from claudewire.client import Client


class TokenCountResource:
    endpoint = "messages/count_tokens"

    def __init__(self, client: Client) -> None:
        self.client = client
        self._model: str | None = None
        self._messages: list[dict[str, Any]] = []
        self._system: str | list[dict[str, Any]] | None = None
        self._tools: list[dict[str, Any]] | None = None
        self._tool_choice: dict[str, Any] | None = None
        self._thinking: dict[str, Any] | None = None

    def model(self, model: str) -> TokenCountResource:
        self._model = model
        return self

    def messages(self, messages: list[dict[str, Any]]) -> TokenCountResource:
        self._messages = list(messages)
        return self

    def system(self, system: str | list[dict[str, Any]]) -> TokenCountResource:
        self._system = system
        return self

    def tools(self, tools: list[dict[str, Any]]) -> TokenCountResource:
        self._tools = tools
        return self

    def tool_choice(self, tool_choice: str | dict[str, Any]) -> TokenCountResource:
        self._tool_choice = {"type": tool_choice} if isinstance(tool_choice, str) else tool_choice
        return self

    def thinking(self, thinking: dict[str, Any]) -> TokenCountResource:
        self._thinking = thinking
        return self

    def build_request(self) -> dict[str, Any]:
        optional = {
            "system": self._system,
            "tools": self._tools,
            "tool_choice": self._tool_choice,
            "thinking": self._thinking,
        }
        body: dict[str, Any] = {"model": self._model, "messages": self._messages}
        body.update({k: v for k, v in optional.items() if v is not None})
        return body

    def count(self) -> TokenCountResponse:
        if not self._model:
            raise ValueError("Model is required.")
        if not self._messages:
            raise ValueError("Messages are required.")
        response = self.client.post(self.endpoint, self.build_request())
        return TokenCountResponse.from_dict(response.json())
