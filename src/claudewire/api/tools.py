"""Server tool definitions for the ``tools`` request field."""

from __future__ import annotations

from typing import Any


class WebSearchTool:
    """Builder for the server-side web search tool.

    ::

        client.messages().tools([WebSearchTool().max_uses(3).location("US").to_dict()])
    """

    TYPE = "web_search_20250305"
    NAME = "web_search"

    def __init__(self) -> None:
        self._allowed_domains: list[str] = []
        self._blocked_domains: list[str] = []
        self._max_uses: int | None = None
        self._user_location: dict[str, Any] | None = None

    def allowed_domains(self, domains: list[str]) -> WebSearchTool:
        self._allowed_domains = list(domains)
        return self

    def blocked_domains(self, domains: list[str]) -> WebSearchTool:
        self._blocked_domains = list(domains)
        return self

    def max_uses(self, max_uses: int) -> WebSearchTool:
        if max_uses <= 0:
            raise ValueError("Max uses must be a positive integer.")
        self._max_uses = max_uses
        return self

    def user_location(self, location: dict[str, Any]) -> WebSearchTool:
        self._user_location = dict(location)
        return self

    def location(
        self,
        country: str,
        region: str | None = None,
        city: str | None = None,
        timezone: str | None = None,
    ) -> WebSearchTool:
        """Set an approximate user location from its parts."""
        location: dict[str, Any] = {"type": "approximate", "country": country}
        optional = {"region": region, "city": city, "timezone": timezone}
        location.update({k: v for k, v in optional.items() if v is not None})
        return self.user_location(location)

    def to_dict(self) -> dict[str, Any]:
        tool: dict[str, Any] = {"type": self.TYPE, "name": self.NAME}
        if self._allowed_domains:
            tool["allowed_domains"] = self._allowed_domains
        if self._blocked_domains:
            tool["blocked_domains"] = self._blocked_domains
        if self._max_uses is not None:
            tool["max_uses"] = self._max_uses
        if self._user_location is not None:
            tool["user_location"] = self._user_location
        return tool
