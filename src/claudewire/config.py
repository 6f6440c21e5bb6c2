"""Client configuration via environment variables (CLAUDEWIRE_ prefix) or defaults."""

from __future__ import annotations

import httpx
from pydantic_settings import BaseSettings


class ClientConfig(BaseSettings):
    api_key: str = ""
    base_url: str = "https://api.anthropic.com/v1/"
    anthropic_version: str = "2023-06-01"
    timeout: float = 600.0
    connect_timeout: float = 10.0
    stream_chunk_size: int = 8192
    default_model: str = "claude-sonnet-4-5-latest"
    default_max_tokens: int = 1024
    log_dir: str | None = None
    log_level: str = "WARNING"

    model_config = {"env_prefix": "CLAUDEWIRE_"}

    def default_headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        headers = {
            "anthropic-version": self.anthropic_version,
            "content-type": "application/json",
        }
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    def httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.timeout, connect=self.connect_timeout)
