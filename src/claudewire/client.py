"""HTTP transport for the Messages API.

Sends JSON requests through httpx and maps transport failures and non-2xx
responses onto claudewire errors. Streaming responses are checked for an
error status before a decoder is ever attached to the body.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from claudewire.api.batches import BatchesResource
from claudewire.api.messages import MessagesResource
from claudewire.api.token_count import TokenCountResource
from claudewire.config import ClientConfig
from claudewire.errors import ConnectionFailure, StatusError
from claudewire.responses import parse_error_body
from claudewire.stream.response import StreamResponse

log = structlog.get_logger()


class Client:
    """Thin wrapper over ``httpx.Client`` carrying the API headers."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.headers = self.config.default_headers()
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.httpx_timeout(),
        )

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http_client:
            self.http_client.close()

    def _merge_headers(self, extra_headers: dict[str, str] | None) -> dict[str, str]:
        headers = dict(self.headers)
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def post(
        self,
        endpoint: str,
        body: dict[str, Any],
        extra_headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """POST a JSON body and return the successful response."""
        log.debug("request_sent", method="POST", endpoint=endpoint)
        try:
            response = self.http_client.post(
                endpoint, json=body, headers=self._merge_headers(extra_headers),
            )
        except httpx.TransportError as exc:
            log.error("connection_error", endpoint=endpoint, error=str(exc))
            raise ConnectionFailure(f"Connection error: {exc}") from exc
        _raise_for_status(response, endpoint)
        return response

    def get(
        self,
        endpoint: str,
        query: dict[str, Any] | None = None,
        extra_headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        log.debug("request_sent", method="GET", endpoint=endpoint)
        try:
            response = self.http_client.get(
                endpoint, params=query or None, headers=self._merge_headers(extra_headers),
            )
        except httpx.TransportError as exc:
            log.error("connection_error", endpoint=endpoint, error=str(exc))
            raise ConnectionFailure(f"Connection error: {exc}") from exc
        _raise_for_status(response, endpoint)
        return response

    def stream(
        self,
        endpoint: str,
        body: dict[str, Any],
        extra_headers: dict[str, str] | None = None,
    ) -> StreamResponse:
        """POST a streaming request and return the open event stream.

        The caller owns the returned StreamResponse and should close it,
        ideally with a ``with`` block.
        """
        log.debug("request_sent", method="POST", endpoint=endpoint, stream=True)
        request = self.http_client.build_request(
            "POST", endpoint, json=body, headers=self._merge_headers(extra_headers),
        )
        try:
            response = self.http_client.send(request, stream=True)
        except httpx.TransportError as exc:
            log.error("connection_error", endpoint=endpoint, error=str(exc))
            raise ConnectionFailure(f"Connection error: {exc}") from exc

        if response.status_code >= 400:
            # Read error body while response is still open
            try:
                response.read()
            except httpx.TransportError as exc:
                raise ConnectionFailure(f"Connection error: {exc}") from exc
            finally:
                response.close()
            _raise_for_status(response, endpoint)

        return StreamResponse(response, chunk_size=self.config.stream_chunk_size)

    def messages(self) -> MessagesResource:
        return MessagesResource(self)

    def token_count(self) -> TokenCountResource:
        return TokenCountResource(self)

    def batches(self) -> BatchesResource:
        return BatchesResource(self)


def _raise_for_status(response: httpx.Response, endpoint: str) -> None:
    if response.status_code < 400:
        return
    body = response.text
    error_type, message = parse_error_body(response.content)
    log.error(
        "api_error",
        endpoint=endpoint,
        status=response.status_code,
        error_type=error_type,
        body=body[:500],
    )
    if not message:
        message = body[:500] or f"HTTP {response.status_code}"
    raise StatusError(message, response.status_code, error_type=error_type, body=body)

