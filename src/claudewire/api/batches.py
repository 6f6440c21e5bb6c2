"""Message Batches: ``/v1/messages/batches``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from claudewire.responses import BatchListResponse, BatchResponse
from claudewire.stream.payload import decode_payload

if TYPE_CHECKING:
    from claudewire.client import Client

log = structlog.get_logger()

LIST_PARAMS = ("before_id", "after_id", "limit")


class BatchesResource:
    endpoint = "messages/batches"

    def __init__(self, client: Client) -> None:
        self.client = client

    def create(self, requests: list[dict[str, Any]]) -> BatchResponse:
        """Submit a batch. Each request needs a ``custom_id`` and Messages ``params``."""
        if not requests:
            raise ValueError("At least one request is required.")
        for index, request in enumerate(requests):
            for key in ("custom_id", "params"):
                if key not in request:
                    raise ValueError(f"Request at index {index} is missing '{key}'.")
        response = self.client.post(self.endpoint, {"requests": requests})
        batch = BatchResponse.from_dict(response.json())
        log.info("batch_created", batch_id=batch.id, requests=len(requests))
        return batch

    def retrieve(self, batch_id: str) -> BatchResponse:
        response = self.client.get(f"{self.endpoint}/{batch_id}")
        return BatchResponse.from_dict(response.json())

    def list(self, options: dict[str, Any] | None = None) -> BatchListResponse:
        options = options or {}
        unknown = set(options) - set(LIST_PARAMS)
        if unknown:
            raise ValueError(f"Unknown list options: {', '.join(sorted(unknown))}")
        query = {k: v for k, v in options.items() if v is not None}
        response = self.client.get(self.endpoint, query)
        return BatchListResponse.from_dict(response.json())

    def cancel(self, batch_id: str) -> BatchResponse:
        response = self.client.post(f"{self.endpoint}/{batch_id}/cancel", {})
        return BatchResponse.from_dict(response.json())

    def results(self, batch_id: str) -> list[dict[str, Any]]:
        """Fetch the JSONL results of an ended batch, one dict per request."""
        batch = self.retrieve(batch_id)
        if not batch.is_complete():
            raise ValueError("Batch has not finished processing yet.")
        if not batch.results_url:
            raise ValueError("No results URL available.")

        # results_url is absolute, so httpx ignores the client's base_url
        response = self.client.get(batch.results_url)
        results = [
            decode_payload(line)
            for line in response.text.splitlines()
            if line.strip()
        ]
        log.debug("batch_results_fetched", batch_id=batch_id, results=len(results))
        return results
