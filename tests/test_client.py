"""Tests for the HTTP transport with a mocked API."""

import json

import httpx
import pytest
import respx
from httpx import Response

from claudewire.client import Client
from claudewire.config import ClientConfig
from claudewire.errors import APIStreamError, ConnectionFailure, StatusError
from claudewire.stream.response import StreamResponse
from claudewire.stream.state import StreamState

API_URL = "https://api.anthropic.com/v1/messages"


@pytest.fixture
def config():
    return ClientConfig(api_key="sk-test", anthropic_version="2023-06-01")


@pytest.fixture
def client(config):
    with Client(config) as c:
        yield c


def _sse(*payloads):
    return "".join(f"data: {json.dumps(p)}\n\n" for p in payloads).encode() + b"data: [DONE]\n\n"


class TestConfig:
    def test_default_headers(self, config):
        headers = config.default_headers()
        assert headers["x-api-key"] == "sk-test"
        assert headers["anthropic-version"] == "2023-06-01"
        assert headers["content-type"] == "application/json"

    def test_no_key_header_without_key(self):
        assert "x-api-key" not in ClientConfig(api_key="").default_headers()

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("CLAUDEWIRE_BASE_URL", "https://proxy.local/v1/")
        monkeypatch.setenv("CLAUDEWIRE_STREAM_CHUNK_SIZE", "512")
        config = ClientConfig()
        assert config.base_url == "https://proxy.local/v1/"
        assert config.stream_chunk_size == 512


class TestPost:
    @respx.mock
    def test_sends_headers_and_body(self, client):
        route = respx.post(API_URL).mock(return_value=Response(200, json={"ok": True}))
        response = client.post("messages", {"model": "m"}, {"anthropic-beta": "b1"})
        assert response.json() == {"ok": True}
        request = route.calls.last.request
        assert request.headers["x-api-key"] == "sk-test"
        assert request.headers["anthropic-beta"] == "b1"
        assert json.loads(request.content) == {"model": "m"}

    @respx.mock
    def test_status_error_uses_api_message(self, client):
        respx.post(API_URL).mock(return_value=Response(429, json={
            "type": "error",
            "error": {"type": "rate_limit_error", "message": "Number of requests has exceeded your rate limit"},
        }))
        with pytest.raises(StatusError) as exc_info:
            client.post("messages", {})
        assert exc_info.value.status_code == 429
        assert exc_info.value.error_type == "rate_limit_error"
        assert str(exc_info.value) == "Number of requests has exceeded your rate limit"

    @respx.mock
    def test_status_error_non_json_body(self, client):
        respx.post(API_URL).mock(return_value=Response(502, text="Bad Gateway"))
        with pytest.raises(StatusError, match="Bad Gateway") as exc_info:
            client.post("messages", {})
        assert exc_info.value.error_type is None
        assert exc_info.value.body == "Bad Gateway"

    @respx.mock
    def test_connect_error(self, client):
        respx.post(API_URL).mock(side_effect=httpx.ConnectError("connection refused"))
        with pytest.raises(ConnectionFailure, match="Connection error: connection refused"):
            client.post("messages", {})

    @respx.mock
    def test_timeout(self, client):
        respx.post(API_URL).mock(side_effect=httpx.ReadTimeout("timed out"))
        with pytest.raises(ConnectionFailure):
            client.post("messages", {})


class TestGet:
    @respx.mock
    def test_query_params(self, client):
        route = respx.get("https://api.anthropic.com/v1/models").mock(
            return_value=Response(200, json={"data": []}),
        )
        client.get("models", {"limit": 5})
        assert route.calls.last.request.url.params["limit"] == "5"


class TestStream:
    @respx.mock
    def test_yields_events(self, client):
        body = _sse(
            {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Hello"}},
            {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": " world"}},
        )
        respx.post(API_URL).mock(return_value=Response(
            200, content=body, headers={"content-type": "text/event-stream", "request-id": "req_1"},
        ))
        with client.stream("messages", {"stream": True}) as stream:
            assert isinstance(stream, StreamResponse)
            assert stream.stream_id == "req_1"
            texts = list(stream.text_stream())
            assert stream.state == StreamState.DONE
        assert texts == ["Hello", " world"]
        assert stream.response.is_closed

    @respx.mock
    def test_error_status_before_stream(self, client):
        respx.post(API_URL).mock(return_value=Response(529, json={
            "type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"},
        }))
        with pytest.raises(StatusError) as exc_info:
            client.stream("messages", {"stream": True})
        assert exc_info.value.status_code == 529
        assert str(exc_info.value) == "Overloaded"

    @respx.mock
    def test_error_event_in_stream(self, client):
        body = (
            b'data: {"type":"error","error":{"type":"overloaded_error",'
            b'"message":"Service temporarily overloaded"}}\n\n'
        )
        respx.post(API_URL).mock(return_value=Response(200, content=body))
        with client.stream("messages", {}) as stream:
            with pytest.raises(APIStreamError, match="Service temporarily overloaded"):
                list(stream)
            assert stream.state == StreamState.ERRORED

    @respx.mock
    def test_connect_error(self, client):
        respx.post(API_URL).mock(side_effect=httpx.ConnectError("dns failure"))
        with pytest.raises(ConnectionFailure):
            client.stream("messages", {})

    @respx.mock
    def test_chunked_body(self, config):
        config.stream_chunk_size = 3
        body = _sse({"type": "message_stop"})
        respx.post(API_URL).mock(return_value=Response(
            200, content=iter([body[:4], body[4:11], body[11:]]),
        ))
        with Client(config) as c, c.stream("messages", {}) as stream:
            assert [e["type"] for e in stream] == ["message_stop"]


class TestStreamResponse:
    def test_close_before_consuming(self):
        response = Response(200, content=_sse({"type": "ping"}))
        stream = StreamResponse(response)
        stream.close()
        assert response.is_closed
        assert stream.state == StreamState.ACTIVE
