"""Tests for non-streaming response mappers."""

from claudewire.responses import MessageResponse, TokenCountResponse, Usage, parse_error_body


def _api_message(content, stop_reason="end_turn", **usage):
    return {
        "id": "msg_test123",
        "type": "message",
        "role": "assistant",
        "content": content,
        "model": "claude-sonnet-4-5-latest",
        "stop_reason": stop_reason,
        "stop_sequence": None,
        "usage": {"input_tokens": 1000, "output_tokens": 50, **usage},
    }


class TestUsage:
    def test_defaults_and_totals(self):
        usage = Usage.from_dict({"input_tokens": 10, "output_tokens": 5})
        assert usage.cache_read_input_tokens == 0
        assert usage.total_tokens() == 15
        assert not usage.used_cache()

    def test_cache_used(self):
        usage = Usage.from_dict({"input_tokens": 10, "output_tokens": 5, "cache_read_input_tokens": 7})
        assert usage.used_cache()


class TestMessageResponse:
    def test_structure(self):
        msg = MessageResponse.from_dict(_api_message([{"type": "text", "text": "Hello!"}]))
        assert msg.id == "msg_test123"
        assert msg.role == "assistant"
        assert msg.text() == "Hello!"
        assert msg.thinking() is None
        assert msg.tool_calls is None
        assert not msg.has_tool_use()
        assert msg.usage.total_tokens() == 1050

    def test_tool_use(self):
        tool = {"type": "tool_use", "id": "toolu_1", "name": "get_weather", "input": {"city": "Paris"}}
        msg = MessageResponse.from_dict(_api_message(
            [{"type": "text", "text": "Checking."}, tool], stop_reason="tool_use",
        ))
        assert msg.has_tool_use()
        assert msg.tool_use_blocks() == [tool]
        assert msg.tool_calls == [tool]

    def test_thinking_blocks(self):
        msg = MessageResponse.from_dict(_api_message([
            {"type": "thinking", "thinking": "step one", "signature": "s"},
            {"type": "thinking", "thinking": "step two", "signature": "s"},
            {"type": "text", "text": "Answer"},
        ]))
        assert msg.has_thinking()
        assert msg.thinking() == "step one\nstep two"
        assert len(msg.text_blocks()) == 1

    def test_refusal(self):
        msg = MessageResponse.from_dict(_api_message([], stop_reason="refusal"))
        assert msg.is_refusal()
        assert msg.text() == ""


class TestTokenCountResponse:
    def test_from_dict(self):
        assert TokenCountResponse.from_dict({"input_tokens": 42}).input_tokens == 42


class TestParseErrorBody:
    def test_api_error_shape(self):
        body = b'{"type":"error","error":{"type":"invalid_request_error","message":"max_tokens: required"}}'
        assert parse_error_body(body) == ("invalid_request_error", "max_tokens: required")

    def test_not_json(self):
        assert parse_error_body(b"<html>Bad Gateway</html>") == (None, None)

    def test_missing_error_object(self):
        assert parse_error_body('{"message": "nope"}') == (None, None)
        assert parse_error_body("[]") == (None, None)
