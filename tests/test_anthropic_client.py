"""
Tests for the Anthropic Messages API client, against httpx.MockTransport.
"""
import asyncio
import json

import httpx
import pytest

from ipready.core.errors import ModelUnavailableError
from ipready.services.anthropic_client import AnthropicClient, first_text_block


def client_for(handler) -> AnthropicClient:
    return AnthropicClient(
        api_key="test-key",
        model="test-model",
        base_url="https://llm.example.test/v1/",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


def complete(client: AnthropicClient) -> str:
    return asyncio.run(client.complete("system rules", "user prompt", 256))


class TestFirstTextBlock:

    def test_skips_non_text_blocks(self):
        content = [
            {"type": "tool_use", "id": "t1", "name": "lookup", "input": {}},
            {"type": "text", "text": "first"},
            {"type": "text", "text": "second"},
        ]
        assert first_text_block(content) == "first"

    @pytest.mark.parametrize("content", [[], None, [{"type": "tool_use", "id": "t1"}]])
    def test_no_text_block(self, content):
        assert first_text_block(content) == ""


class TestAnthropicClient:

    def test_request_and_response(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "model": "test-model",
                "content": [{"type": "text", "text": "Yield was 85% [DOC-1]."}],
                "usage": {"input_tokens": 120, "output_tokens": 9},
            })

        assert complete(client_for(handler)) == "Yield was 85% [DOC-1]."
        assert seen["url"] == "https://llm.example.test/v1/messages"
        assert seen["headers"]["x-api-key"] == "test-key"
        assert "anthropic-version" in seen["headers"]
        assert seen["body"] == {
            "model": "test-model",
            "max_tokens": 256,
            "system": "system rules",
            "messages": [{"role": "user", "content": "user prompt"}],
        }

    def test_empty_content(self):
        client = client_for(lambda request: httpx.Response(200, json={"content": []}))

        assert complete(client) == ""

    @pytest.mark.parametrize("status", [400, 401, 429, 500, 529])
    def test_error_status(self, status):
        client = client_for(lambda request: httpx.Response(status, json={"error": {"type": "overloaded_error"}}))

        with pytest.raises(ModelUnavailableError, match=f"HTTP {status}"):
            complete(client)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ModelUnavailableError, match="ConnectError"):
            complete(client_for(handler))

    def test_read_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ModelUnavailableError):
            complete(client_for(handler))

    def test_non_json_body(self):
        client = client_for(lambda request: httpx.Response(200, text="<html>gateway</html>"))

        with pytest.raises(ModelUnavailableError, match="non-JSON"):
            complete(client)
