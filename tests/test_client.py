from types import SimpleNamespace

import anthropic
import httpx
import pytest

from conftest import make_client, text_block

REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


@pytest.mark.asyncio
async def test_request_shape():
    client, messages = make_client(SimpleNamespace(content=[text_block("<!DOCTYPE html>")]))
    await client.generate("PROMPT")
    assert messages.calls == [
        {
            "model": "test-model",
            "max_tokens": 123,
            "messages": [{"role": "user", "content": "PROMPT"}],
        }
    ]


@pytest.mark.asyncio
async def test_joins_text_blocks_in_order_and_trims():
    response = SimpleNamespace(
        content=[
            text_block("  <!DOCTYPE html>"),
            SimpleNamespace(type="tool_use", name="x", input={}),
            text_block("<html></html>\n\n"),
        ]
    )
    client, _ = make_client(response)
    result = await client.generate("p")
    assert result.ok
    assert result.text == "<!DOCTYPE html>\n<html></html>"


@pytest.mark.asyncio
async def test_no_text_blocks_is_failure():
    response = SimpleNamespace(content=[SimpleNamespace(type="thinking", thinking="hmm")])
    client, _ = make_client(response)
    result = await client.generate("p")
    assert not result.ok
    assert "no game code" in result.error


@pytest.mark.asyncio
async def test_whitespace_only_text_is_failure():
    client, _ = make_client(SimpleNamespace(content=[text_block("   \n")]))
    result = await client.generate("p")
    assert not result.ok


@pytest.mark.asyncio
async def test_malformed_payload_is_failure():
    client, _ = make_client(SimpleNamespace(content=None))
    result = await client.generate("p")
    assert not result.ok
    assert "malformed" in result.error


@pytest.mark.asyncio
async def test_connection_error_is_failure():
    client, _ = make_client(error=anthropic.APIConnectionError(request=REQUEST))
    result = await client.generate("p")
    assert not result.ok
    assert "Could not reach" in result.error


@pytest.mark.asyncio
async def test_timeout_is_failure():
    client, _ = make_client(error=anthropic.APITimeoutError(request=REQUEST))
    result = await client.generate("p")
    assert not result.ok
    assert "timed out" in result.error


@pytest.mark.asyncio
async def test_status_error_is_failure():
    error = anthropic.InternalServerError(
        "Overloaded", response=httpx.Response(529, request=REQUEST), body=None
    )
    client, _ = make_client(error=error)
    result = await client.generate("p")
    assert not result.ok
    assert "529" in result.error
    assert "Overloaded" in result.error


@pytest.mark.asyncio
async def test_unexpected_exception_is_failure():
    client, _ = make_client(error=ValueError("boom"))
    result = await client.generate("p")
    assert not result.ok
    assert result.error == "boom"
