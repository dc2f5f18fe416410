"""Tests for the Copilot completion relay."""

from __future__ import annotations

import json

import httpx
import pytest

from copilot_relay.errors import UpstreamUnavailableError
from copilot_relay.models import Message
from copilot_relay.relay import open_completion_stream
from tests.mocks.upstream import COPILOT_API_URL, FakeGitHub

MESSAGES = [
    Message(role="system", content="Start every response with the user's name, which is @octo"),
    Message(role="user", content="hi"),
]


@pytest.mark.asyncio
async def test_stream_yields_upstream_chunks_unchanged() -> None:
    github = FakeGitHub(chunks=[b"A", b"B", b"C"])
    async with httpx.AsyncClient(transport=github.transport) as client:
        stream = await open_completion_stream(client, MESSAGES, "tok", api_url=COPILOT_API_URL)
        chunks = [chunk async for chunk in stream]

    assert chunks == [b"A", b"B", b"C"]
    assert stream.completed
    assert not stream.truncated
    assert stream.content_type == "text/event-stream"
    assert github.streams[0].closed


@pytest.mark.asyncio
async def test_request_asks_for_streaming_with_user_token() -> None:
    github = FakeGitHub()
    async with httpx.AsyncClient(transport=github.transport) as client:
        stream = await open_completion_stream(client, MESSAGES, "tok", api_url=COPILOT_API_URL)
        await stream.aclose()

    request = github.completion_calls[0]
    assert request.method == "POST"
    assert request.headers["authorization"] == "Bearer tok"
    assert json.loads(request.content) == {
        "messages": [
            {
                "role": "system",
                "content": "Start every response with the user's name, which is @octo",
            },
            {"role": "user", "content": "hi"},
        ],
        "stream": True,
    }


@pytest.mark.asyncio
async def test_stream_can_only_be_consumed_once() -> None:
    github = FakeGitHub(chunks=[b"A"])
    async with httpx.AsyncClient(transport=github.transport) as client:
        stream = await open_completion_stream(client, MESSAGES, "tok", api_url=COPILOT_API_URL)
        _ = [chunk async for chunk in stream]
        with pytest.raises(RuntimeError, match="once"):
            _ = [chunk async for chunk in stream]


@pytest.mark.asyncio
async def test_upstream_error_status_raises_before_streaming() -> None:
    github = FakeGitHub(completion_status=503)
    async with httpx.AsyncClient(transport=github.transport) as client:
        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await open_completion_stream(client, MESSAGES, "tok", api_url=COPILOT_API_URL)

    assert exc_info.value.status_code == 503
    assert "model overloaded" in exc_info.value.message
    assert len(github.completion_calls) == 1


@pytest.mark.asyncio
async def test_connection_error_raises_upstream_unavailable() -> None:
    def _refuse(request: httpx.Request) -> httpx.Response:
        msg = "connection refused"
        raise httpx.ConnectError(msg, request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(_refuse)) as client:
        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await open_completion_stream(client, MESSAGES, "tok", api_url=COPILOT_API_URL)
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_mid_stream_drop_ends_stream_quietly(caplog: pytest.LogCaptureFixture) -> None:
    github = FakeGitHub(chunks=[b"A", b"B"], drop=True)
    async with httpx.AsyncClient(transport=github.transport) as client:
        stream = await open_completion_stream(client, MESSAGES, "tok", api_url=COPILOT_API_URL)
        chunks = [chunk async for chunk in stream]

    assert chunks == [b"A", b"B"]
    assert stream.truncated
    assert not stream.completed
    assert "ended early" in caplog.text
