"""Forward a conversation to the Copilot completion API and expose its raw stream."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from copilot_relay import constants
from copilot_relay.errors import UpstreamUnavailableError
from copilot_relay.models import dump_messages

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    from copilot_relay.models import Message

LOGGER = logging.getLogger(__name__)

ERROR_EXCERPT_LENGTH = 500


class CompletionStream:
    """Single-pass iterator over the body of a streaming completion.

    Chunks are yielded as they arrive from the upstream connection and are
    never parsed. If the connection drops mid-stream the iteration just ends;
    ``truncated`` records that it did.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._started = False
        self.completed = False
        self.truncated = False

    @property
    def content_type(self) -> str:
        return self._response.headers.get("content-type", constants.DEFAULT_STREAM_MEDIA_TYPE)

    async def __aiter__(self) -> AsyncIterator[bytes]:
        if self._started:
            msg = "A completion stream can only be consumed once"
            raise RuntimeError(msg)
        self._started = True
        try:
            async for chunk in self._response.aiter_bytes():
                yield chunk
            self.completed = True
        except httpx.TransportError as exc:
            self.truncated = True
            LOGGER.warning("Upstream stream ended early: %s", exc)
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        """Release the upstream connection. Safe to call more than once."""
        await self._response.aclose()


async def open_completion_stream(
    client: httpx.AsyncClient,
    messages: Sequence[Message],
    token: str,
    *,
    api_url: str = constants.DEFAULT_COPILOT_API_URL,
) -> CompletionStream:
    """Start a streaming chat completion on behalf of the token's owner.

    Returns once the upstream status line and headers are in; the body is
    left unread for the caller to iterate.

    Raises:
        UpstreamUnavailableError: If the request fails or the upstream answers
            with a non-2xx status before streaming begins.

    """
    request = client.build_request(
        "POST",
        f"{api_url.rstrip('/')}/chat/completions",
        json={"messages": dump_messages(list(messages)), "stream": True},
        headers={"Authorization": f"Bearer {token}"},
    )
    try:
        response = await client.send(request, stream=True)
    except httpx.HTTPError as exc:
        LOGGER.error("Completion API request failed: %s", exc)  # noqa: TRY400
        msg = f"Completion API unreachable: {exc}"
        raise UpstreamUnavailableError(msg) from exc

    if response.is_success:
        return CompletionStream(response)

    try:
        error_text = (await response.aread()).decode(errors="replace")
    except httpx.HTTPError:
        error_text = ""
    finally:
        await response.aclose()
    LOGGER.error("Upstream error %s: %s", response.status_code, error_text)
    msg = f"Upstream error: {error_text[:ERROR_EXCERPT_LENGTH]}"
    raise UpstreamUnavailableError(msg, status_code=response.status_code)
