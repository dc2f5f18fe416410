"""FastAPI application factory for the Copilot relay."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

import httpx
from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse
from rich.console import Console
from starlette.background import BackgroundTask

from copilot_relay import constants
from copilot_relay.augment import augment_conversation
from copilot_relay.config import RelaySettings
from copilot_relay.errors import AuthenticationError, RelayError
from copilot_relay.identity import resolve_identity
from copilot_relay.models import ChatRequest  # noqa: TC001
from copilot_relay.payload_log import log_payload
from copilot_relay.relay import open_completion_stream

if TYPE_CHECKING:
    from copilot_relay.relay import CompletionStream

LOGGER = logging.getLogger(__name__)


async def _close_relay(stream: CompletionStream, client: httpx.AsyncClient, login: str) -> None:
    """Release upstream resources once the response is done or abandoned."""
    await stream.aclose()
    await client.aclose()
    if stream.truncated:
        LOGGER.warning("Completion stream for @%s was truncated upstream", login)
    elif not stream.completed:
        LOGGER.info("Client for @%s disconnected before the stream finished", login)
    else:
        LOGGER.info("Completion stream for @%s finished", login)


def create_app(
    settings: RelaySettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    console: Console | None = None,
) -> FastAPI:
    """Create the FastAPI app.

    Args:
        settings: Relay configuration; defaults are used when omitted.
        transport: Optional httpx transport for the outbound clients (tests
            inject a mock transport here).
        console: Console the payload logger renders to.

    """
    settings = settings or RelaySettings()
    payload_console = console or Console()

    app = FastAPI(title="Copilot Relay")
    app.state.settings = settings

    @app.exception_handler(RelayError)
    async def relay_error_handler(_request: Request, exc: RelayError) -> JSONResponse:
        LOGGER.warning("Request failed with %s: %s", exc.error_type, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"type": exc.error_type, "message": exc.message}},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, _exc: Exception) -> JSONResponse:
        LOGGER.exception("Unexpected error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=RelayError.status_code,
            content={"error": {"type": RelayError.error_type, "message": "Internal server error"}},
        )

    @app.get("/", response_class=PlainTextResponse)
    async def greeting() -> str:
        return constants.GREETING

    @app.post("/")
    async def agent(
        chat_request: ChatRequest,
        x_github_token: Annotated[str | None, Header()] = None,
    ) -> StreamingResponse:
        """Review the conversation through the Copilot LLM and stream the reply."""
        if not x_github_token:
            msg = f"Missing {constants.TOKEN_HEADER} header"
            raise AuthenticationError(msg)

        client = httpx.AsyncClient(timeout=settings.request_timeout, transport=transport)
        try:
            identity = await resolve_identity(
                client,
                x_github_token,
                api_url=settings.github_api_url,
            )
            LOGGER.info("User: %s", identity.login)
            log_payload(chat_request, settings.log_mode, console=payload_console)

            messages = augment_conversation(
                identity,
                chat_request.messages,
                persona_prompt=settings.persona_prompt,
            )
            stream = await open_completion_stream(
                client,
                messages,
                x_github_token,
                api_url=settings.copilot_api_url,
            )
        except BaseException:
            await client.aclose()
            raise

        return StreamingResponse(
            stream,
            media_type=stream.content_type,
            background=BackgroundTask(_close_relay, stream, client, identity.login),
        )

    return app
