"""Resolve the GitHub account behind a delegated token."""

from __future__ import annotations

import logging

import httpx

from copilot_relay import constants
from copilot_relay.errors import AuthenticationError, UpstreamUnavailableError
from copilot_relay.models import Identity

LOGGER = logging.getLogger(__name__)

_REJECTED_STATUSES = frozenset({401, 403})


async def resolve_identity(
    client: httpx.AsyncClient,
    token: str,
    *,
    api_url: str = constants.DEFAULT_GITHUB_API_URL,
) -> Identity:
    """Look up the login of the account that owns ``token``.

    Makes exactly one ``GET /user`` call; failures are never retried.

    Raises:
        AuthenticationError: If the token is empty or rejected.
        UpstreamUnavailableError: If the identity API cannot be reached or
            answers with an unexpected response.

    """
    if not token:
        msg = f"Missing {constants.TOKEN_HEADER} header"
        raise AuthenticationError(msg)

    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": constants.GITHUB_API_VERSION,
    }
    try:
        response = await client.get(f"{api_url.rstrip('/')}/user", headers=headers)
    except httpx.HTTPError as exc:
        LOGGER.error("Identity API request failed: %s", exc)  # noqa: TRY400
        msg = f"Identity API unreachable: {exc}"
        raise UpstreamUnavailableError(msg) from exc

    if response.status_code in _REJECTED_STATUSES:
        LOGGER.warning("Identity API rejected token (%s)", response.status_code)
        msg = "GitHub token was rejected"
        raise AuthenticationError(msg)
    if not response.is_success:
        LOGGER.error("Identity API error %s: %s", response.status_code, response.text)
        msg = f"Identity API returned {response.status_code}"
        raise UpstreamUnavailableError(msg)

    try:
        return Identity.model_validate(response.json())
    except ValueError as exc:  # invalid JSON or missing login
        msg = "Identity API response did not include a login"
        raise UpstreamUnavailableError(msg) from exc
