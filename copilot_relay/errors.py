"""Errors raised by the relay before a response starts streaming."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for failures that end a request with an error response."""

    status_code: int = 500
    error_type: str = "relay_error"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class AuthenticationError(RelayError):
    """The delegated token is missing or was rejected by the identity API."""

    status_code = 401
    error_type = "authentication_error"


class UpstreamUnavailableError(RelayError):
    """The identity or completion API failed before streaming began."""

    status_code = 502
    error_type = "upstream_unavailable"


class MalformedInputError(RelayError):
    """The inbound request does not carry a usable conversation."""

    status_code = 400
    error_type = "malformed_input"
