"""Shared CLI options for the relay commands."""

from __future__ import annotations

import typer

from copilot_relay import constants
from copilot_relay.config import LogMode

# --- Server Options ---
HOST = typer.Option(
    constants.DEFAULT_HOST,
    "--host",
    help="Host to bind the server to.",
    rich_help_panel="Server Configuration",
)
PORT = typer.Option(
    constants.DEFAULT_PORT,
    "--port",
    envvar="PORT",
    help="Port to bind the server to.",
    rich_help_panel="Server Configuration",
)
REQUEST_TIMEOUT = typer.Option(
    constants.DEFAULT_REQUEST_TIMEOUT,
    "--request-timeout",
    envvar="COPILOT_RELAY_REQUEST_TIMEOUT",
    help="Timeout in seconds for each call to the GitHub and Copilot APIs.",
    rich_help_panel="Server Configuration",
)

# --- Upstream Options ---
GITHUB_API_URL = typer.Option(
    constants.DEFAULT_GITHUB_API_URL,
    "--github-api-url",
    envvar="COPILOT_RELAY_GITHUB_API_URL",
    help="Base URL of the GitHub REST API used to resolve the user.",
    rich_help_panel="Upstream Configuration",
)
COPILOT_API_URL = typer.Option(
    constants.DEFAULT_COPILOT_API_URL,
    "--copilot-api-url",
    envvar="COPILOT_RELAY_COPILOT_API_URL",
    help="Base URL of the Copilot chat completions API.",
    rich_help_panel="Upstream Configuration",
)
PERSONA_PROMPT = typer.Option(
    None,
    "--persona-prompt",
    envvar="COPILOT_RELAY_PERSONA_PROMPT",
    help="Override the reviewer system prompt injected into every conversation.",
    rich_help_panel="Upstream Configuration",
)

# --- General Options ---
LOG_MODE = typer.Option(
    LogMode(constants.DEFAULT_LOG_MODE),
    "--log-mode",
    envvar="LOG_MODE",
    help="How each inbound payload is rendered to the console.",
    rich_help_panel="General Options",
)
LOG_LEVEL = typer.Option(
    constants.DEFAULT_LOG_LEVEL,
    "--log-level",
    help="Set logging level.",
    rich_help_panel="General Options",
)
PRINT_ARGS = typer.Option(
    False,  # noqa: FBT003
    "--print-args",
    help="Print the command line arguments, including variables taken from the configuration file.",
    rich_help_panel="General Options",
)
