"""Default configuration settings for the Copilot relay."""

from __future__ import annotations

# --- Server Configuration ---
DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 3000
DEFAULT_LOG_MODE = "json"
DEFAULT_LOG_LEVEL = "info"

# --- Upstream APIs ---
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_COPILOT_API_URL = "https://api.githubcopilot.com"
GITHUB_API_VERSION = "2022-11-28"
DEFAULT_REQUEST_TIMEOUT = 120.0

# --- Inbound Request ---
TOKEN_HEADER = "X-GitHub-Token"
DEFAULT_STREAM_MEDIA_TYPE = "text/event-stream"

GREETING = "Ahoy, matey! Welcome to the Blackbeard Pirate GitHub Copilot Extension!"
