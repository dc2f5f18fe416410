"""Relay settings and config file loading."""

from __future__ import annotations

import tomllib
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from copilot_relay import constants
from copilot_relay._prompt import PERSONA_PROMPT
from copilot_relay.core.utils import console

# --- Config File Loading ---

CONFIG_PATH = Path.home() / ".config" / "copilot-relay" / "config.toml"
CONFIG_PATH_2 = Path("copilot-relay-config.toml")


def _replace_dashed_keys(cfg: dict[str, Any]) -> dict[str, Any]:
    """Replace dashed keys with underscores in the config options."""
    return {k.replace("-", "_"): v for k, v in cfg.items()}


def load_config(config_path_str: str | None = None) -> dict[str, Any]:
    """Load the TOML configuration file and normalize its keys."""
    if config_path_str:
        config_path = Path(config_path_str).expanduser()
    elif CONFIG_PATH.exists():
        config_path = CONFIG_PATH
    elif CONFIG_PATH_2.exists():
        config_path = CONFIG_PATH_2
    else:
        return {}

    if config_path.exists():
        with config_path.open("rb") as f:
            cfg = tomllib.load(f)
            return {k: _replace_dashed_keys(v) for k, v in cfg.items() if isinstance(v, dict)}

    # Report error only if an explicit path was given
    console.print(f"[bold red]Config file not found at {config_path_str}[/bold red]")
    return {}


# --- Settings ---


class LogMode(StrEnum):
    """How the inbound request payload is rendered to the console."""

    JSON = "json"
    OVERVIEW = "overview"
    CONVERSATION = "conversation"
    FILE = "file"
    MESSAGE = "message"


class RelaySettings(BaseModel):
    """Process-wide relay configuration, fixed at startup."""

    model_config = ConfigDict(frozen=True)

    host: str = constants.DEFAULT_HOST
    port: int = constants.DEFAULT_PORT
    log_mode: LogMode = LogMode(constants.DEFAULT_LOG_MODE)
    github_api_url: str = constants.DEFAULT_GITHUB_API_URL
    copilot_api_url: str = constants.DEFAULT_COPILOT_API_URL
    request_timeout: float = constants.DEFAULT_REQUEST_TIMEOUT
    persona_prompt: str = PERSONA_PROMPT

    @field_validator("github_api_url", "copilot_api_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("persona_prompt")
    @classmethod
    def _default_empty_persona(cls, v: str) -> str:
        return v or PERSONA_PROMPT
