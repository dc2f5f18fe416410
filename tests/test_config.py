"""Test the config loading and relay settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from copilot_relay import constants
from copilot_relay._prompt import PERSONA_PROMPT
from copilot_relay.config import LogMode, RelaySettings, load_config
from copilot_relay.core.utils import console

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Provides a config file with dashed keys."""
    config_content = """
[defaults]
log-level = "debug"

[serve]
port = 5000
log-mode = "overview"
copilot-api-url = "http://localhost:9000/"
"""
    config_path = tmp_path / "config.toml"
    config_path.write_text(config_content)
    return config_path


def test_config_loader_key_replacement(config_file: Path) -> None:
    """Test that dashed keys are replaced with underscores."""
    config = load_config(str(config_file))
    assert config["defaults"]["log_level"] == "debug"
    assert config["serve"]["log_mode"] == "overview"
    assert config["serve"]["copilot_api_url"] == "http://localhost:9000/"


def test_missing_explicit_config_returns_empty(tmp_path: Path) -> None:
    with console.capture() as capture:
        assert load_config(str(tmp_path / "missing.toml")) == {}
    assert "Config file not found" in capture.get()


def test_settings_defaults() -> None:
    settings = RelaySettings()
    assert settings.port == constants.DEFAULT_PORT == 3000
    assert settings.log_mode is LogMode.JSON
    assert settings.github_api_url == "https://api.github.com"
    assert settings.copilot_api_url == "https://api.githubcopilot.com"
    assert settings.persona_prompt == PERSONA_PROMPT


def test_settings_normalize_values() -> None:
    settings = RelaySettings(
        github_api_url="http://github.local/",
        log_mode="message",
        persona_prompt="",
    )
    assert settings.github_api_url == "http://github.local"
    assert settings.log_mode is LogMode.MESSAGE
    assert settings.persona_prompt == PERSONA_PROMPT


def test_settings_are_immutable_and_validated() -> None:
    settings = RelaySettings()
    with pytest.raises(ValidationError):
        settings.port = 8080  # type: ignore[misc]
    with pytest.raises(ValidationError):
        RelaySettings(log_mode="verbose")
