"""Shared test fixtures and configuration."""

from __future__ import annotations

import contextlib
import io
from typing import Any

import pytest
from rich.console import Console

from copilot_relay.api import create_app
from copilot_relay.config import RelaySettings
from tests.mocks.upstream import COPILOT_API_URL, GITHUB_API_URL, FakeGitHub


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Set default timeout for all tests."""
    for item in items:
        with contextlib.suppress(AttributeError):
            item.add_marker(pytest.mark.timeout(3))


@pytest.fixture
def settings() -> RelaySettings:
    """Relay settings pointing at the fake upstream hosts."""
    return RelaySettings(github_api_url=GITHUB_API_URL, copilot_api_url=COPILOT_API_URL)


@pytest.fixture
def fake_github() -> FakeGitHub:
    """A fake GitHub with a single known token."""
    return FakeGitHub()


@pytest.fixture
def mock_console() -> Console:
    """Provide a console that writes plain text to a StringIO for testing."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def app_factory(settings: RelaySettings, mock_console: Console) -> Any:
    """Build a relay app wired to a fake GitHub."""

    def _factory(github: FakeGitHub, relay_settings: RelaySettings | None = None) -> Any:
        return create_app(
            relay_settings or settings,
            transport=github.transport,
            console=mock_console,
        )

    return _factory


@pytest.fixture
def chat_payload() -> dict[str, Any]:
    """A minimal Copilot agent request body."""
    return {
        "copilot_thread_id": "thread-1",
        "agent": "reviewer",
        "temperature": 0.1,
        "top_p": 1,
        "max_tokens": 4096,
        "messages": [
            {"role": "user", "content": "Please review this class."},
        ],
    }
