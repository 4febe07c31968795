"""Shared pytest fixtures for JIRALOOKUP tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from jiralookup.config.fetch_config import JiraConfig
from jiralookup.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path: Path):
    """Keep the developer's Jira environment and local config out of tests."""
    for key in Settings.get_config_keys():
        monkeypatch.delenv(key, raising=False)
    # A .git marker stops local config discovery at the test directory
    (tmp_path / ".git").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        "jiralookup.config.manager.CONFIG_FILE", tmp_path / "home" / ".jiralookup-config"
    )


@pytest.fixture
def api_config() -> JiraConfig:
    """Valid API-mode configuration."""
    return JiraConfig(
        mode="api",
        base_url="https://example.atlassian.net",
        email="test@example.com",
        token="test-token",
    )


@pytest.fixture
def issue_payload() -> dict[str, Any]:
    """A realistic Jira REST API v3 issue response."""
    return {
        "key": "TEST-123",
        "fields": {
            "issuetype": {"name": "Bug"},
            "summary": "Login fails on Safari",
            "status": {"name": "In Progress"},
            "priority": {"name": "High"},
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    {
                        "type": "paragraph",
                        "content": [
                            {"type": "text", "text": "Users cannot "},
                            {"type": "text", "text": "log in."},
                        ],
                    },
                    {
                        "type": "bulletList",
                        "content": [
                            {
                                "type": "listItem",
                                "content": [
                                    {
                                        "type": "paragraph",
                                        "content": [{"type": "text", "text": "Safari 17"}],
                                    }
                                ],
                            },
                            {
                                "type": "listItem",
                                "content": [
                                    {
                                        "type": "paragraph",
                                        "content": [{"type": "text", "text": "Safari 18"}],
                                    }
                                ],
                            },
                        ],
                    },
                ],
            },
            "customfield_10016": 5,
            "customfield_10017": {"name": "Backend Team"},
        },
    }


class RecordingSleeper:
    """Sleeper that records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleeper() -> RecordingSleeper:
    """A sleeper that never blocks."""
    return RecordingSleeper()


@pytest.fixture
def make_http_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    """Build an httpx.Client whose requests are answered by a handler function."""
    clients: list[httpx.Client] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
