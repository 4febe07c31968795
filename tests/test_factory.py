"""Tests for jiralookup.integrations.factory module."""

from dataclasses import replace
from unittest.mock import patch

import httpx
import pytest

from jiralookup.config.fetch_config import JiraConfig, JiraMode
from jiralookup.config.manager import ConfigManager
from jiralookup.integrations.api_client import APIClient
from jiralookup.integrations.cli_client import CLIClient
from jiralookup.integrations.exceptions import ConfigurationError
from jiralookup.integrations.factory import create_jira_client, fetch_ticket_info, resolve_mode


class TestResolveMode:
    """Tests for resolve_mode."""

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            ("", JiraMode.CLI),
            ("cli", JiraMode.CLI),
            ("api", JiraMode.API),
            ("API", JiraMode.API),
            (" cli ", JiraMode.CLI),
        ],
    )
    def test_valid_modes(self, mode, expected):
        assert resolve_mode(mode) is expected

    @pytest.mark.parametrize("mode", ["rest", "acli", "http", "jira"])
    def test_unknown_mode(self, mode):
        with pytest.raises(ConfigurationError, match="unknown jira mode") as exc_info:
            resolve_mode(mode)

        assert "cli, api" in str(exc_info.value)


class TestCreateJiraClient:
    """Tests for create_jira_client."""

    def test_api_mode(self, api_config):
        client = create_jira_client(api_config)
        try:
            assert isinstance(client, APIClient)
        finally:
            client.close()

    @pytest.mark.parametrize("mode", ["cli", ""])
    def test_cli_mode(self, mode):
        client = create_jira_client(JiraConfig(mode=mode, cli_command="jira-cli"))

        assert isinstance(client, CLIClient)
        assert client.cli_command == "jira-cli"

    def test_cli_mode_uses_timeout(self):
        client = create_jira_client(JiraConfig(mode="cli", timeout_seconds=12.0))

        assert client.timeout_seconds == 12.0

    def test_unknown_mode(self):
        with pytest.raises(ConfigurationError, match="unknown jira mode 'rest'"):
            create_jira_client(JiraConfig(mode="rest"))

    def test_none_config(self):
        with pytest.raises(ConfigurationError):
            create_jira_client(None)

    def test_api_mode_missing_fields(self):
        with pytest.raises(ConfigurationError, match="base_url"):
            create_jira_client(JiraConfig(mode="api"))

    def test_invalid_cli_command(self):
        with pytest.raises(ConfigurationError):
            create_jira_client(JiraConfig(mode="cli", cli_command="acli; rm -rf /"))

    def test_api_options_forwarded(self, api_config, make_http_client, sleeper):
        http_client = make_http_client(lambda request: httpx.Response(429))

        client = create_jira_client(api_config, http_client=http_client, sleeper=sleeper)

        assert isinstance(client, APIClient)
        assert client._http_client is http_client
        assert client._sleeper is sleeper


class TestFetchTicketInfo:
    """Tests for fetch_ticket_info."""

    def test_disabled_returns_none(self, api_config, make_http_client):
        calls = []
        http_client = make_http_client(lambda request: calls.append(request))

        info = fetch_ticket_info("TEST-1", api_config, enabled=False, http_client=http_client)

        assert info is None
        assert calls == []

    def test_success(self, api_config, issue_payload, make_http_client):
        http_client = make_http_client(lambda request: httpx.Response(200, json=issue_payload))

        info = fetch_ticket_info("TEST-123", api_config, http_client=http_client)

        assert info is not None
        assert info.summary == "Login fails on Safari"

    def test_fetch_error_returns_none(self, api_config, make_http_client):
        http_client = make_http_client(lambda request: httpx.Response(404))

        assert fetch_ticket_info("TEST-1", api_config, http_client=http_client) is None

    def test_configuration_error_returns_none(self):
        assert fetch_ticket_info("TEST-1", JiraConfig(mode="bogus")) is None

    def test_missing_cli_returns_none(self):
        with patch("jiralookup.integrations.cli_client.shutil.which", return_value=None):
            assert fetch_ticket_info("TEST-1", JiraConfig(mode="cli")) is None

    def test_failure_is_logged(self, api_config, make_http_client, caplog):
        http_client = make_http_client(lambda request: httpx.Response(500))

        with caplog.at_level("WARNING", logger="jiralookup.integrations.factory"):
            fetch_ticket_info("TEST-1", api_config, http_client=http_client)

        assert "Could not fetch Jira details for TEST-1" in caplog.text


class TestEnrichmentSwitch:
    """Tests for the JIRA_ENABLED switch on fetch_ticket_info."""

    def test_config_disabled_skips_lookup(self, api_config, make_http_client):
        calls = []
        http_client = make_http_client(lambda request: calls.append(request))

        info = fetch_ticket_info(
            "TEST-1", replace(api_config, enabled=False), http_client=http_client
        )

        assert info is None
        assert calls == []

    def test_explicit_argument_overrides_config(self, api_config, issue_payload, make_http_client):
        http_client = make_http_client(lambda request: httpx.Response(200, json=issue_payload))

        info = fetch_ticket_info(
            "TEST-123", replace(api_config, enabled=False), enabled=True, http_client=http_client
        )

        assert info is not None

    def test_jira_enabled_false_from_environment(self, monkeypatch, make_http_client):
        """JIRA_ENABLED=false flows from configuration to the helper."""
        monkeypatch.setenv("JIRA_ENABLED", "false")
        monkeypatch.setenv("JIRA_MODE", "api")
        monkeypatch.setenv("JIRA_BASE_URL", "https://example.atlassian.net")
        monkeypatch.setenv("JIRA_EMAIL", "test@example.com")
        monkeypatch.setenv("JIRA_TOKEN", "test-token")
        calls = []
        http_client = make_http_client(lambda request: calls.append(request))
        manager = ConfigManager()
        manager.load()

        info = fetch_ticket_info("TEST-1", manager.get_jira_config(), http_client=http_client)

        assert info is None
        assert calls == []


class TestRateLimitRecovery:
    """fetch_ticket_info survives hostile rate limit hints."""

    def test_huge_retry_after_returns_none(self, api_config, make_http_client, sleeper):
        http_client = make_http_client(
            lambda request: httpx.Response(429, headers={"Retry-After": "99999999999999999999"})
        )

        info = fetch_ticket_info("TEST-1", api_config, http_client=http_client, sleeper=sleeper)

        assert info is None
        assert sleeper.delays == [30.0, 30.0, 30.0]
