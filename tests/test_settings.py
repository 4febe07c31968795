"""Tests for jiralookup.config.settings module."""

from pathlib import Path

from jiralookup.config.settings import CONFIG_FILE, Settings


class TestSettings:
    def test_default_values(self):
        settings = Settings()

        assert settings.jira_enabled is True
        assert settings.jira_mode == ""
        assert settings.jira_cli_command == "acli"
        assert settings.jira_base_url == ""
        assert settings.jira_token == ""
        assert settings.jira_custom_fields == ""
        assert settings.fetch_timeout_seconds == 30.0
        assert settings.fetch_max_retries == 3
        assert settings.fetch_retry_delay_seconds == 1.0
        assert settings.fetch_max_retry_delay_seconds == 30.0

    def test_custom_values(self):
        settings = Settings(jira_mode="api", jira_email="dev@example.com")

        assert settings.jira_mode == "api"
        assert settings.jira_email == "dev@example.com"

    def test_key_mapping(self):
        settings = Settings()

        assert settings.get_attribute_for_key("JIRA_BASE_URL") == "jira_base_url"
        assert settings.get_attribute_for_key("UNKNOWN") is None
        assert settings.get_key_for_attribute("fetch_max_retries") == "FETCH_MAX_RETRIES"
        assert settings.get_key_for_attribute("unknown") is None

    def test_every_key_maps_to_attribute(self):
        settings = Settings()

        for key in Settings.get_config_keys():
            attr = settings.get_attribute_for_key(key)
            assert attr is not None
            assert hasattr(settings, attr)

    def test_config_file_location(self):
        assert CONFIG_FILE == Path.home() / ".jiralookup-config"
