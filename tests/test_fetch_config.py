"""Tests for jiralookup.config.fetch_config module."""

from dataclasses import FrozenInstanceError

import pytest

from jiralookup.config.fetch_config import JiraConfig, JiraMode, parse_custom_fields


class TestJiraConfig:
    """Tests for JiraConfig."""

    def test_defaults(self):
        config = JiraConfig()

        assert config.mode == ""
        assert config.cli_command == "acli"
        assert config.timeout_seconds == 30.0
        assert config.retry.max_retries == 3
        assert dict(config.custom_fields) == {}

    def test_frozen(self):
        config = JiraConfig()

        with pytest.raises(FrozenInstanceError):
            config.mode = "api"

    def test_custom_fields_copied(self):
        """Later changes to the source dict do not leak into the config."""
        source = {"sp": "customfield_10016"}
        config = JiraConfig(custom_fields=source)

        source["team"] = "customfield_10001"

        assert dict(config.custom_fields) == {"sp": "customfield_10016"}

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValueError, match="timeout_seconds"):
            JiraConfig(timeout_seconds=0)

    def test_modes(self):
        assert JiraMode("cli") is JiraMode.CLI
        assert JiraMode("api") is JiraMode.API


class TestParseCustomFields:
    """Tests for parse_custom_fields."""

    def test_valid_pairs(self):
        mapping, rejected = parse_custom_fields(
            "story_points=customfield_10016, team = customfield_10001"
        )

        assert mapping == {"story_points": "customfield_10016", "team": "customfield_10001"}
        assert rejected == []

    def test_empty(self):
        assert parse_custom_fields("") == ({}, [])

    def test_malformed_entries_rejected(self):
        mapping, rejected = parse_custom_fields("ok=customfield_1,noequals,=customfield_2,name=,,")

        assert mapping == {"ok": "customfield_1"}
        assert rejected == ["noequals", "=customfield_2", "name="]
