"""Tests for EnvironmentConfigProvider."""

import json

import pytest

from myjiratickets.adapters.config import EnvironmentConfigProvider


ENV_KEYS = [
    "JIRA_URL", "JIRA_EMAIL", "JIRA_USERNAME", "JIRA_PASSWORD", "JIRA_API_TOKEN",
    "JIRA_API_KEY", "MYJIRA_ARTIFACT_PATH", "MYJIRA_CONTAINER_ID", "MYJIRA_QUERY",
    "MYJIRA_LIMIT", "MYJIRA_TIMEOUT", "MYJIRA_MODE", "MYJIRA_DATABASE", "MYJIRA_VERBOSE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


class TestLoad:
    """Tests for building AppConfig."""

    def test_defaults(self):
        config = EnvironmentConfigProvider().load()

        assert not config.tracker.is_configured
        assert config.tracker.timeout == 30.0
        assert config.sync.query == "ORDER BY updated DESC"
        assert config.sync.limit == 1000
        assert config.sync.mode == "jira"
        assert config.database_path == "tickets.db"
        assert not config.artifact.is_enabled

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("JIRA_URL", "https://jira.example.com")
        monkeypatch.setenv("JIRA_EMAIL", "alice@example.com")
        monkeypatch.setenv("JIRA_API_TOKEN", "token")
        monkeypatch.setenv("MYJIRA_LIMIT", "25")
        monkeypatch.setenv("MYJIRA_MODE", "Manual")

        config = EnvironmentConfigProvider().load()

        assert config.tracker.is_configured
        assert config.tracker.secret == "token"
        assert config.sync.limit == 25
        assert config.sync.is_manual

    def test_settings_file(self, tmp_path):
        settings = tmp_path / "appsettings.json"
        settings.write_text(json.dumps({
            "Jira": {"BaseUrl": "https://j", "Username": "bob", "Password": "pw"},
            "StartHtmlPath": "site/start.html",
            "HtmlContentId": "tickets",
        }))

        provider = EnvironmentConfigProvider()
        config = provider.load()

        assert provider.config_file_path == settings
        assert config.tracker.url == "https://j"
        assert config.tracker.secret == "pw"
        assert config.artifact.path == "site/start.html"
        assert config.artifact.container_id == "tickets"

    def test_precedence(self, tmp_path, monkeypatch):
        (tmp_path / "appsettings.json").write_text(json.dumps({"Jira": {"BaseUrl": "https://file"}}))
        env_file = tmp_path / "custom.env"
        env_file.write_text("# comment\nJIRA_URL=https://dotenv\nJIRA_USERNAME='carol'\n")

        provider = EnvironmentConfigProvider(env_file=env_file)
        assert provider.get("jira_url") == "https://dotenv"
        assert provider.get("jira_username") == "carol"

        monkeypatch.setenv("JIRA_URL", "https://env")
        assert EnvironmentConfigProvider(env_file=env_file).get("jira_url") == "https://env"

        provider = EnvironmentConfigProvider(
            env_file=env_file,
            cli_overrides={"jira_url": "https://cli", "dry_run": False},
        )
        assert provider.get("jira_url") == "https://cli"
        assert provider.load().sync.dry_run is False

    def test_unreadable_settings_file_is_ignored(self, tmp_path):
        (tmp_path / "appsettings.json").write_text("{not json")

        provider = EnvironmentConfigProvider()

        assert provider.config_file_path is None
        assert provider.load().tracker.url == ""


class TestValidate:
    """Tests for validation."""

    def test_valid(self):
        assert EnvironmentConfigProvider().validate() == []

    @pytest.mark.parametrize("overrides,fragment", [
        ({"limit": "abc"}, "whole number"),
        ({"limit": 0}, "positive"),
        ({"timeout": "soon"}, "seconds"),
        ({"mode": "offline"}, "Invalid mode"),
        ({"container_id": "tickets"}, "no artifact path"),
    ])
    def test_invalid(self, overrides, fragment):
        errors = EnvironmentConfigProvider(cli_overrides=overrides).validate()
        assert len(errors) == 1
        assert fragment in errors[0]
