"""
Environment Config Provider - Load configuration from environment variables.

Supports, lowest precedence first:
- JSON settings file (appsettings.json)
- .env files
- Environment variables (JIRA_URL, JIRA_USERNAME, JIRA_API_TOKEN, ...)
- Command line argument overrides
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from ...core.ports.config_provider import (
    ConfigProviderPort,
    AppConfig,
    TrackerConfig,
    ArtifactConfig,
    SyncConfig,
)


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables,
    .env files and an optional JSON settings file.
    """

    SETTINGS_FILE = "appsettings.json"

    ENV_MAPPING = {
        "JIRA_URL": "jira_url",
        "JIRA_EMAIL": "jira_username",
        "JIRA_USERNAME": "jira_username",
        "JIRA_PASSWORD": "jira_password",
        "JIRA_API_TOKEN": "jira_api_key",
        "JIRA_API_KEY": "jira_api_key",
        "MYJIRA_ARTIFACT_PATH": "artifact_path",
        "MYJIRA_CONTAINER_ID": "container_id",
        "MYJIRA_QUERY": "query",
        "MYJIRA_LIMIT": "limit",
        "MYJIRA_TIMEOUT": "timeout",
        "MYJIRA_MODE": "mode",
        "MYJIRA_DATABASE": "database_path",
        "MYJIRA_VERBOSE": "verbose",
    }

    # appsettings.json layout
    SETTINGS_MAPPING = {
        ("Jira", "BaseUrl"): "jira_url",
        ("Jira", "Username"): "jira_username",
        ("Jira", "Password"): "jira_password",
        ("Jira", "ApiKey"): "jira_api_key",
        ("StartHtmlPath",): "artifact_path",
        ("HtmlContentId",): "container_id",
        ("Mode",): "mode",
        ("DatabasePath",): "database_path",
        ("Query",): "query",
        ("Limit",): "limit",
    }

    CLI_MAPPING = {
        "jira_url": "jira_url",
        "username": "jira_username",
        "artifact": "artifact_path",
        "container_id": "container_id",
        "query": "query",
        "limit": "limit",
        "timeout": "timeout",
        "mode": "mode",
        "database": "database_path",
        "dry_run": "dry_run",
        "verbose": "verbose",
    }

    MODES = ("jira", "manual")

    def __init__(
        self,
        env_file: Optional[Path] = None,
        config_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (auto-detected if not specified)
            config_file: Path to JSON settings file (auto-detected if not specified)
            cli_overrides: Command line argument overrides
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._config_file = config_file
        self._cli_overrides = cli_overrides or {}
        self.config_file_path: Optional[Path] = None
        self.logger = logging.getLogger("EnvironmentConfigProvider")

        self._load_settings_file()
        self._load_env_file()
        self._load_environment()
        self._apply_cli_overrides()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        tracker = TrackerConfig(
            url=self.get("jira_url", ""),
            username=self.get("jira_username", ""),
            password=self.get("jira_password", ""),
            api_key=self.get("jira_api_key", ""),
            timeout=self._as_float(self.get("timeout"), 30.0),
        )

        artifact = ArtifactConfig(
            path=self.get("artifact_path") or None,
            container_id=self.get("container_id", ""),
        )

        sync = SyncConfig(
            query=self.get("query") or SyncConfig.query,
            limit=self._as_int(self.get("limit"), SyncConfig.limit),
            mode=(self.get("mode") or "jira").lower(),
            dry_run=self._as_bool(self.get("dry_run", False)),
            verbose=self._as_bool(self.get("verbose", False)),
        )

        return AppConfig(
            tracker=tracker,
            artifact=artifact,
            sync=sync,
            database_path=self.get("database_path") or AppConfig.database_path,
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        key = key.lower().replace("-", "_")
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value

    def validate(self) -> list[str]:
        """
        Validate configuration values.

        Missing Jira credentials are not an error: the app then works
        on the local store only.
        """
        errors = []

        limit = self.get("limit")
        if limit is not None and self._as_int(limit, None) is None:
            errors.append(f"Invalid limit '{limit}' - must be a whole number")
        elif limit is not None and self._as_int(limit, 0) <= 0:
            errors.append(f"Invalid limit '{limit}' - must be positive")

        timeout = self.get("timeout")
        if timeout is not None and self._as_float(timeout, None) is None:
            errors.append(f"Invalid timeout '{timeout}' - must be a number of seconds")

        mode = self.get("mode")
        if mode and str(mode).lower() not in self.MODES:
            errors.append(f"Invalid mode '{mode}' - use one of: {', '.join(self.MODES)}")

        if self.get("container_id") and not self.get("artifact_path"):
            errors.append("Container id is set but no artifact path is configured")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _load_settings_file(self) -> None:
        """Load values from the JSON settings file."""
        settings_file = self._find_file(self._config_file, self.SETTINGS_FILE)
        if not settings_file:
            return

        try:
            data = json.loads(settings_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable settings file {settings_file}: {e}")
            return

        if not isinstance(data, dict):
            return

        self.config_file_path = settings_file

        for path, config_key in self.SETTINGS_MAPPING.items():
            value: Any = data
            for part in path:
                value = value.get(part) if isinstance(value, dict) else None
            if value not in (None, ""):
                self._values[config_key] = value

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_file(self._env_file, ".env")
        if not env_file:
            return

        for line in env_file.read_text().splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip().upper()
            value = value.strip().strip('"').strip("'")

            config_key = self.ENV_MAPPING.get(key)
            if config_key:
                self._values[config_key] = value

    def _find_file(self, explicit: Optional[Path], filename: str) -> Optional[Path]:
        if explicit:
            explicit = Path(explicit)
            return explicit if explicit.exists() else None

        cwd_file = Path.cwd() / filename
        if cwd_file.exists():
            return cwd_file

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, config_key in self.ENV_MAPPING.items():
            raw_value = os.environ.get(env_key)
            if raw_value is not None:
                self._values[config_key] = raw_value

    def _apply_cli_overrides(self) -> None:
        """Apply CLI argument overrides."""
        for cli_key, config_key in self.CLI_MAPPING.items():
            value = self._cli_overrides.get(cli_key)
            if value is not None and value is not False:
                self._values[config_key] = value

    @staticmethod
    def _as_bool(value: Any) -> bool:
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    @staticmethod
    def _as_int(value: Any, default: Optional[int]) -> Optional[int]:
        if value is None or value == "":
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    @staticmethod
    def _as_float(value: Any, default: Optional[float]) -> Optional[float]:
        if value is None or value == "":
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default
