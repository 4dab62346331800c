"""
Config Provider Port - Abstract interface for configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class TrackerConfig:
    """Connection settings for the issue tracker."""

    url: str = ""
    username: str = ""
    password: str = ""
    api_key: str = ""
    timeout: float = 30.0

    @property
    def secret(self) -> str:
        """API key when present, otherwise the password."""
        return self.api_key or self.password

    @property
    def is_configured(self) -> bool:
        """Check if url, username and a secret are all present."""
        return bool(
            self.url.strip()
            and self.username.strip()
            and self.secret.strip()
        )


@dataclass
class ArtifactConfig:
    """Where and how the HTML artifact is published."""

    path: Optional[str] = None
    container_id: str = ""

    @property
    def is_enabled(self) -> bool:
        return bool(self.path)


@dataclass
class SyncConfig:
    """Options for a sync run."""

    query: str = "ORDER BY updated DESC"
    limit: int = 1000
    mode: str = "jira"  # jira, manual
    dry_run: bool = False
    verbose: bool = False

    @property
    def is_manual(self) -> bool:
        return self.mode == "manual"


@dataclass
class AppConfig:
    """Complete application configuration."""

    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    artifact: ArtifactConfig = field(default_factory=ArtifactConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    database_path: str = "tickets.db"


class ConfigProviderPort(ABC):
    """Abstract interface for configuration providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a single configuration value."""
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """Validate configuration. Returns a list of error messages."""
        ...
