"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Issue Trackers: Jira
- Formatters: HTML artifact
- Parsers: HTML ticket table
- Artifact: the HTML file on disk
- Stores: SQLite, in-memory
- Config: Environment variables, .env and JSON settings
"""

from .jira import JiraAdapter
from .formatters import HtmlArtifactFormatter
from .parsers import HtmlTableParser
from .artifact import HtmlArtifactFile
from .store import InMemoryTicketStore, SqliteTicketStore
from .config import EnvironmentConfigProvider

__all__ = [
    "JiraAdapter",
    "HtmlArtifactFormatter",
    "HtmlTableParser",
    "HtmlArtifactFile",
    "InMemoryTicketStore",
    "SqliteTicketStore",
    "EnvironmentConfigProvider",
]
