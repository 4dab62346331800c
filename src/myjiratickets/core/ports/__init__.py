"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .issue_tracker import (
    IssueTrackerPort,
    IssueTrackerError,
    IssueLookup,
    NotConfiguredError,
    TransportError,
    AuthenticationError,
    PermissionError,
    NotFoundError,
    ResponseParseError,
    SyncCancelledError,
)
from .ticket_store import (
    TicketStorePort,
    StoreError,
    DuplicateTicketError,
    TicketNotFoundError,
)
from .document_formatter import DocumentFormatterPort, RenderedArtifact
from .document_parser import DocumentParserPort, ParserError
from .config_provider import (
    ConfigProviderPort,
    AppConfig,
    TrackerConfig,
    ArtifactConfig,
    SyncConfig,
)

__all__ = [
    "IssueTrackerPort",
    "IssueTrackerError",
    "IssueLookup",
    "NotConfiguredError",
    "TransportError",
    "AuthenticationError",
    "PermissionError",
    "NotFoundError",
    "ResponseParseError",
    "SyncCancelledError",
    "TicketStorePort",
    "StoreError",
    "DuplicateTicketError",
    "TicketNotFoundError",
    "DocumentFormatterPort",
    "RenderedArtifact",
    "DocumentParserPort",
    "ParserError",
    "ConfigProviderPort",
    "AppConfig",
    "TrackerConfig",
    "ArtifactConfig",
    "SyncConfig",
]
