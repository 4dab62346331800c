"""
Issue Tracker Port - Abstract interface for the remote issue tracker.

Also defines the error taxonomy used by tracker adapters:

- NotConfiguredError: credentials missing, nothing was sent
- TransportError: network failure, timeout or unexpected HTTP status
- AuthenticationError / PermissionError: 401 / 403, never retried
- NotFoundError: 404
- ResponseParseError: success status but unreadable body, never retried
- SyncCancelledError: the caller cancelled the operation
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..domain.entities import Ticket, DEFAULT_TYPE, DEFAULT_PRIORITY


# -------------------------------------------------------------------------
# Exceptions
# -------------------------------------------------------------------------

class IssueTrackerError(Exception):
    """Base exception for issue tracker errors."""

    def __init__(
        self,
        message: str,
        issue_key: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.issue_key = issue_key
        self.cause = cause


class NotConfiguredError(IssueTrackerError):
    """Required connection settings are missing."""


class TransportError(IssueTrackerError):
    """Request failed on the wire or with an unexpected status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        issue_key: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, issue_key=issue_key, cause=cause)
        self.status_code = status_code


class AuthenticationError(IssueTrackerError):
    """Credentials were rejected (HTTP 401)."""

    status_code = 401


class PermissionError(IssueTrackerError):
    """Access was denied (HTTP 403)."""

    status_code = 403


class NotFoundError(TransportError):
    """Resource not found (HTTP 404)."""


class ResponseParseError(IssueTrackerError):
    """A success response carried a body that could not be decoded."""

    def __init__(
        self,
        message: str,
        raw_body: str = "",
        status_code: Optional[int] = None,
        issue_key: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, issue_key=issue_key, cause=cause)
        self.raw_body = raw_body
        self.status_code = status_code


class SyncCancelledError(IssueTrackerError):
    """The caller cancelled the operation."""


# -------------------------------------------------------------------------
# Data Transfer Objects
# -------------------------------------------------------------------------

@dataclass
class IssueLookup:
    """Outcome of fetching a single issue."""

    success: bool
    summary: Optional[str] = None
    status: Optional[str] = None
    issue_type: Optional[str] = None
    priority: Optional[str] = None
    error: Optional[str] = None
    status_code: int = 0
    raw: Optional[str] = None

    @classmethod
    def ok(
        cls,
        summary: str,
        status: str,
        issue_type: str = DEFAULT_TYPE,
        priority: str = DEFAULT_PRIORITY,
        status_code: int = 200,
    ) -> "IssueLookup":
        return cls(
            success=True,
            summary=summary,
            status=status,
            issue_type=issue_type,
            priority=priority,
            status_code=status_code,
        )

    @classmethod
    def fail(
        cls,
        error: str,
        status_code: int = 0,
        raw: Optional[str] = None,
    ) -> "IssueLookup":
        return cls(success=False, error=error, status_code=status_code, raw=raw)

    def apply_to(self, ticket: Ticket) -> Ticket:
        """Overwrite the ticket's remote-owned fields with this result."""
        if not self.success:
            return ticket
        return ticket.copy(
            summary=self.summary or ticket.summary,
            status=self.status or ticket.status,
            type=self.issue_type or DEFAULT_TYPE,
            priority=self.priority or DEFAULT_PRIORITY,
        )


# -------------------------------------------------------------------------
# Port Interface
# -------------------------------------------------------------------------

class IssueTrackerPort(ABC):
    """
    Abstract interface for issue tracker operations.

    Implementations return canonical Ticket objects whose url points
    at the tracker's browse page for the key.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the tracker name (e.g., 'Jira')."""
        ...

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Check if every setting needed to reach the tracker is present."""
        ...

    @abstractmethod
    def fetch_all(self, query: str, limit: int) -> list[Ticket]:
        """
        Fetch tickets matching a query.

        Returns an empty list when the tracker is not configured.

        Raises:
            IssueTrackerError: On transport, auth, parse failure or cancellation
        """
        ...

    @abstractmethod
    def fetch_one(self, issue_key: str) -> IssueLookup:
        """Fetch a single issue. Never raises for remote failures."""
        ...
