"""
Jira Adapter - Implements IssueTrackerPort for Atlassian Jira.

This is the main entry point for Jira integration.
"""

import logging
import threading
from typing import Any, Optional

from ...core.ports.issue_tracker import (
    IssueTrackerPort,
    IssueTrackerError,
    IssueLookup,
    ResponseParseError,
)
from ...core.ports.config_provider import TrackerConfig
from ...core.domain.entities import Ticket, DEFAULT_TYPE, DEFAULT_PRIORITY
from .client import JiraApiClient


def _nested_name(fields: dict, field_name: str, default: str = "") -> str:
    """Read fields[field_name]["name"], tolerating missing or null values."""
    value = fields.get(field_name)
    if not isinstance(value, dict):
        return default
    return value.get("name") or default


class JiraAdapter(IssueTrackerPort):
    """
    Jira implementation of the IssueTrackerPort.

    Translates Jira's issue JSON into canonical tickets.
    """

    DEFAULT_QUERY = "ORDER BY updated DESC"

    def __init__(
        self,
        config: TrackerConfig,
        client: Optional[JiraApiClient] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the Jira adapter.

        Args:
            config: Tracker configuration
            client: Optional preconfigured API client
            cancel_event: Optional event; when set, pending calls stop
        """
        self.config = config
        self.cancel_event = cancel_event
        self.logger = logging.getLogger("JiraAdapter")

        self._client = client or JiraApiClient(
            base_url=config.url,
            username=config.username,
            password=config.password,
            api_key=config.api_key,
            timeout=config.timeout,
        )

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Jira"

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def fetch_all(self, query: str = DEFAULT_QUERY, limit: int = 50) -> list[Ticket]:
        if not self.is_configured:
            self.logger.info("Jira is not configured, nothing fetched")
            return []

        self.logger.info(f"Searching Jira as {self._client.describe_auth()}: {query}")
        data = self._client.search(query, max_results=limit, cancel_event=self.cancel_event)

        issues = data.get("issues")
        if not isinstance(issues, list):
            issues = []

        tickets = []
        for issue in issues:
            ticket = self._parse_issue(issue)
            if ticket is None:
                self.logger.warning("Skipping issue without a key in search response")
                continue
            tickets.append(ticket)

        self.logger.info(f"Fetched {len(tickets)} tickets from Jira")
        return tickets

    def fetch_one(self, issue_key: str) -> IssueLookup:
        if not self.is_configured:
            return IssueLookup.fail("Jira is not configured")

        try:
            data = self._client.get_issue(issue_key, cancel_event=self.cancel_event)
        except ResponseParseError as e:
            return IssueLookup.fail(
                f"Parse error: {e}",
                status_code=e.status_code or 0,
                raw=e.raw_body,
            )
        except IssueTrackerError as e:
            status_code = getattr(e, "status_code", None) or 0
            return IssueLookup.fail(str(e), status_code=status_code)

        fields = data.get("fields")
        if not isinstance(fields, dict):
            return IssueLookup.fail("Response has no fields", status_code=200, raw=str(data))

        return IssueLookup.ok(
            summary=fields.get("summary") or "",
            status=_nested_name(fields, "status"),
            issue_type=_nested_name(fields, "issuetype", DEFAULT_TYPE),
            priority=_nested_name(fields, "priority", DEFAULT_PRIORITY),
        )

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _parse_issue(self, data: dict[str, Any]) -> Optional[Ticket]:
        """Parse one search result into a Ticket. Returns None without a key."""
        if not isinstance(data, dict):
            return None

        key = data.get("key")
        if not isinstance(key, str) or not key.strip():
            return None
        key = key.strip()

        fields = data.get("fields")
        if not isinstance(fields, dict):
            fields = {}

        return Ticket(
            key=key,
            url=self._client.browse_url(key),
            summary=fields.get("summary") or "",
            status=_nested_name(fields, "status"),
            type=_nested_name(fields, "issuetype", DEFAULT_TYPE),
            priority=_nested_name(fields, "priority", DEFAULT_PRIORITY),
        )
