"""
Jira API Client - Low-level HTTP client for Jira REST API.

This handles the raw HTTP communication with Jira.
The JiraAdapter uses this to implement the IssueTrackerPort.

Jira instances expose the REST API under more than one version path.
Every read is tried against each API generation in order until one
answers; auth failures, unreadable bodies and cancellation stop the
sequence early.
"""

import base64
import logging
import threading
from typing import Any, Optional

import requests

from ...core.ports.issue_tracker import (
    IssueTrackerError,
    TransportError,
    AuthenticationError,
    NotFoundError,
    PermissionError,
    ResponseParseError,
    SyncCancelledError,
)


def build_basic_auth_header(username: str, secret: str) -> str:
    """Build an HTTP Basic Authorization header value."""
    token = base64.b64encode(f"{username}:{secret}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class JiraApiClient:
    """
    Low-level Jira REST API client.

    Handles authentication, API-generation fallback and error mapping.
    """

    # Tried in this order
    API_GENERATIONS = ("2", "3")

    # Errors that end the fallback sequence
    TERMINAL_ERRORS = (
        AuthenticationError,
        PermissionError,
        ResponseParseError,
        SyncCancelledError,
    )

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str = "",
        api_key: str = "",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the Jira client.

        Args:
            base_url: Jira instance URL (e.g., https://company.atlassian.net)
            username: User name or email for authentication
            password: Account password, used when no API key is given
            api_key: API token, preferred over the password
            timeout: Seconds to wait for each request
            session: Optional preconfigured requests session
        """
        self.base_url = (base_url or "").strip().rstrip("/")
        self.username = username or ""
        self.timeout = timeout
        self.logger = logging.getLogger("JiraApiClient")

        self._secret = api_key or password or ""
        self._secret_kind = "api key" if api_key else "password"

        self.headers = {"Accept": "application/json"}
        if self.username and self._secret:
            self.headers["Authorization"] = build_basic_auth_header(
                self.username, self._secret
            )

        self._session = session or requests.Session()
        self._session.headers.update(self.headers)

    @property
    def is_configured(self) -> bool:
        """Check if url, username and a secret are all present."""
        return bool(self.base_url and self.username.strip() and self._secret.strip())

    def browse_url(self, issue_key: str) -> str:
        """Link to the issue's page in the Jira UI."""
        return f"{self.base_url}/browse/{issue_key}"

    def api_url(self, generation: str) -> str:
        return f"{self.base_url}/rest/api/{generation}"

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        generation: str,
        endpoint: str,
        **kwargs
    ) -> dict[str, Any]:
        """
        Make an authenticated request against one API generation.

        Args:
            method: HTTP method
            generation: API version path segment ("2" or "3")
            endpoint: API endpoint (e.g., 'issue/PROJ-123')
            **kwargs: Additional arguments for requests

        Returns:
            JSON response as dict

        Raises:
            IssueTrackerError: On API errors
        """
        url = f"{self.api_url(generation)}/{endpoint}"
        kwargs.setdefault("timeout", self.timeout)

        try:
            response = self._session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}", cause=e)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Connection failed: {e}", cause=e)

        return self._handle_response(response, endpoint)

    def get(
        self,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> dict[str, Any]:
        """
        GET an endpoint, falling back through the API generations.

        Raises:
            IssueTrackerError: The terminal error, or the last error once
                every generation has failed
        """
        last_error: Optional[IssueTrackerError] = None

        for generation in self.API_GENERATIONS:
            if cancel_event is not None and cancel_event.is_set():
                raise SyncCancelledError("Request cancelled")

            try:
                data = self.request("GET", generation, endpoint, params=params)
                self.logger.debug(f"GET {endpoint} answered by API v{generation}")
                return data
            except self.TERMINAL_ERRORS:
                raise
            except IssueTrackerError as e:
                self.logger.warning(f"API v{generation} failed for {endpoint}: {e}")
                last_error = e

        raise last_error

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(
        self,
        response: requests.Response,
        endpoint: str
    ) -> dict[str, Any]:
        """Handle API response and errors."""
        status = response.status_code

        if response.ok:
            if not response.text:
                return {}
            try:
                data = response.json()
            except ValueError as e:
                raise ResponseParseError(
                    f"Invalid JSON from {endpoint}: {e}",
                    raw_body=response.text,
                    status_code=status,
                    cause=e,
                )
            if not isinstance(data, dict):
                raise ResponseParseError(
                    f"Expected a JSON object from {endpoint}, got {type(data).__name__}",
                    raw_body=response.text,
                    status_code=status,
                )
            return data

        error_body = response.text[:500] if response.text else ""

        if status == 401:
            raise AuthenticationError(
                "Authentication failed. Check the username and API key or password."
            )

        if status == 403:
            raise PermissionError(
                f"Permission denied for {endpoint}",
                issue_key=endpoint
            )

        if status == 404:
            raise NotFoundError(
                f"Not found: {endpoint}",
                status_code=status,
                issue_key=endpoint
            )

        raise TransportError(
            f"API error {status}: {error_body}",
            status_code=status,
            issue_key=endpoint
        )

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def search(
        self,
        jql: str,
        max_results: int = 50,
        cancel_event: Optional[threading.Event] = None,
    ) -> dict[str, Any]:
        """Execute a JQL search."""
        return self.get(
            "search",
            params={"jql": jql, "maxResults": max_results},
            cancel_event=cancel_event,
        )

    def get_issue(
        self,
        issue_key: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> dict[str, Any]:
        """Fetch a single issue."""
        return self.get(f"issue/{issue_key}", cancel_event=cancel_event)

    def describe_auth(self) -> str:
        """Credential summary safe for logs."""
        return f"{self.username} ({self._secret_kind})"
