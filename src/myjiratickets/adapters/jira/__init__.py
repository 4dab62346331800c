"""
Jira Adapter - Implementation of IssueTrackerPort for Atlassian Jira.
"""

from .adapter import JiraAdapter
from .client import JiraApiClient, build_basic_auth_header

__all__ = [
    "JiraAdapter",
    "JiraApiClient",
    "build_basic_auth_header",
]
