"""
Value Objects - Immutable identifiers.
"""

import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class IssueKey:
    """A Jira issue key such as PROJ-123."""

    value: str

    PATTERN = re.compile(r"([A-Z]+-\d+)")

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("Issue key cannot be empty")

    @property
    def project(self) -> str:
        """Project part of the key (before the dash)."""
        return self.value.split("-")[0]

    @classmethod
    def find(cls, text: str) -> Optional["IssueKey"]:
        """Find the first issue key in text, e.g. a browse URL."""
        if not text:
            return None
        match = cls.PATTERN.search(text)
        if match:
            return cls(match.group(1))
        return None

    def __str__(self) -> str:
        return self.value
