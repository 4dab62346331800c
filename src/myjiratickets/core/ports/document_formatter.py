"""
Document Formatter Port - Abstract interface for rendering the ticket artifact.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..domain.entities import Ticket


@dataclass
class RenderedArtifact:
    """A rendered artifact and how it was produced."""

    content: str
    mode: str = "full"  # full, patched

    @property
    def is_patch(self) -> bool:
        return self.mode == "patched"


class DocumentFormatterPort(ABC):
    """Abstract interface for artifact formatters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the formatter name."""
        ...

    @abstractmethod
    def render(
        self,
        tickets: list[Ticket],
        existing: Optional[str] = None,
        container_id: str = "",
    ) -> RenderedArtifact:
        """
        Render tickets, patching an existing document when possible.

        Args:
            tickets: Full ticket set
            existing: Current artifact content, if any
            container_id: Element id of the container holding the table

        Returns:
            The patched document, or a complete standalone document
        """
        ...
