"""
HTML Artifact File - Read and publish the artifact on disk.

The file is read and then rewritten without locking; other writers
touching the same path at the same time may race.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ...core.ports.document_formatter import DocumentFormatterPort
from ...core.ports.document_parser import DocumentParserPort
from ...core.domain.entities import Ticket
from ..formatters.html import HtmlArtifactFormatter
from ..parsers.html_table import HtmlTableParser


@dataclass
class PublishResult:
    """What publish() wrote."""

    path: Path
    mode: str  # full, patched
    ticket_count: int


class HtmlArtifactFile:
    """The HTML artifact at a configured path."""

    def __init__(
        self,
        path: Union[str, Path],
        container_id: str = "",
        formatter: Optional[DocumentFormatterPort] = None,
        parser: Optional[DocumentParserPort] = None,
    ):
        self.path = Path(path)
        self.container_id = container_id or ""
        self.formatter = formatter or HtmlArtifactFormatter()
        self.parser = parser or HtmlTableParser()
        self.logger = logging.getLogger("HtmlArtifactFile")

    @property
    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Optional[str]:
        """Current content, or None if the file does not exist."""
        if not self.exists:
            return None
        return self.path.read_text(encoding="utf-8")

    def render(self, tickets: list[Ticket]):
        """Render against the current file content without writing."""
        return self.formatter.render(
            tickets,
            existing=self.read(),
            container_id=self.container_id,
        )

    def publish(self, tickets: list[Ticket]) -> PublishResult:
        """
        Render tickets and write the artifact.

        Raises:
            OSError: If the file cannot be written
        """
        rendered = self.render(tickets)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(rendered.content, encoding="utf-8")

        self.logger.info(
            f"Wrote {len(tickets)} tickets to {self.path} ({rendered.mode})"
        )
        return PublishResult(path=self.path, mode=rendered.mode, ticket_count=len(tickets))

    def load_tickets(self) -> list[Ticket]:
        """Parse tickets out of the artifact."""
        return self.parser.parse_file(self.path)
