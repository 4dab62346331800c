"""
Document Parser Port - Abstract interface for reading tickets from documents.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from ..domain.entities import Ticket


class ParserError(Exception):
    """Error reading a source document."""

    def __init__(self, message: str, source: str = None):
        super().__init__(message)
        self.source = source


class DocumentParserPort(ABC):
    """Abstract interface for document parsers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the parser name."""
        ...

    @abstractmethod
    def parse_tickets(self, content: str) -> list[Ticket]:
        """Extract tickets from document content. Unusable rows are dropped."""
        ...

    def parse_file(self, path: Union[str, Path]) -> list[Ticket]:
        """Read a file and extract tickets from it."""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ParserError(f"File not found: {path}", source=str(path)) from e
        except OSError as e:
            raise ParserError(f"Cannot read {path}: {e}", source=str(path)) from e
        return self.parse_tickets(content)
