"""
Ticket Store Port - Abstract interface for the local keyed ticket store.
"""

from abc import ABC, abstractmethod

from ..domain.entities import Ticket


class StoreError(Exception):
    """Base exception for store failures."""

    def __init__(self, message: str, key: str = None):
        super().__init__(message)
        self.key = key


class DuplicateTicketError(StoreError):
    """A ticket with the same key is already stored."""


class TicketNotFoundError(StoreError):
    """No ticket is stored under the key."""


class TicketStorePort(ABC):
    """
    Keyed record store for tickets.

    Each call is atomic on its own; there are no multi-row transactions.
    """

    @abstractmethod
    def load_all(self) -> list[Ticket]:
        """Load every stored ticket."""
        ...

    @abstractmethod
    def add(self, ticket: Ticket) -> None:
        """
        Insert a new ticket.

        Raises:
            DuplicateTicketError: If the key is already stored
        """
        ...

    @abstractmethod
    def update(self, ticket: Ticket) -> None:
        """
        Overwrite all fields of the ticket with the same key.

        Raises:
            TicketNotFoundError: If the key is not stored
        """
        ...

    @abstractmethod
    def delete_by_key(self, key: str) -> bool:
        """Delete a ticket. Returns False if nothing was stored under key."""
        ...

    def snapshot(self) -> dict[str, Ticket]:
        """Load every stored ticket keyed by ticket key."""
        return {ticket.key: ticket for ticket in self.load_all()}
