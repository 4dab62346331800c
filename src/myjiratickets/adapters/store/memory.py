"""
In-Memory Ticket Store - Dict-backed store for tests and dry runs.
"""

from ...core.ports.ticket_store import (
    TicketStorePort,
    DuplicateTicketError,
    TicketNotFoundError,
)
from ...core.domain.entities import Ticket


class InMemoryTicketStore(TicketStorePort):
    """Keeps tickets in insertion order in a dict."""

    def __init__(self, tickets: list[Ticket] = None):
        self._tickets: dict[str, Ticket] = {}
        for ticket in tickets or []:
            self.add(ticket)

    def load_all(self) -> list[Ticket]:
        return [ticket.copy() for ticket in self._tickets.values()]

    def add(self, ticket: Ticket) -> None:
        if ticket.key in self._tickets:
            raise DuplicateTicketError(f"Ticket {ticket.key} already exists", key=ticket.key)
        self._tickets[ticket.key] = ticket.copy()

    def update(self, ticket: Ticket) -> None:
        if ticket.key not in self._tickets:
            raise TicketNotFoundError(f"Ticket {ticket.key} not found", key=ticket.key)
        self._tickets[ticket.key] = ticket.copy()

    def delete_by_key(self, key: str) -> bool:
        return self._tickets.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._tickets)
