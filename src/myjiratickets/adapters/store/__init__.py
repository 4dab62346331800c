"""
Ticket Stores - Implementations of TicketStorePort.
"""

from .memory import InMemoryTicketStore
from .sqlite import SqliteTicketStore

__all__ = ["InMemoryTicketStore", "SqliteTicketStore"]
