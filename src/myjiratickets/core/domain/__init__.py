"""
Domain - Entities, value objects and events.
"""

from .entities import Ticket, DEFAULT_TYPE, DEFAULT_PRIORITY, COMPARABLE_FIELDS
from .value_objects import IssueKey
from .events import (
    DomainEvent,
    EventBus,
    SyncStarted,
    SyncCompleted,
    SyncFellBack,
    TicketImported,
    TicketUpdated,
    ArtifactPublished,
)

__all__ = [
    "Ticket",
    "DEFAULT_TYPE",
    "DEFAULT_PRIORITY",
    "COMPARABLE_FIELDS",
    "IssueKey",
    "DomainEvent",
    "EventBus",
    "SyncStarted",
    "SyncCompleted",
    "SyncFellBack",
    "TicketImported",
    "TicketUpdated",
    "ArtifactPublished",
]
