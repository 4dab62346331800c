"""
Domain Events - Records of what a sync or a manual edit did.

Commands and the orchestrator publish these on an EventBus; the CLI and
tests read them back from the bus history.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Common identity and time of every event."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def event_type(self) -> str:
        return self.__class__.__name__


@dataclass(frozen=True)
class SyncStarted(DomainEvent):
    """Event: A sync from the tracker started."""

    query: str = ""
    limit: int = 0
    dry_run: bool = False


@dataclass(frozen=True)
class TicketImported(DomainEvent):
    """Event: A ticket was added to the local store."""

    key: str = ""
    source: str = "jira"  # jira, html, manual


@dataclass(frozen=True)
class TicketUpdated(DomainEvent):
    """Event: A stored ticket was overwritten."""

    key: str = ""
    changed_fields: tuple = ()


@dataclass(frozen=True)
class SyncCompleted(DomainEvent):
    """Event: A sync from the tracker completed."""

    imported: int = 0
    updated: int = 0
    skipped: int = 0
    errors: list = field(default_factory=list)


@dataclass(frozen=True)
class SyncFellBack(DomainEvent):
    """Event: A sync gave up on the tracker and left the store untouched."""

    reason: str = ""
    error_type: Optional[str] = None


@dataclass(frozen=True)
class ArtifactPublished(DomainEvent):
    """Event: The HTML artifact was written."""

    path: str = ""
    mode: str = "full"  # full, patched
    ticket_count: int = 0


class EventBus:
    """
    Dispatches domain events to subscribed handlers in publish order.

    Handlers registered for DomainEvent receive every event. Every
    published event is kept so a run can be inspected afterwards.
    """

    def __init__(self):
        self._handlers: dict[type, list[Callable]] = {}
        self._history: list[DomainEvent] = []

    def subscribe(self, event_type: type, handler: Callable) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: type, handler: Callable) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: DomainEvent) -> None:
        self._history.append(event)

        targets = list(self._handlers.get(type(event), []))
        if type(event) is not DomainEvent:
            targets += self._handlers.get(DomainEvent, [])
        for handler in targets:
            handler(event)

    def get_history(self, event_type: Optional[type] = None) -> list[DomainEvent]:
        """Published events, optionally only those of one type."""
        if event_type is None:
            return list(self._history)
        return [e for e in self._history if isinstance(e, event_type)]

    def clear_history(self) -> None:
        self._history.clear()
