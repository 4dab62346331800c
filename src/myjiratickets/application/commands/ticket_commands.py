"""
Ticket Commands - Writes against the local ticket store.
"""

from typing import Optional

from ...core.ports.issue_tracker import IssueTrackerPort
from ...core.ports.ticket_store import TicketStorePort
from ...core.domain.entities import Ticket, DEFAULT_TYPE, DEFAULT_PRIORITY
from ...core.domain.value_objects import IssueKey
from ...core.domain.events import EventBus, TicketImported, TicketUpdated
from .base import Command, CommandResult


class InsertTicketCommand(Command):
    """Insert a ticket whose key is not stored yet."""

    def __init__(
        self,
        store: TicketStorePort,
        ticket: Ticket,
        source: str = "jira",
        event_bus: Optional[EventBus] = None,
        dry_run: bool = False,
    ):
        super().__init__(store, event_bus, dry_run)
        self.ticket = ticket
        self.source = source

    @property
    def name(self) -> str:
        return f"insert {self.ticket.key}"

    def validate(self) -> Optional[str]:
        if not self.ticket.key:
            return "Ticket key is required"
        if not self.ticket.summary:
            return f"Summary is required for {self.ticket.key}"
        return None

    def _execute(self) -> CommandResult:
        self.store.add(self.ticket)
        self.logger.info(f"Inserted {self.ticket.key}")
        self._publish(TicketImported(key=self.ticket.key, source=self.source))
        return CommandResult.ok(self.ticket.key)


class UpdateTicketCommand(Command):
    """Overwrite every field of a stored ticket."""

    def __init__(
        self,
        store: TicketStorePort,
        ticket: Ticket,
        changed_fields: tuple = (),
        event_bus: Optional[EventBus] = None,
        dry_run: bool = False,
    ):
        super().__init__(store, event_bus, dry_run)
        self.ticket = ticket
        self.changed_fields = tuple(changed_fields)

    @property
    def name(self) -> str:
        return f"update {self.ticket.key}"

    def validate(self) -> Optional[str]:
        if not self.ticket.key:
            return "Ticket key is required"
        if not self.ticket.summary:
            return f"Summary is required for {self.ticket.key}"
        return None

    def _execute(self) -> CommandResult:
        self.store.update(self.ticket)
        if self.changed_fields:
            self.logger.info(f"Updated {self.ticket.key}: {', '.join(self.changed_fields)}")
        else:
            self.logger.info(f"Updated {self.ticket.key}")
        self._publish(TicketUpdated(key=self.ticket.key, changed_fields=self.changed_fields))
        return CommandResult.ok(self.ticket.key)


class DeleteTicketCommand(Command):
    """Delete a stored ticket by key."""

    def __init__(
        self,
        store: TicketStorePort,
        key: str,
        event_bus: Optional[EventBus] = None,
        dry_run: bool = False,
    ):
        super().__init__(store, event_bus, dry_run)
        self.key = key

    @property
    def name(self) -> str:
        return f"delete {self.key}"

    def validate(self) -> Optional[str]:
        if not self.key:
            return "Ticket key is required"
        return None

    def _execute(self) -> CommandResult:
        if not self.store.delete_by_key(self.key):
            return CommandResult.skip(f"{self.key} is not stored")
        self.logger.info(f"Deleted {self.key}")
        return CommandResult.ok(self.key)


class AddManualTicketCommand(Command):
    """
    Add a ticket entered by hand.

    The key is taken from the pasted link when it contains one
    (e.g. https://x.atlassian.net/browse/PROJ-7), otherwise the given
    name is used as the key. When a tracker is configured the remote
    summary, status, type and priority replace the entered values.
    """

    def __init__(
        self,
        store: TicketStorePort,
        name: str,
        status: str,
        url: str = "",
        issue_type: str = DEFAULT_TYPE,
        priority: str = DEFAULT_PRIORITY,
        tracker: Optional[IssueTrackerPort] = None,
        event_bus: Optional[EventBus] = None,
        dry_run: bool = False,
    ):
        super().__init__(store, event_bus, dry_run)
        self.ticket_name = (name or "").strip()
        self.status = (status or "").strip()
        self.url = (url or "").strip()
        self.issue_type = issue_type or DEFAULT_TYPE
        self.priority = priority or DEFAULT_PRIORITY
        self.tracker = tracker

    @property
    def name(self) -> str:
        return f"add {self.key}"

    @property
    def key(self) -> str:
        found = IssueKey.find(self.url)
        return str(found) if found else self.ticket_name

    def validate(self) -> Optional[str]:
        if not self.ticket_name:
            return "Ticket name is required"
        if not self.status:
            return "Status is required"
        return None

    def build_ticket(self) -> Ticket:
        ticket = Ticket(
            key=self.key,
            url=self.url,
            summary=self.ticket_name,
            status=self.status,
            type=self.issue_type,
            priority=self.priority,
        )

        if self.tracker is not None and self.tracker.is_configured and IssueKey.find(self.url):
            lookup = self.tracker.fetch_one(ticket.key)
            if lookup.success:
                self.logger.info(f"Filled {ticket.key} from {self.tracker.name}")
                ticket = lookup.apply_to(ticket)
            else:
                self.logger.warning(f"Could not look up {ticket.key}: {lookup.error}")

        return ticket

    def _execute(self) -> CommandResult:
        ticket = self.build_ticket()
        self.store.add(ticket)
        self.logger.info(f"Added ticket {ticket.key}")
        self._publish(TicketImported(key=ticket.key, source="manual"))
        return CommandResult.ok(ticket)


class EditTicketCommand(Command):
    """
    Change fields of a stored ticket by hand.

    Only the given fields are replaced; the key itself cannot change.
    """

    EDITABLE_FIELDS = ("summary", "status", "type", "priority", "url")

    def __init__(
        self,
        store: TicketStorePort,
        key: str,
        changes: dict,
        event_bus: Optional[EventBus] = None,
        dry_run: bool = False,
    ):
        super().__init__(store, event_bus, dry_run)
        self.key = (key or "").strip()
        self.changes = {
            field: value.strip() for field, value in changes.items() if value is not None
        }

    @property
    def name(self) -> str:
        return f"edit {self.key}"

    def validate(self) -> Optional[str]:
        if not self.key:
            return "Ticket key is required"
        unknown = sorted(set(self.changes) - set(self.EDITABLE_FIELDS))
        if unknown:
            return f"Cannot edit {', '.join(unknown)}"
        if not self.changes:
            return f"Nothing to change for {self.key}"
        if "summary" in self.changes and not self.changes["summary"]:
            return f"Summary is required for {self.key}"
        if "status" in self.changes and not self.changes["status"]:
            return f"Status is required for {self.key}"
        return None

    def _execute(self) -> CommandResult:
        stored = self.store.snapshot().get(self.key)
        if stored is None:
            return CommandResult.fail(f"{self.key} is not stored")

        edited = stored.copy(**self.changes)
        changed_fields = tuple(edited.changed_fields(stored))
        if edited.url != stored.url:
            changed_fields += ("url",)
        if not changed_fields:
            return CommandResult.skip(f"{self.key} already has these values")

        self.store.update(edited)
        self.logger.info(f"Edited {self.key}: {', '.join(changed_fields)}")
        self._publish(TicketUpdated(key=self.key, changed_fields=changed_fields))
        return CommandResult.ok(edited)
