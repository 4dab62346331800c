"""
Reconciler - Decide insert, update or skip for each remote ticket.

Pure and deterministic: no I/O and no state kept between calls. The
caller loads a fresh snapshot of the store for every run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ...core.domain.entities import Ticket


class MutationAction(Enum):
    """Store write a mutation asks for."""

    INSERT = "insert"
    UPDATE = "update"


@dataclass(frozen=True)
class TicketMutation:
    """A store write decided by reconcile()."""

    action: MutationAction
    ticket: Ticket
    changed_fields: tuple = ()

    @property
    def key(self) -> str:
        return self.ticket.key


@dataclass
class SyncOutcome:
    """Counts from one sync."""

    imported: int = 0
    updated: int = 0
    skipped: int = 0
    dry_run: bool = False
    errors: list[str] = field(default_factory=list)
    artifact_path: Optional[str] = None
    artifact_mode: Optional[str] = None

    @property
    def total(self) -> int:
        return self.imported + self.updated + self.skipped

    @property
    def success(self) -> bool:
        return not self.errors

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)


def reconcile(
    remote_tickets: list[Ticket],
    local_by_key: dict[str, Ticket],
) -> tuple[list[TicketMutation], SyncOutcome]:
    """
    Diff remote tickets against the local snapshot.

    Every remote ticket must have a non-empty key; keys are unique within
    one batch. Unknown keys become inserts. Known keys become full-field
    updates when summary, status, type or priority differ, otherwise
    they are skipped. URL differences alone never cause an update.

    Args:
        remote_tickets: Canonical tickets in remote result order
        local_by_key: Current store content keyed by ticket key

    Returns:
        The mutations in remote order and the counts
    """
    mutations: list[TicketMutation] = []
    outcome = SyncOutcome()

    for remote in remote_tickets:
        local = local_by_key.get(remote.key)

        if local is None:
            mutations.append(TicketMutation(MutationAction.INSERT, remote.copy()))
            outcome.imported += 1
            continue

        changed = remote.changed_fields(local)
        if changed:
            mutations.append(
                TicketMutation(MutationAction.UPDATE, remote.copy(), tuple(changed))
            )
            outcome.updated += 1
        else:
            outcome.skipped += 1

    return mutations, outcome
