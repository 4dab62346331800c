"""
Application Layer - Use cases, commands, and orchestration.

This layer contains:
- commands/: Individual store writes (insert, update, delete, manual add)
- sync/: Reconciliation and the sync orchestrator
"""

from .sync import SyncOrchestrator, SyncOutcome, FallbackToManual, reconcile
from .commands import (
    Command,
    CommandResult,
    CommandBatch,
    InsertTicketCommand,
    UpdateTicketCommand,
    DeleteTicketCommand,
    AddManualTicketCommand,
    EditTicketCommand,
)

__all__ = [
    "SyncOrchestrator",
    "SyncOutcome",
    "FallbackToManual",
    "reconcile",
    "Command",
    "CommandResult",
    "CommandBatch",
    "InsertTicketCommand",
    "UpdateTicketCommand",
    "DeleteTicketCommand",
    "AddManualTicketCommand",
    "EditTicketCommand",
]
