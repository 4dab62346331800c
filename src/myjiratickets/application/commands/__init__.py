"""
Commands - Individual operations that can be executed.

Commands represent write operations and can be:
- Executed
- Previewed in dry-run mode
- Logged for audit
"""

from .base import Command, CommandResult, CommandBatch
from .ticket_commands import (
    InsertTicketCommand,
    UpdateTicketCommand,
    DeleteTicketCommand,
    AddManualTicketCommand,
    EditTicketCommand,
)

__all__ = [
    "Command",
    "CommandResult",
    "CommandBatch",
    "InsertTicketCommand",
    "UpdateTicketCommand",
    "DeleteTicketCommand",
    "AddManualTicketCommand",
    "EditTicketCommand",
]
