"""
Command Base - Command pattern for store writes.

Commands wrap a single write so it can be validated, previewed in
dry-run mode, logged and batched.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ...core.ports.ticket_store import TicketStorePort, StoreError
from ...core.domain.events import EventBus


@dataclass
class CommandResult:
    """Result of executing a command."""

    success: bool = True
    data: Any = None
    error: Optional[str] = None
    dry_run: bool = False
    skipped: bool = False
    skip_reason: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, dry_run: bool = False) -> "CommandResult":
        return cls(success=True, data=data, dry_run=dry_run)

    @classmethod
    def fail(cls, error: str) -> "CommandResult":
        return cls(success=False, error=error)

    @classmethod
    def skip(cls, reason: str) -> "CommandResult":
        return cls(success=True, skipped=True, skip_reason=reason)


class Command(ABC):
    """
    Base class for store commands.

    Subclasses implement validate() and _execute().
    """

    def __init__(
        self,
        store: TicketStorePort,
        event_bus: Optional[EventBus] = None,
        dry_run: bool = False,
    ):
        self.store = store
        self.event_bus = event_bus
        self.dry_run = dry_run
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable description of the command."""
        ...

    def validate(self) -> Optional[str]:
        """Return an error message if the command cannot run."""
        return None

    @abstractmethod
    def _execute(self) -> CommandResult:
        ...

    def execute(self) -> CommandResult:
        """Validate and run the command. Store errors become failed results."""
        error = self.validate()
        if error:
            return CommandResult.fail(error)

        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would {self.name}")
            return CommandResult.ok(dry_run=True)

        try:
            return self._execute()
        except StoreError as e:
            self.logger.error(f"Failed to {self.name}: {e}")
            return CommandResult.fail(str(e))

    def _publish(self, event) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)


class CommandBatch:
    """Runs commands in order, optionally stopping at the first failure."""

    def __init__(self, stop_on_error: bool = False):
        self.stop_on_error = stop_on_error
        self.commands: list[Command] = []
        self.results: list[CommandResult] = []

    def add(self, command: Command) -> "CommandBatch":
        self.commands.append(command)
        return self

    def execute_all(self) -> list[CommandResult]:
        self.results = []
        for command in self.commands:
            result = command.execute()
            self.results.append(result)
            if not result.success and self.stop_on_error:
                break
        return self.results

    @property
    def executed_count(self) -> int:
        return sum(1 for r in self.results if r.success and not r.skipped)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def all_succeeded(self) -> bool:
        return all(r.success for r in self.results)

    @property
    def errors(self) -> list[str]:
        return [r.error for r in self.results if not r.success and r.error]
