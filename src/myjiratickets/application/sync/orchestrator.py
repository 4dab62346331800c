"""
Sync Orchestrator - Coordinates the synchronization process.

This is the main entry point for sync operations.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

from ...core.ports.issue_tracker import (
    IssueTrackerPort,
    IssueTrackerError,
    SyncCancelledError,
)
from ...core.ports.ticket_store import TicketStorePort
from ...core.ports.document_parser import DocumentParserPort
from ...core.ports.config_provider import SyncConfig
from ...core.domain.events import (
    EventBus,
    SyncStarted,
    SyncCompleted,
    SyncFellBack,
    ArtifactPublished,
)
from ..commands import (
    CommandBatch,
    InsertTicketCommand,
    UpdateTicketCommand,
)
from .reconciler import MutationAction, SyncOutcome, TicketMutation, reconcile


@dataclass
class FallbackToManual:
    """The tracker could not be used; the local store was left untouched."""

    reason: str
    error_type: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self.error_type == SyncCancelledError.__name__


class SyncOrchestrator:
    """
    Orchestrates the synchronization between Jira, the local store
    and the HTML artifact.

    Phases:
    1. Fetch tickets from the tracker
    2. Reconcile them against a fresh store snapshot
    3. Apply inserts and updates to the store, one row at a time
    4. Publish the artifact from the refreshed store

    Only one sync may run against a store at a time; callers must not
    start a second one while the first is in flight.
    """

    def __init__(
        self,
        tracker: IssueTrackerPort,
        store: TicketStorePort,
        artifact: Optional[Any] = None,
        config: Optional[SyncConfig] = None,
        parser: Optional[DocumentParserPort] = None,
        event_bus: Optional[EventBus] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            tracker: Issue tracker port
            store: Local ticket store
            artifact: Optional HtmlArtifactFile to publish after each sync
            config: Sync configuration
            parser: Parser for HTML imports (defaults to the artifact's)
            event_bus: Optional event bus
            cancel_event: Optional event checked before store writes
        """
        self.tracker = tracker
        self.store = store
        self.artifact = artifact
        self.config = config or SyncConfig()
        self.parser = parser or getattr(artifact, "parser", None)
        self.event_bus = event_bus or EventBus()
        self.cancel_event = cancel_event
        self.logger = logging.getLogger("SyncOrchestrator")

    # -------------------------------------------------------------------------
    # Main Entry Points
    # -------------------------------------------------------------------------

    def sync_from_remote(
        self,
        query: Optional[str] = None,
        limit: Optional[int] = None,
        dry_run: Optional[bool] = None,
        progress_callback: Optional[Callable[[str, int, int], None]] = None,
    ) -> Union[SyncOutcome, FallbackToManual]:
        """
        Pull tickets from the tracker into the store and republish the artifact.

        Args:
            query: JQL query (defaults to the configured one)
            limit: Maximum number of tickets (defaults to the configured one)
            dry_run: Only count, don't write (defaults to the configured flag)
            progress_callback: Optional callback for progress updates

        Returns:
            SyncOutcome, or FallbackToManual when the tracker cannot be used
        """
        query = query or self.config.query
        if limit is None:
            limit = self.config.limit
        dry_run = self.config.dry_run if dry_run is None else dry_run

        if self.config.is_manual:
            return self._fall_back("Manual mode is selected")

        if not self.tracker.is_configured:
            return self._fall_back(
                f"{self.tracker.name} is not configured",
                "NotConfiguredError",
            )

        self.event_bus.publish(SyncStarted(query=query, limit=limit, dry_run=dry_run))

        # Phase 1: Fetch
        self._report_progress(progress_callback, "Fetching", 1, 4)
        try:
            remote_tickets = self.tracker.fetch_all(query, limit)
        except SyncCancelledError as e:
            return self._fall_back(f"Sync cancelled: {e}", type(e).__name__)
        except IssueTrackerError as e:
            return self._fall_back(str(e), type(e).__name__)

        if self._is_cancelled():
            return self._fall_back("Sync cancelled", SyncCancelledError.__name__)

        # Phase 2: Reconcile
        self._report_progress(progress_callback, "Reconciling", 2, 4)
        mutations, outcome = reconcile(remote_tickets, self.store.snapshot())
        outcome.dry_run = dry_run
        self.logger.info(
            f"{outcome.imported} new, {outcome.updated} changed, "
            f"{outcome.skipped} unchanged"
        )

        # Phase 3: Apply
        self._report_progress(progress_callback, "Applying", 3, 4)
        self.apply_mutations(mutations, outcome, dry_run=dry_run)

        # Phase 4: Publish
        self._report_progress(progress_callback, "Publishing", 4, 4)
        if not dry_run:
            self._publish_into(outcome)

        self.event_bus.publish(SyncCompleted(
            imported=outcome.imported,
            updated=outcome.updated,
            skipped=outcome.skipped,
            errors=list(outcome.errors),
        ))

        return outcome

    def import_from_html_artifact(self, path: Optional[Union[str, Path]] = None) -> int:
        """
        Add tickets found in an HTML artifact to the store.

        Only keys that are not stored yet are added; existing tickets are
        never updated from HTML.

        Args:
            path: Artifact to read (defaults to the configured artifact)

        Returns:
            Number of tickets added

        Raises:
            ParserError: If the file cannot be read
        """
        if self.parser is None:
            raise ValueError("No HTML parser configured")

        if path is None:
            if self.artifact is None:
                raise ValueError("No artifact path given or configured")
            path = self.artifact.path

        parsed = self.parser.parse_file(path)
        known = set(self.store.snapshot())

        batch = CommandBatch(stop_on_error=False)
        for ticket in parsed:
            if ticket.key in known:
                self.logger.debug(f"{ticket.key} already stored, skipping")
                continue
            known.add(ticket.key)
            batch.add(InsertTicketCommand(
                store=self.store,
                ticket=ticket,
                source="html",
                event_bus=self.event_bus,
            ))

        batch.execute_all()
        for error in batch.errors:
            self.logger.error(error)

        self.logger.info(f"Imported {batch.executed_count} of {len(parsed)} tickets from {path}")
        return batch.executed_count

    def publish_artifact(self):
        """
        Write the artifact from the current store content.

        Returns:
            PublishResult, or None when no artifact is configured

        Raises:
            OSError: If the file cannot be written
        """
        if self.artifact is None:
            self.logger.info("No artifact path configured, nothing published")
            return None

        result = self.artifact.publish(self.store.load_all())
        self.event_bus.publish(ArtifactPublished(
            path=str(result.path),
            mode=result.mode,
            ticket_count=result.ticket_count,
        ))
        return result

    def apply_mutations(
        self,
        mutations: list[TicketMutation],
        outcome: SyncOutcome,
        dry_run: bool = False,
    ) -> None:
        """Apply mutations in order. Failures are recorded and the rest still run."""
        batch = CommandBatch(stop_on_error=False)

        for mutation in mutations:
            if mutation.action is MutationAction.INSERT:
                batch.add(InsertTicketCommand(
                    store=self.store,
                    ticket=mutation.ticket,
                    source="jira",
                    event_bus=self.event_bus,
                    dry_run=dry_run,
                ))
            else:
                batch.add(UpdateTicketCommand(
                    store=self.store,
                    ticket=mutation.ticket,
                    changed_fields=mutation.changed_fields,
                    event_bus=self.event_bus,
                    dry_run=dry_run,
                ))

        batch.execute_all()
        for error in batch.errors:
            outcome.add_error(error)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _publish_into(self, outcome: SyncOutcome) -> None:
        try:
            result = self.publish_artifact()
        except OSError as e:
            self.logger.error(f"Could not write artifact: {e}")
            outcome.add_error(f"Could not write artifact: {e}")
            return

        if result is not None:
            outcome.artifact_path = str(result.path)
            outcome.artifact_mode = result.mode

    def _fall_back(self, reason: str, error_type: Optional[str] = None) -> FallbackToManual:
        self.logger.warning(f"Falling back to local tickets: {reason}")
        self.event_bus.publish(SyncFellBack(reason=reason, error_type=error_type))
        return FallbackToManual(reason=reason, error_type=error_type)

    def _is_cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _report_progress(
        self,
        callback: Optional[Callable],
        phase: str,
        current: int,
        total: int
    ) -> None:
        """Report progress to callback if provided."""
        if callback:
            callback(phase, current, total)
        self.logger.info(f"Phase {current}/{total}: {phase}")
