"""
CLI App - Main entry point for the myjiratickets command line tool.
"""

import argparse
import logging
import sys
from pathlib import Path

from .output import Console, Symbols
from .exit_codes import ExitCode
from .logging import setup_logging
from ..adapters import (
    JiraAdapter,
    HtmlArtifactFile,
    HtmlTableParser,
    SqliteTicketStore,
    EnvironmentConfigProvider,
)
from ..application import (
    SyncOrchestrator,
    FallbackToManual,
    AddManualTicketCommand,
    EditTicketCommand,
    DeleteTicketCommand,
)
from ..core.ports.config_provider import AppConfig
from ..core.ports.document_parser import ParserError
from ..core.ports.ticket_store import StoreError
from ..core.domain.entities import DEFAULT_TYPE, DEFAULT_PRIORITY
from ..core.domain.events import EventBus


DEFAULT_STATUS = "To Do"


def create_parser() -> argparse.ArgumentParser:
    """
    Create the command-line argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="myjiratickets",
        description="Keep a local Jira ticket list and its HTML page in sync",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pull tickets from Jira, update the local store and the HTML page
  myjiratickets --sync

  # Preview what a sync would change
  myjiratickets --sync --dry-run

  # Custom query
  myjiratickets --sync --query "project = ABC ORDER BY updated DESC" --limit 200

  # Import tickets from an existing HTML page (new keys only)
  myjiratickets --import-html start.html

  # Regenerate the HTML page from the local store
  myjiratickets --publish

  # Add a ticket by hand (key taken from the link)
  myjiratickets --add "Fix login" --url https://x.atlassian.net/browse/AB-12 --status "To Do"

  # Change the status of a stored ticket
  myjiratickets --edit AB-12 --status "In Progress"

Environment Variables:
  JIRA_URL              Jira instance URL (e.g., https://company.atlassian.net)
  JIRA_USERNAME         Jira account name or email
  JIRA_API_TOKEN        Jira API token (preferred)
  JIRA_PASSWORD         Jira password (used when no token is set)
  MYJIRA_ARTIFACT_PATH  HTML page to publish
  MYJIRA_CONTAINER_ID   Element id holding the tickets table in that page
  MYJIRA_DATABASE       SQLite database path
        """
    )

    # Actions
    actions = parser.add_argument_group("actions")
    actions.add_argument("--sync", action="store_true", help="Sync tickets from Jira")
    actions.add_argument(
        "--import-html",
        nargs="?",
        const="",
        metavar="PATH",
        help="Import tickets from an HTML page (defaults to the artifact path)",
    )
    actions.add_argument("--publish", action="store_true", help="Write the HTML page from the store")
    actions.add_argument("--list", action="store_true", help="List stored tickets")
    actions.add_argument("--lookup", metavar="KEY", help="Fetch one issue from Jira")
    actions.add_argument("--add", metavar="NAME", help="Add a ticket by hand")
    actions.add_argument("--edit", metavar="KEY", help="Change fields of a stored ticket")
    actions.add_argument("--delete", metavar="KEY", help="Delete a stored ticket")

    # Sync options
    parser.add_argument("--dry-run", action="store_true", help="Show changes without writing")
    parser.add_argument("--query", "-q", type=str, help="JQL query for --sync")
    parser.add_argument("--limit", type=int, help="Maximum tickets to fetch")

    # Manual entry
    parser.add_argument("--summary", type=str, help="New summary for --edit")
    parser.add_argument("--url", type=str, help="Issue link for --add or --edit")
    parser.add_argument("--status", type=str, help=f"Status for --add or --edit (default: {DEFAULT_STATUS})")
    parser.add_argument("--type", dest="issue_type", help=f"Type for --add or --edit (default: {DEFAULT_TYPE})")
    parser.add_argument("--priority", help=f"Priority for --add or --edit (default: {DEFAULT_PRIORITY})")
    parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation prompts")

    # Configuration
    parser.add_argument("--config", "-c", type=str, help="Path to appsettings.json")
    parser.add_argument("--env-file", type=str, help="Path to .env file")
    parser.add_argument("--jira-url", type=str, help="Override Jira URL")
    parser.add_argument("--username", type=str, help="Override Jira username")
    parser.add_argument("--database", type=str, help="Override SQLite database path")
    parser.add_argument("--artifact", type=str, help="Override HTML page path")
    parser.add_argument("--container-id", type=str, help="Override container element id")
    parser.add_argument("--mode", choices=["jira", "manual"], help="Override mode")
    parser.add_argument("--timeout", type=float, help="Seconds to wait for Jira")

    # Output
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--log-file", type=str, help="Also write logs to this file")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    return parser


def build_orchestrator(config: AppConfig, event_bus: EventBus = None) -> SyncOrchestrator:
    """Wire adapters into a SyncOrchestrator."""
    artifact = None
    if config.artifact.is_enabled:
        artifact = HtmlArtifactFile(config.artifact.path, config.artifact.container_id)

    return SyncOrchestrator(
        tracker=JiraAdapter(config.tracker),
        store=SqliteTicketStore(config.database_path),
        artifact=artifact,
        parser=HtmlTableParser(),
        config=config.sync,
        event_bus=event_bus,
    )


def run_sync(console: Console, orchestrator: SyncOrchestrator, args: argparse.Namespace) -> int:
    """Run a sync from Jira."""
    if orchestrator.config.dry_run:
        console.dry_run_banner()

    def progress_callback(phase: str, current: int, total: int) -> None:
        console.progress(current, total, phase)

    result = orchestrator.sync_from_remote(
        query=args.query,
        limit=args.limit,
        progress_callback=progress_callback,
    )

    if isinstance(result, FallbackToManual):
        console.fallback(result)
        tickets = orchestrator.store.load_all()
        console.info(f"{len(tickets)} tickets in the local store")
        return ExitCode.CANCELLED if result.cancelled else ExitCode.FALLBACK

    console.sync_outcome(result)
    return ExitCode.SUCCESS if result.success else ExitCode.ERROR


def run_import_html(console: Console, orchestrator: SyncOrchestrator, path: str) -> int:
    """Import tickets from an HTML page."""
    try:
        count = orchestrator.import_from_html_artifact(path or None)
    except ParserError as e:
        console.error(str(e))
        return ExitCode.FILE_NOT_FOUND
    except ValueError as e:
        console.error(str(e))
        return ExitCode.CONFIG_ERROR

    console.success(f"Imported {count} new tickets")
    return ExitCode.SUCCESS


def run_publish(console: Console, orchestrator: SyncOrchestrator) -> int:
    """Write the HTML page from the store."""
    try:
        result = orchestrator.publish_artifact()
    except OSError as e:
        console.error(f"Could not write artifact: {e}")
        return ExitCode.ERROR

    if result is None:
        console.error("No artifact path configured (set MYJIRA_ARTIFACT_PATH or --artifact)")
        return ExitCode.CONFIG_ERROR

    console.success(f"Generated {result.path} with {result.ticket_count} tickets ({result.mode})")
    return ExitCode.SUCCESS


def run_lookup(console: Console, orchestrator: SyncOrchestrator, key: str) -> int:
    """Fetch one issue and print it."""
    lookup = orchestrator.tracker.fetch_one(key)
    if not lookup.success:
        console.error(f"{key}: {lookup.error}")
        if lookup.raw:
            console.detail(lookup.raw[:500])
        return ExitCode.ERROR

    console.table(["Field", "Value"], [
        ["Key", key],
        ["Summary", lookup.summary],
        ["Status", lookup.status],
        ["Type", lookup.issue_type],
        ["Priority", lookup.priority],
    ])
    return ExitCode.SUCCESS


def run_add(console: Console, orchestrator: SyncOrchestrator, args: argparse.Namespace) -> int:
    """Add a ticket by hand."""
    command = AddManualTicketCommand(
        store=orchestrator.store,
        name=args.add,
        status=args.status or DEFAULT_STATUS,
        url=args.url or "",
        issue_type=args.issue_type,
        priority=args.priority,
        tracker=orchestrator.tracker,
        event_bus=orchestrator.event_bus,
    )
    result = command.execute()
    if not result.success:
        console.error(result.error)
        return ExitCode.ERROR

    console.success(f"Added ticket: {result.data.key}")
    return ExitCode.SUCCESS


def run_edit(console: Console, orchestrator: SyncOrchestrator, args: argparse.Namespace) -> int:
    """Change fields of a stored ticket."""
    command = EditTicketCommand(
        store=orchestrator.store,
        key=args.edit,
        changes={
            "summary": args.summary,
            "status": args.status,
            "type": args.issue_type,
            "priority": args.priority,
            "url": args.url,
        },
        event_bus=orchestrator.event_bus,
    )
    result = command.execute()
    if not result.success:
        console.error(result.error)
        return ExitCode.ERROR
    if result.skipped:
        console.info(result.skip_reason)
        return ExitCode.SUCCESS

    ticket = result.data
    console.success(f"Updated ticket: {ticket.key}")
    console.detail(f"{ticket.status} | {ticket.type} | {ticket.priority} | {ticket.summary}")
    return ExitCode.SUCCESS


def run_delete(console: Console, orchestrator: SyncOrchestrator, args: argparse.Namespace) -> int:
    """Delete a stored ticket."""
    if not args.yes and not console.confirm(f"Delete {args.delete}?"):
        console.info("Nothing deleted")
        return ExitCode.SUCCESS

    result = DeleteTicketCommand(store=orchestrator.store, key=args.delete).execute()
    if not result.success:
        console.error(result.error)
        return ExitCode.ERROR
    if result.skipped:
        console.warning(result.skip_reason)
        return ExitCode.SUCCESS

    console.success(f"Deleted ticket: {args.delete}")
    return ExitCode.SUCCESS


def main() -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args()

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )

    console = Console(color=not args.no_color, verbose=args.verbose)

    config_provider = EnvironmentConfigProvider(
        env_file=Path(args.env_file) if args.env_file else None,
        config_file=Path(args.config) if args.config else None,
        cli_overrides={
            "jira_url": args.jira_url,
            "username": args.username,
            "artifact": args.artifact,
            "container_id": args.container_id,
            "query": args.query,
            "limit": args.limit,
            "timeout": args.timeout,
            "mode": args.mode,
            "database": args.database,
            "dry_run": args.dry_run,
            "verbose": args.verbose,
        },
    )
    errors = config_provider.validate()
    if errors:
        for error in errors:
            console.error(error)
        return ExitCode.CONFIG_ERROR

    config = config_provider.load()
    console.header(f"MyJiraTickets {Symbols.TARGET}")

    try:
        orchestrator = build_orchestrator(config)

        if args.sync:
            return run_sync(console, orchestrator, args)
        if args.import_html is not None:
            return run_import_html(console, orchestrator, args.import_html)
        if args.publish:
            return run_publish(console, orchestrator)
        if args.lookup:
            return run_lookup(console, orchestrator, args.lookup)
        if args.add:
            return run_add(console, orchestrator, args)
        if args.edit:
            return run_edit(console, orchestrator, args)
        if args.delete:
            return run_delete(console, orchestrator, args)

        console.tickets(orchestrator.store.load_all())
        return ExitCode.SUCCESS
    except StoreError as e:
        console.error(f"Ticket store error: {e}")
        return ExitCode.ERROR
    except KeyboardInterrupt:
        console.warning("Interrupted")
        return ExitCode.CANCELLED


def run() -> None:
    """Entry point for console scripts."""
    sys.exit(main())
