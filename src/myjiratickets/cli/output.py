"""
Output - Console output for the ticket CLI.

Status lines, ticket tables and sync summaries, colored when stdout is a
terminal.
"""

import sys

from ..application.sync import SyncOutcome, FallbackToManual
from ..core.domain.entities import Ticket


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"

    BG_YELLOW = "\033[43m"


class Symbols:
    """Unicode symbols for output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    WARN = "⚠"
    INFO = "ℹ"
    GEAR = "⚙"
    TARGET = "🎯"

    BOX_H = "─"


SUMMARY_WIDTH = 60


class Console:
    """Writes CLI output, with ANSI colors when enabled and on a tty."""

    def __init__(self, color: bool = True, verbose: bool = False, stream=None):
        self.stream = stream or sys.stdout
        self.color = color and self.stream.isatty()
        self.verbose = verbose

    def style(self, text: str, *codes: str) -> str:
        if not self.color or not codes:
            return text
        return f"{''.join(codes)}{text}{Colors.RESET}"

    def print(self, text: str = "") -> None:
        self.stream.write(f"{text}\n")

    def _status_line(self, symbol: str, color: str, text: str) -> None:
        self.print(self.style(f"  {symbol} {text}", color))

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def header(self, text: str) -> None:
        rule = Symbols.BOX_H if self.color else "="
        line = rule * max(len(text) + 4, 50)

        self.print()
        self.print(self.style(line, Colors.CYAN))
        self.print(self.style(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(self.style(line, Colors.CYAN))
        self.print()

    def section(self, text: str) -> None:
        self.print()
        self.print(self.style(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        self._status_line(Symbols.CHECK, Colors.GREEN, text)

    def error(self, text: str) -> None:
        self._status_line(Symbols.CROSS, Colors.RED, text)

    def warning(self, text: str) -> None:
        self._status_line(Symbols.WARN, Colors.YELLOW, text)

    def info(self, text: str) -> None:
        self._status_line(Symbols.INFO, Colors.CYAN, text)

    def detail(self, text: str) -> None:
        """Indented, dimmed secondary text."""
        self.print(self.style(f"    {text}", Colors.DIM))

    def debug(self, text: str) -> None:
        """Only shown with --verbose."""
        if self.verbose:
            self.detail(text)

    # -------------------------------------------------------------------------
    # Tables and progress
    # -------------------------------------------------------------------------

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Left-aligned columns sized to the widest cell."""
        columns = list(zip(headers, *rows)) if rows else [(h,) for h in headers]
        widths = [max(len(str(cell)) for cell in column) for column in columns]

        def render(cells, *codes):
            padded = [str(cell).ljust(width) for cell, width in zip(cells, widths)]
            return "  " + self.style("  ".join(padded).rstrip(), *codes)

        self.print(render(headers, Colors.BOLD))
        self.print("  " + "  ".join("-" * width for width in widths))
        for row in rows:
            self.print(render(row))

    def progress(self, current: int, total: int, message: str = "") -> None:
        """Single-line phase indicator, e.g. [2/4] Reconciling."""
        self.stream.write(f"\r  [{current}/{total}] {message:<20}")
        self.stream.flush()
        if current >= total:
            self.print()

    def dry_run_banner(self) -> None:
        text = f"{Symbols.GEAR} DRY-RUN: the store and the HTML page will not be written"
        self.print()
        self.print(self.style(f"  {text}  ", Colors.BG_YELLOW, Colors.BOLD) if self.color else f"  [{text}]")
        self.print()

    # -------------------------------------------------------------------------
    # Domain output
    # -------------------------------------------------------------------------

    def tickets(self, tickets: list[Ticket]) -> None:
        """Stored tickets ordered by key."""
        if not tickets:
            self.info("No tickets stored yet")
            return

        rows = []
        for ticket in sorted(tickets, key=lambda t: t.key):
            summary = ticket.summary
            if len(summary) > SUMMARY_WIDTH:
                summary = summary[:SUMMARY_WIDTH - 3] + "..."

            rows.append([ticket.key, ticket.status, ticket.type, ticket.priority, summary])

        self.table(["Key", "Status", "Type", "Priority", "Summary"], rows)
        self.print()
        self.detail(f"{len(tickets)} tickets")

    def sync_outcome(self, outcome: SyncOutcome) -> None:
        self.section("Sync finished")
        self.print()
        self.table(["", "Tickets"], [
            ["New", str(outcome.imported)],
            ["Updated", str(outcome.updated)],
            ["Unchanged", str(outcome.skipped)],
        ])
        self.print()

        if outcome.dry_run:
            self.info("Dry run, nothing was written")
        elif outcome.artifact_path:
            self.info(f"HTML page: {outcome.artifact_path} ({outcome.artifact_mode})")

        for message in outcome.errors:
            self.error(message)

        if outcome.success:
            self.success(
                f"{outcome.imported} new, {outcome.updated} updated, "
                f"{outcome.skipped} unchanged"
            )

    def fallback(self, fallback: FallbackToManual) -> None:
        """Explain why the sync fell back to local tickets."""
        self.warning(f"Working with local tickets only: {fallback.reason}")
        if fallback.error_type:
            self.debug(f"({fallback.error_type})")

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; anything but y/yes is no."""
        try:
            answer = input(self.style(f"\n{Symbols.WARN} {message} [y/N] ", Colors.YELLOW))
        except (EOFError, KeyboardInterrupt):
            self.print()
            return False
        return answer.strip().lower() in ("y", "yes")
