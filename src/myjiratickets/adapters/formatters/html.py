"""
HTML Formatter - Render the ticket set as the published HTML artifact.

Produces either a patch of an existing page (only the inner content of
the tickets table inside a marked container is replaced) or a complete
standalone page with header, stats, table and footer.
"""

import html
import logging
import re
from datetime import datetime
from string import Template
from typing import Optional

from ...core.ports.document_formatter import DocumentFormatterPort, RenderedArtifact
from ...core.domain.entities import Ticket


# Status slug -> badge CSS class. Unknown slugs get no class.
STATUS_STYLES = {
    "to-do": "status-todo",
    "refinement": "status-refinement",
    "in-progress": "status-in-progress",
    "waiting-for-deploy": "status-waiting-for-deploy",
    "in-test": "status-in-test",
    "test-succeeded": "status-test-succeeded",
    "test-failed": "status-test-failed",
    "done": "status-done",
    "canceled": "status-canceled",
    "on-hold": "status-on-hold",
}

TABLE_CLASS = "tickets-table"


def status_slug(status: Optional[str]) -> str:
    """Lower-case the status and replace spaces with hyphens."""
    return (status or "").lower().replace(" ", "-")


def status_css_class(status: Optional[str]) -> str:
    """Badge CSS class for a status label."""
    return STATUS_STYLES.get(status_slug(status), "")


DOCUMENT_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>$title</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            margin: 0;
            padding: 20px;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            min-height: 100vh;
        }
        .container {
            max-width: 1200px;
            margin: 0 auto;
            background: white;
            border-radius: 15px;
            box-shadow: 0 20px 40px rgba(0,0,0,0.1);
            overflow: hidden;
        }
        .header {
            background: linear-gradient(45deg, #2196F3, #21CBF3);
            color: white;
            padding: 30px;
            text-align: center;
        }
        .header h1 { margin: 0; font-size: 2.5em; font-weight: 300; }
        .stats {
            padding: 20px 30px;
            background: #f8f9fa;
            display: flex;
            justify-content: space-around;
            flex-wrap: wrap;
        }
        .stat-item { text-align: center; margin: 10px; }
        .stat-number { font-size: 2em; font-weight: bold; color: #2196F3; }
        .stat-label { color: #666; font-size: 0.9em; }
        .tickets-table { width: 100%; border-collapse: collapse; margin: 0; }
        .tickets-table th {
            background: #2196F3;
            color: white;
            padding: 15px;
            text-align: left;
            font-weight: 500;
        }
        .tickets-table td {
            padding: 12px 15px;
            border-bottom: 1px solid #eee;
            vertical-align: middle;
        }
        .tickets-table td:first-child { white-space: nowrap; }
        .tickets-table tr:hover { background: #f8f9fa; }
        .ticket-key { font-weight: bold; color: #2196F3; text-decoration: none; }
        .ticket-key:hover { text-decoration: underline; }
        .status-badge {
            padding: 6px 12px;
            border-radius: 20px;
            font-size: 0.85em;
            font-weight: 500;
            text-align: center;
            min-width: 100px;
            display: inline-block;
        }
        .status-todo { background: #ffd700; color: #000; }
        .status-refinement { background: #e3f2fd; color: #1976d2; }
        .status-in-progress { background: #0c9073; color: #fff; }
        .status-waiting-for-deploy { background: #726e6e; color: #fff; }
        .status-in-test { background: #85c50e; color: #000; }
        .status-test-succeeded { background: #0c9073; color: #ffff00; }
        .status-test-failed { background: #f44336; color: #fff; }
        .status-done { background: transparent; color: #4caf50; font-weight: bold; }
        .status-canceled { background: #9e9e9e; color: #fff; }
        .status-on-hold { background: #3b02f7; color: #fbff1c; }
        .footer { padding: 20px; text-align: center; color: #666; font-size: 0.9em; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>&#127919; $title</h1>
            <p>Last updated: $updated</p>
        </div>
$stats
        <table class="tickets-table">$table
        </table>
        <div class="footer">
            Generated by MyJiraTickets Ticket Manager
        </div>
    </div>
</body>
</html>
""")


class HtmlArtifactFormatter(DocumentFormatterPort):
    """
    Renders tickets into the HTML artifact.

    Rows are ordered by key. Text is HTML-escaped so the table can be
    read back by HtmlTableParser.
    """

    TITLE = "My Jobs - Ticket Status"
    TABLE_PATTERN = re.compile(
        r"<table\b[^>]*\bclass\s*=\s*[\"']" + TABLE_CLASS + r"[\"'][^>]*>(.*?)</table>",
        re.DOTALL | re.IGNORECASE,
    )

    def __init__(self, title: Optional[str] = None, clock=datetime.now):
        self.title = title or self.TITLE
        self._clock = clock
        self.logger = logging.getLogger("HtmlArtifactFormatter")

    @property
    def name(self) -> str:
        return "HTML"

    # -------------------------------------------------------------------------
    # DocumentFormatterPort Implementation
    # -------------------------------------------------------------------------

    def render(
        self,
        tickets: list[Ticket],
        existing: Optional[str] = None,
        container_id: str = "",
    ) -> RenderedArtifact:
        if existing is not None and container_id:
            patched = self.inject(existing, container_id, tickets)
            if patched is not None:
                return RenderedArtifact(content=patched, mode="patched")
            self.logger.info(
                f"Container '{container_id}' with a {TABLE_CLASS} table not found, "
                "writing a full document"
            )

        return RenderedArtifact(content=self.render_document(tickets), mode="full")

    # -------------------------------------------------------------------------
    # Building Blocks
    # -------------------------------------------------------------------------

    def render_rows(self, tickets: list[Ticket]) -> str:
        """One <tr> per ticket, ordered by key."""
        rows = []
        for ticket in sorted(tickets, key=lambda t: t.key):
            key = html.escape(ticket.key)
            if ticket.url:
                key_cell = (
                    f'<a href="{html.escape(ticket.url, quote=True)}" '
                    f'class="ticket-key" target="_blank">{key}</a>'
                )
            else:
                key_cell = f'<span class="ticket-key">{key}</span>'

            badge_class = f"status-badge {status_css_class(ticket.status)}".strip()

            rows.append(
                "\n                <tr>"
                f"\n                    <td>{key_cell}</td>"
                f"\n                    <td>{html.escape(ticket.summary)}</td>"
                f'\n                    <td><span class="{badge_class}">'
                f"{html.escape(ticket.status)}</span></td>"
                "\n                </tr>"
            )
        return "".join(rows)

    def render_table_content(self, tickets: list[Ticket]) -> str:
        """Inner content of the tickets table (head and body)."""
        return (
            "\n            <thead>"
            "\n                <tr>"
            "\n                    <th>Ticket</th>"
            "\n                    <th>Summary</th>"
            "\n                    <th>Status</th>"
            "\n                </tr>"
            "\n            </thead>"
            "\n            <tbody>"
            f"{self.render_rows(tickets)}"
            "\n            </tbody>"
        )

    def render_table(self, tickets: list[Ticket]) -> str:
        """The complete tickets table element."""
        return (
            f'<table class="{TABLE_CLASS}">'
            f"{self.render_table_content(tickets)}"
            "\n        </table>"
        )

    def count_stats(self, tickets: list[Ticket]) -> dict[str, int]:
        """Totals shown in the stats block (exact status matches)."""
        return {
            "total": len(tickets),
            "in_progress": sum(1 for t in tickets if t.status == "In Progress"),
            "done": sum(1 for t in tickets if t.status == "Done"),
        }

    def render_stats(self, tickets: list[Ticket]) -> str:
        stats = self.count_stats(tickets)
        items = [
            (stats["total"], "Total Tickets"),
            (stats["in_progress"], "In Progress"),
            (stats["done"], "Done"),
        ]
        lines = ['        <div class="stats">']
        for number, label in items:
            lines.append('            <div class="stat-item">')
            lines.append(f'                <div class="stat-number">{number}</div>')
            lines.append(f'                <div class="stat-label">{label}</div>')
            lines.append("            </div>")
        lines.append("        </div>")
        return "\n".join(lines)

    def render_document(self, tickets: list[Ticket]) -> str:
        """A complete standalone page."""
        return DOCUMENT_TEMPLATE.substitute(
            title=html.escape(self.title),
            updated=self._clock().strftime("%Y-%m-%d %H:%M:%S"),
            stats=self.render_stats(tickets),
            table=self.render_table_content(tickets),
        )

    def inject(
        self,
        existing: str,
        container_id: str,
        tickets: list[Ticket],
    ) -> Optional[str]:
        """
        Replace the tickets table content inside the container.

        Returns None when the container or its table cannot be found,
        or when the table holds a nested table. Only the span up to the
        container's own closing tag is searched for the table.
        """
        opening = re.search(
            r"<([a-zA-Z][\w-]*)\b[^>]*\bid\s*=\s*[\"']"
            + re.escape(container_id)
            + r"[\"'][^>]*>",
            existing,
            re.IGNORECASE,
        )
        if not opening:
            return None

        body_end = self._find_closing_tag(existing, opening.group(1), opening.end())
        if body_end is None:
            self.logger.warning(f"Container '{container_id}' is never closed, not patching")
            return None

        match = self.TABLE_PATTERN.search(existing, opening.end(), body_end)
        if not match:
            return None

        if re.search(r"<table\b", match.group(1), re.IGNORECASE):
            self.logger.warning(f"Nested table inside '{container_id}', not patching")
            return None

        content = self.render_table_content(tickets) + "\n        "
        return existing[:match.start(1)] + content + existing[match.end(1):]

    @staticmethod
    def _find_closing_tag(text: str, tag: str, start: int) -> Optional[int]:
        """Offset of the tag that closes an element opened just before start."""
        depth = 1
        for found in re.finditer(r"<(/?)" + re.escape(tag) + r"\b[^>]*>", text[start:], re.IGNORECASE):
            if found.group(0).endswith("/>"):
                continue
            depth += -1 if found.group(1) else 1
            if depth == 0:
                return start + found.start()
        return None
