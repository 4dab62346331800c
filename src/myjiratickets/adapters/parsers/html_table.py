"""
HTML Table Parser - Read tickets back out of an HTML table.

A best-effort scraper for the table shape HtmlArtifactFormatter writes:
each <tr> with at least three <td> cells is read as key, summary and
status. It does not handle nested tables, broken markup or scripts.
"""

import html
import logging
import re

from ...core.ports.document_parser import DocumentParserPort
from ...core.domain.entities import Ticket


class HtmlTableParser(DocumentParserPort):
    """
    Parser for ticket rows in HTML.

    Expected row shape:
    <tr>
        <td><a href="URL">KEY</a></td>   (or plain KEY)
        <td>Summary</td>
        <td><span class="status-badge ...">Status</span></td>
    </tr>
    """

    ROW_PATTERN = re.compile(r"<tr\b[^>]*>.*?</tr>", re.DOTALL | re.IGNORECASE)
    CELL_PATTERN = re.compile(r"<td\b[^>]*>(.*?)</td>", re.DOTALL | re.IGNORECASE)
    LINK_PATTERN = re.compile(
        r"<a\b[^>]*\bhref\s*=\s*(?:\"(?P<dq>[^\"]*)\"|'(?P<sq>[^']*)')[^>]*>(?P<text>.*?)</a>",
        re.DOTALL | re.IGNORECASE,
    )
    TAG_PATTERN = re.compile(r"<[^>]*>")

    def __init__(self):
        self.logger = logging.getLogger("HtmlTableParser")

    @property
    def name(self) -> str:
        return "HTML"

    def parse_tickets(self, content: str) -> list[Ticket]:
        tickets = []
        rejected = 0

        for row in self.ROW_PATTERN.finditer(content):
            cells = self.CELL_PATTERN.findall(row.group(0))
            if len(cells) < 3:
                continue

            ticket = self._parse_row(cells[0], cells[1], cells[2])
            if ticket is None:
                rejected += 1
                continue
            tickets.append(ticket)

        if rejected:
            self.logger.debug(f"Rejected {rejected} rows without key or summary")
        self.logger.info(f"Parsed {len(tickets)} tickets from HTML")
        return tickets

    def _parse_row(self, key_cell: str, summary_cell: str, status_cell: str):
        link = self.LINK_PATTERN.search(key_cell)
        if link:
            key = self._text(link.group("text"))
            href = link.group("dq") if link.group("dq") is not None else link.group("sq")
            url = html.unescape(href).strip()
        else:
            key = self._text(key_cell)
            url = ""

        summary = self._text(summary_cell)
        status = self._text(status_cell)

        if not key or not summary:
            return None

        return Ticket(key=key, url=url, summary=summary, status=status)

    def _text(self, cell: str) -> str:
        """Strip markup, decode entities and trim."""
        return html.unescape(self.TAG_PATTERN.sub("", cell)).strip()
