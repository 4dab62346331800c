"""
SQLite Ticket Store - Tickets persisted in a local SQLite database.

Every operation runs in its own transaction, so each row write is
atomic while a batch of writes is not.
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ...core.ports.ticket_store import (
    TicketStorePort,
    StoreError,
    DuplicateTicketError,
    TicketNotFoundError,
)
from ...core.domain.entities import Ticket, DEFAULT_TYPE, DEFAULT_PRIORITY


SCHEMA = f"""
CREATE TABLE IF NOT EXISTS Tickets (
    Id INTEGER PRIMARY KEY AUTOINCREMENT,
    Key TEXT NOT NULL UNIQUE,
    URL TEXT NOT NULL DEFAULT '',
    Summary TEXT NOT NULL,
    Status TEXT NOT NULL DEFAULT '',
    Type TEXT DEFAULT '{DEFAULT_TYPE}',
    Priority TEXT DEFAULT '{DEFAULT_PRIORITY}',
    CreatedDate TEXT NOT NULL
)
"""


class SqliteTicketStore(TicketStorePort):
    """Ticket store backed by a SQLite file (or ':memory:')."""

    def __init__(self, path: Union[str, Path] = "tickets.db"):
        self.path = str(path)
        self.logger = logging.getLogger("SqliteTicketStore")
        self._conn: Optional[sqlite3.Connection] = None

        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        with self.conn:
            self.conn.execute(SCHEMA)

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.path)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # -------------------------------------------------------------------------
    # TicketStorePort Implementation
    # -------------------------------------------------------------------------

    def load_all(self) -> list[Ticket]:
        try:
            rows = self.conn.execute(
                "SELECT Key, URL, Summary, Status, Type, Priority FROM Tickets ORDER BY Id DESC"
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot load tickets: {e}") from e
        return [self._row_to_ticket(row) for row in rows]

    def add(self, ticket: Ticket) -> None:
        try:
            with self.conn:
                self.conn.execute(
                    "INSERT INTO Tickets (Key, URL, Summary, Status, Type, Priority, CreatedDate) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        ticket.key,
                        ticket.url or "",
                        ticket.summary,
                        ticket.status or "",
                        ticket.type or DEFAULT_TYPE,
                        ticket.priority or DEFAULT_PRIORITY,
                        datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
                    ),
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateTicketError(f"Ticket {ticket.key} already exists", key=ticket.key) from e
        except sqlite3.Error as e:
            raise StoreError(f"Cannot add {ticket.key}: {e}", key=ticket.key) from e
        self.logger.debug(f"Added {ticket.key}")

    def update(self, ticket: Ticket) -> None:
        try:
            with self.conn:
                cursor = self.conn.execute(
                    "UPDATE Tickets SET URL = ?, Summary = ?, Status = ?, Type = ?, Priority = ? "
                    "WHERE Key = ?",
                    (
                        ticket.url or "",
                        ticket.summary,
                        ticket.status or "",
                        ticket.type or DEFAULT_TYPE,
                        ticket.priority or DEFAULT_PRIORITY,
                        ticket.key,
                    ),
                )
        except sqlite3.Error as e:
            raise StoreError(f"Cannot update {ticket.key}: {e}", key=ticket.key) from e

        if cursor.rowcount == 0:
            raise TicketNotFoundError(f"Ticket {ticket.key} not found", key=ticket.key)
        self.logger.debug(f"Updated {ticket.key}")

    def delete_by_key(self, key: str) -> bool:
        try:
            with self.conn:
                cursor = self.conn.execute("DELETE FROM Tickets WHERE Key = ?", (key,))
        except sqlite3.Error as e:
            raise StoreError(f"Cannot delete {key}: {e}", key=key) from e
        return cursor.rowcount > 0

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _row_to_ticket(self, row: sqlite3.Row) -> Ticket:
        return Ticket(
            key=row["Key"],
            url=row["URL"] or "",
            summary=row["Summary"],
            status=row["Status"] or "",
            type=row["Type"] or DEFAULT_TYPE,
            priority=row["Priority"] or DEFAULT_PRIORITY,
        )
