from __future__ import annotations

from typing import Sequence

import mysql.connector

from ..common.logging_utils import get_logger
from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LoadedPunchLog, Punch, parse_punch_records
from .repository import PunchRepository

logger = get_logger("punches.mysql_repository")


class MySQLPunchRepository(PunchRepository):
    """Punch logs in the `punches` table, one row per punch.

    `position` keeps the stored order so a load returns the log as it was saved.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self, username: str) -> LoadedPunchLog:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT timestamp_ms, label
                    FROM punches
                    WHERE username=%s
                    ORDER BY position ASC
                    """,
                    (username,),
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise StorageError(f"Cannot read punches for {username}") from e

        loaded = parse_punch_records({"timestamp": r["timestamp_ms"], "label": r["label"]} for r in rows)
        for err in loaded.rejected:
            logger.warning("Dropped punch row for %s: %s", username, err)
        return loaded

    def save(self, username: str, punches: Sequence[Punch]) -> None:
        try:
            # Single transaction: db_cursor commits only if every statement succeeds.
            with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
                cur.execute("DELETE FROM punches WHERE username=%s", (username,))
                if punches:
                    cur.executemany(
                        """
                        INSERT INTO punches(username, position, timestamp_ms, label)
                        VALUES(%s,%s,%s,%s)
                        """,
                        [(username, i, int(p.timestamp), p.label.value) for i, p in enumerate(punches)],
                    )
        except mysql.connector.Error as e:
            raise StorageError(f"Cannot save punches for {username}") from e
