from __future__ import annotations

from ..common.logging_utils import get_logger
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall

logger = get_logger("database.bootstrap")

PUNCHES_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS punches (
    username VARCHAR(64) NOT NULL,
    position INT NOT NULL,
    timestamp_ms BIGINT NOT NULL,
    label VARCHAR(32) NOT NULL,
    PRIMARY KEY (username, position),
    INDEX idx_punches_user_ts (username, timestamp_ms)
)
"""


def ensure_schema(conn_factory: DatabaseConnection) -> None:
    """Create the punches table if missing (idempotent)."""
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute(PUNCHES_TABLE_DDL)
    logger.info("Schema ready on %s", conn_factory.config.database)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [str(r[0]) for r in fetchall(cur)]
