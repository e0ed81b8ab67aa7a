from __future__ import annotations

from ..storage.mysql_store import KV_TABLE
from .connection import DatabaseConnection, db_config_from_dict
from .mysql_base import db_cursor

KV_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {KV_TABLE} (
    `key` VARCHAR(191) NOT NULL PRIMARY KEY,
    value LONGBLOB NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
) DEFAULT CHARSET=utf8mb4
"""


def ensure_database(db_config: dict) -> None:
    """Create the database (if missing) and the key/value table."""

    target = db_config_from_dict(db_config)
    server = DatabaseConnection(target)
    conn = server.connect(with_database=False)
    try:
        cur = conn.cursor()
        try:
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
                "DEFAULT CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )
            conn.commit()
        finally:
            cur.close()
    finally:
        conn.close()

    with db_cursor(server, dictionary=False) as (_, cur):
        cur.execute(KV_SCHEMA)


def list_tables(db_config: dict) -> list[str]:
    with db_cursor(DatabaseConnection(db_config_from_dict(db_config)), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [str(r[0]) for r in cur.fetchall()]
