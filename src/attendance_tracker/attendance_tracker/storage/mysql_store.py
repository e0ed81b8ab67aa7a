from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_blob
from .gateway import KeyValueStore

KV_TABLE = "kv_store"


class MySQLKeyValueStore(KeyValueStore):
    """Key/value blobs kept in a single MySQL table (see database/bootstrap.py)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self, key: str) -> Optional[bytes]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT value FROM {KV_TABLE} WHERE `key`=%s", (key,))
            return fetch_blob(cur)

    def save(self, key: str, value: bytes) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {KV_TABLE}(`key`, value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE value=VALUES(value)
                """,
                (key, value),
            )

    def delete(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {KV_TABLE} WHERE `key`=%s", (key,))
