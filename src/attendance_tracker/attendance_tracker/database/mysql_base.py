from __future__ import annotations

from contextlib import contextmanager
from typing import Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (connection, cursor); commit on success, roll back on any error."""

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetch_blob(cur, column: str = "value") -> Optional[bytes]:
    """Read one blob column from the next row, or None when there is no row.

    Some connector builds hand TEXT/JSON columns back as str, so those are re-encoded.
    """

    row = cur.fetchone()
    if not row:
        return None
    value = row[column]
    if value is None:
        return None
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)
