from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import DuplicateEntryError, PersistenceError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, rollback and translate driver errors."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise DuplicateEntryError(str(e)) from e
        raise PersistenceError(str(e)) from e
    except mysql.connector.Error as e:
        conn.rollback()
        raise PersistenceError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def upsert_sql(table: str, columns: Sequence[str], key_columns: Sequence[str]) -> str:
    """Build ``INSERT ... ON DUPLICATE KEY UPDATE`` overwriting every non-key column."""
    cols = ", ".join(columns)
    placeholders = ", ".join(["%s"] * len(columns))
    updates = ", ".join(f"{c}=VALUES({c})" for c in columns if c not in key_columns)
    return f"INSERT INTO {table}({cols}) VALUES({placeholders}) ON DUPLICATE KEY UPDATE {updates}"


def as_float(value: Any) -> float:
    return float(value) if value is not None else 0.0
