from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.constants import DATE_FORMAT
from ..core.exceptions import StoreUnavailable
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, rollback on error.

    Driver errors are re-raised as ``StoreUnavailable``.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise StoreUnavailable(f"database unavailable: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise StoreUnavailable(f"database error: {e}") from e
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


def normalize_mysql_date(value: Any) -> str:
    """DATE columns come back as ``datetime.date``; records carry ``YYYY-MM-DD``."""
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    return str(value)


def normalize_mysql_decimal(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)
