from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Callable, Dict, List, Optional, TypeVar

from .connection import DatabaseConnection

Row = Dict[str, Any]
T = TypeVar("T")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back on any error."""
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


def first_row(cur, mapper: Optional[Callable[[Row], T]] = None):
    """The next row, passed through ``mapper`` when given. ``None`` when exhausted."""
    row = cur.fetchone()
    if not row:
        return None
    return mapper(row) if mapper else row


def all_rows(cur, mapper: Optional[Callable[[Row], T]] = None) -> List[Any]:
    rows = cur.fetchall() or []
    return [mapper(r) for r in rows] if mapper else list(rows)


def to_time(value: Any) -> Optional[time]:
    """Coerce a TIME column into ``datetime.time``.

    The pure-Python connector hands TIME back as a ``timedelta`` from
    midnight, the C extension as ``time``, and some drivers as ``'HH:MM[:SS]'``.
    """
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
    elif isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid TIME string: {value!r}")
        h, m, s = (parts + ["0"])[:3]
        seconds = int(h) * 3600 + int(m) * 60 + int(s or 0)
    else:
        raise TypeError(f"Unsupported TIME value: {value!r}")
    return time(seconds // 3600, seconds % 3600 // 60, seconds % 60)


def json_param(value: Optional[dict]) -> Optional[str]:
    return json.dumps(value) if value is not None else None


def json_value(value: Any) -> Optional[dict]:
    """Decode a JSON column. The connector may return ``str`` or ``bytes``."""
    if value is None or value == "" or value == b"":
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value)
    return value
